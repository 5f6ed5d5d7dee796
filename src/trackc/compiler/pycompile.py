# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Default compilation service: Python source to CPython bytecode.

Each compilation unit is compiled with :func:`compile` and written as a
``.pyc`` file (PEP 552 header followed by the marshalled code object) through
the file manager supplied to the task.  Warnings raised by the compiler are
turned into diagnostics:

* :class:`SyntaxWarning` becomes a ``WARNING``.
* :class:`DeprecationWarning` becomes a ``MANDATORY_WARNING``.

Code generation is all-or-nothing: when any unit fails, or a unit has no
artifact name of its own below the output root, nothing is written.
"""

from __future__ import annotations

import importlib.util
import io
import marshal
import tokenize
import warnings
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from types import CodeType

from trackc.compiler.file_manager import StandardFileManager
from trackc.compiler.service import UNSUPPORTED_OPTION, DiagnosticListener, FileManager
from trackc.diagnostics.model import Diagnostic, Kind

# ###############
# Public Interface
# ###############

BYTECODE_SUFFIX = ".pyc"

INVALIDATION_MODES = ("timestamp", "checked-hash", "unchecked-hash")


@dataclass
class CompileOptions:
    """Service-level options collected from the pass-through flags."""

    optimize: int = 0
    encoding: str | None = None
    invalidation: str = "timestamp"
    warnings_as_errors: bool = False
    nowarn: bool = False
    verbose: bool = False


class PythonCompiler:
    """Compiles Python sources to bytecode files."""

    _OPTION_ARITY: dict[str, int] = {
        "-O": 0,
        "-OO": 0,
        "-encoding": 1,
        "-invalidation": 1,
        "-Werror": 0,
        "-nowarn": 0,
        "-verbose": 0,
    }

    def is_supported_option(self, option: str) -> int:
        return self._OPTION_ARITY.get(option, UNSUPPORTED_OPTION)

    def get_standard_file_manager(self) -> StandardFileManager:
        return StandardFileManager()

    def get_task(
        self,
        options: list[str],
        units: list[str],
        diagnostic_listener: DiagnosticListener,
        file_manager: FileManager,
    ) -> PythonCompilationTask:
        """Create a task for *units*.

        Options the file manager understands are applied to it here; all
        others must be service options.

        Raises:
            ValueError: If an option is unknown, lacks values, or has an
                invalid value.
        """
        compile_options = CompileOptions()
        tokens = iter(options)
        for option in tokens:
            arity = self.is_supported_option(option)
            if arity != UNSUPPORTED_OPTION:
                values = _take(tokens, option, arity)
                _apply_option(compile_options, option, values)
                continue
            arity = file_manager.is_supported_option(option)
            if arity == UNSUPPORTED_OPTION:
                raise ValueError(f"Unsupported option '{option}'")
            file_manager.handle_option(option, _take(tokens, option, arity))
        return PythonCompilationTask(compile_options, list(units), diagnostic_listener, file_manager)


class PythonCompilationTask:
    """A single run of :class:`PythonCompiler` over a fixed set of units."""

    def __init__(
        self,
        options: CompileOptions,
        units: list[str],
        diagnostic_listener: DiagnosticListener,
        file_manager: FileManager,
    ) -> None:
        self._options = options
        self._units = units
        self._listener = diagnostic_listener
        self._file_manager = file_manager
        self._called = False

    @property
    def options(self) -> CompileOptions:
        return self._options

    def call(self) -> bool:
        """Compile all units and write their artifacts.

        Returns:
            True if every unit compiled without errors.

        Raises:
            RuntimeError: If the task has already been called.
        """
        if self._called:
            raise RuntimeError("Compilation task may only be called once")
        self._called = True

        compiled: list[tuple[str, bytes, CodeType]] = []
        failed = False
        for unit in self._units:
            result = self._compile_unit(unit)
            if result is None:
                failed = True
            else:
                compiled.append((unit, *result))

        if failed:
            return False

        names = self._artifact_names([unit for unit, _, _ in compiled])
        if names is None:
            return False

        for (unit, source_bytes, code), name in zip(compiled, names, strict=True):
            output = self._file_manager.get_output_file(name, unit)
            output.write_bytes(_pyc_bytes(code, source_bytes, Path(unit), self._options.invalidation))
            if self._options.verbose:
                self._listener.report(Diagnostic(Kind.NOTE, f"wrote {output.path}"))
        return True

    def _artifact_names(self, units: list[str]) -> list[str] | None:
        """Resolve every artifact name up front; ``None`` if any unit cannot be placed."""
        names: list[str] = []
        owners: dict[str, str] = {}
        failed = False
        for unit in units:
            try:
                name = self._file_manager.relative_name(unit) + BYTECODE_SUFFIX
            except ValueError as exc:
                self._listener.report(Diagnostic(Kind.ERROR, str(exc), unit))
                failed = True
                continue
            if name in owners:
                self._listener.report(
                    Diagnostic(Kind.ERROR, f"artifact '{name}' is also produced by '{owners[name]}'", unit)
                )
                failed = True
                continue
            owners[name] = unit
            names.append(name)
        return None if failed else names

    def _compile_unit(self, unit: str) -> tuple[bytes, CodeType] | None:
        """Compile one unit, reporting its diagnostics; ``None`` on error."""
        try:
            source_bytes = Path(unit).read_bytes()
        except OSError as exc:
            self._listener.report(Diagnostic(Kind.ERROR, f"cannot read source file: {exc.strerror or exc}", unit))
            return None

        try:
            source = self._decode(source_bytes)
        except (SyntaxError, UnicodeDecodeError, LookupError) as exc:
            self._listener.report(Diagnostic(Kind.ERROR, f"cannot decode source file: {exc}", unit))
            return None

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            try:
                code = compile(source, unit, "exec", dont_inherit=True, optimize=self._options.optimize)
            except SyntaxError as exc:
                self._report_caught(unit, caught)
                self._listener.report(
                    Diagnostic(Kind.ERROR, exc.msg, unit, exc.lineno, exc.offset)
                )
                return None
            except ValueError as exc:
                self._report_caught(unit, caught)
                self._listener.report(Diagnostic(Kind.ERROR, str(exc), unit))
                return None
        errors = self._report_caught(unit, caught)
        if errors:
            return None
        return source_bytes, code

    def _decode(self, source_bytes: bytes) -> str:
        if self._options.encoding is not None:
            return source_bytes.decode(self._options.encoding)
        encoding, _ = tokenize.detect_encoding(io.BytesIO(source_bytes).readline)
        return source_bytes.decode(encoding)

    def _report_caught(self, unit: str, caught: list[warnings.WarningMessage]) -> int:
        """Report recorded compiler warnings; return how many became errors."""
        errors = 0
        for warning in caught:
            if issubclass(warning.category, DeprecationWarning):
                kind = Kind.MANDATORY_WARNING
            else:
                kind = Kind.WARNING
            if self._options.warnings_as_errors:
                kind = Kind.ERROR
                errors += 1
            elif kind is Kind.WARNING and self._options.nowarn:
                continue
            self._listener.report(Diagnostic(kind, str(warning.message), unit, warning.lineno))
        return errors


# ################
# Implementation
# ################


def _take(tokens: Iterator[str], option: str, arity: int) -> list[str]:
    values: list[str] = []
    for _ in range(arity):
        try:
            values.append(next(tokens))
        except StopIteration:
            raise ValueError(f"Option '{option}' expects {arity} value(s)") from None
    return values


def _apply_option(options: CompileOptions, option: str, values: list[str]) -> None:
    if option == "-O":
        options.optimize = max(options.optimize, 1)
    elif option == "-OO":
        options.optimize = 2
    elif option == "-encoding":
        options.encoding = values[0]
    elif option == "-invalidation":
        if values[0] not in INVALIDATION_MODES:
            expected = ", ".join(INVALIDATION_MODES)
            raise ValueError(f"Invalid invalidation mode '{values[0]}', expected one of {expected}")
        options.invalidation = values[0]
    elif option == "-Werror":
        options.warnings_as_errors = True
    elif option == "-nowarn":
        options.nowarn = True
    elif option == "-verbose":
        options.verbose = True


def _pyc_bytes(code: CodeType, source_bytes: bytes, source_path: Path, invalidation: str) -> bytes:
    """Return a PEP 552 ``.pyc`` image for *code*."""
    data = bytearray(importlib.util.MAGIC_NUMBER)
    if invalidation == "timestamp":
        stat = source_path.stat()
        data.extend((0).to_bytes(4, "little"))
        data.extend((int(stat.st_mtime) & 0xFFFFFFFF).to_bytes(4, "little"))
        data.extend((stat.st_size & 0xFFFFFFFF).to_bytes(4, "little"))
    else:
        flags = 0b01 | (0b10 if invalidation == "checked-hash" else 0)
        data.extend(flags.to_bytes(4, "little"))
        data.extend(importlib.util.source_hash(source_bytes))
    data.extend(marshal.dumps(code))
    return bytes(data)
