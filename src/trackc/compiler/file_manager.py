# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""File managers that place compiled artifacts and track where they came from.

:class:`StandardFileManager` maps artifact names onto an output root.
:class:`DependencyTrackingFileManager` wraps any file manager and records one
``source -> artifact`` entry per created artifact; on close it writes those
entries to a dependency file, one per line, in creation order::

    src/pkg/mod.py -> pkg/mod.pyc

Artifact paths are relative to the output root of the wrapped file manager.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from trackc.compiler.service import UNSUPPORTED_OPTION, FileManager, OutputFile

# ###############
# Public Interface
# ###############

OUTPUT_DIRECTORY_OPTION = "-d"
SOURCE_PATH_OPTION = "-sourcepath"


class DependencyWriteError(OSError):
    """Raised when the dependency file cannot be written."""


class UnrootedSourceError(ValueError):
    """Raised when a unit lies outside every source root and the working directory."""


class FileOutput:
    """An artifact location on disk, tied to the unit that produced it."""

    def __init__(self, path: Path, source: str | None) -> None:
        self._path = path
        self._source = source

    @property
    def path(self) -> Path:
        return self._path

    @property
    def source(self) -> str | None:
        return self._source

    def write_bytes(self, data: bytes) -> None:
        """Write *data* to the artifact, creating parent directories as needed."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_bytes(data)

    def __repr__(self) -> str:
        return f"FileOutput(path={str(self._path)!r}, source={self._source!r})"


class StandardFileManager:
    """Places artifacts below an output root.

    Supported options:

    * ``-d <dir>``: the output root (default: the current directory).
    * ``-sourcepath <roots>``: source roots separated by :data:`os.pathsep`.
      A unit below one of these roots gets an artifact name relative to that
      root, e.g. ``src/pkg/mod.py`` becomes ``pkg/mod`` for root ``src``.
    """

    _OPTION_ARITY: dict[str, int] = {
        OUTPUT_DIRECTORY_OPTION: 1,
        SOURCE_PATH_OPTION: 1,
    }

    def __init__(self, output_root: Path | None = None, source_roots: list[Path] | None = None) -> None:
        self._output_root = (output_root if output_root is not None else Path(".")).absolute()
        self._source_roots = [_normalized(root) for root in (source_roots or [])]
        self._closed = False

    @property
    def output_root(self) -> Path:
        return self._output_root

    @property
    def source_roots(self) -> list[Path]:
        return list(self._source_roots)

    @property
    def closed(self) -> bool:
        return self._closed

    def is_supported_option(self, option: str) -> int:
        return self._OPTION_ARITY.get(option, UNSUPPORTED_OPTION)

    def handle_option(self, option: str, values: list[str]) -> None:
        """Apply a file manager option forwarded by the compilation service.

        Raises:
            ValueError: If *option* is unknown or has the wrong number of values.
        """
        arity = self.is_supported_option(option)
        if arity == UNSUPPORTED_OPTION:
            raise ValueError(f"Unsupported file manager option '{option}'")
        if len(values) != arity:
            raise ValueError(f"Option '{option}' expects {arity} value(s), got {len(values)}")
        if option == OUTPUT_DIRECTORY_OPTION:
            self._output_root = Path(values[0]).absolute()
        elif option == SOURCE_PATH_OPTION:
            self._source_roots = [_normalized(Path(p)) for p in values[0].split(os.pathsep) if p]

    def relative_name(self, unit: str) -> str:
        """Return the ``/``-separated artifact stem for compilation unit *unit*.

        The stem is relative to the first source root containing *unit*, or to
        the working directory when no source root does.

        Raises:
            UnrootedSourceError: If *unit* is under neither, so its artifact
                would land outside the output root or collide with another.
        """
        absolute = _normalized(Path(unit))
        for root in [*self._source_roots, _normalized(Path.cwd())]:
            try:
                return absolute.relative_to(root).with_suffix("").as_posix()
            except ValueError:
                continue
        raise UnrootedSourceError(f"Source file '{unit}' is not under any source root or the working directory")

    def get_output_file(self, name: str, source: str | None) -> OutputFile:
        """Return the output for the artifact *name* (relative to the output root)."""
        return FileOutput(self._output_root / name, source)

    def close(self) -> None:
        self._closed = True


class DependencyTrackingFileManager:
    """Forwards to a wrapped file manager and records every created artifact.

    Only :meth:`get_output_file` and :meth:`close` add behaviour; everything
    else is delegated unchanged.  The artifact itself is never altered.
    """

    def __init__(self, delegate: FileManager, dependency_file: Path) -> None:
        self._delegate = delegate
        self._dependency_file = dependency_file
        self._lock = threading.Lock()
        self._records: list[tuple[str, str]] = []
        self._closed = False

    @property
    def delegate(self) -> FileManager:
        return self._delegate

    @property
    def dependency_file(self) -> Path:
        return self._dependency_file

    @property
    def records(self) -> list[tuple[str, str]]:
        """Recorded ``(source, artifact)`` pairs in creation order."""
        with self._lock:
            return list(self._records)

    @property
    def output_root(self) -> Path:
        return self._delegate.output_root

    def is_supported_option(self, option: str) -> int:
        return self._delegate.is_supported_option(option)

    def handle_option(self, option: str, values: list[str]) -> None:
        self._delegate.handle_option(option, values)

    def relative_name(self, unit: str) -> str:
        return self._delegate.relative_name(unit)

    def get_output_file(self, name: str, source: str | None) -> OutputFile:
        output = self._delegate.get_output_file(name, source)
        if source is not None:
            # Normalize now; the output root or working directory may change later.
            artifact = _relative_to(output.path, self._delegate.output_root)
            with self._lock:
                self._records.append((source, artifact))
        return output

    def close(self) -> None:
        """Close the wrapped file manager, then write the dependency file.

        Raises:
            DependencyWriteError: If the dependency file cannot be written.
        """
        if self._closed:
            return
        self._closed = True
        self._delegate.close()
        write_dependency_file(self._dependency_file, self.records)


def write_dependency_file(path: Path, records: list[tuple[str, str]]) -> None:
    """Write *records* to *path* as ``source -> artifact`` lines (UTF-8).

    Raises:
        DependencyWriteError: If the file cannot be written.
    """
    content = "".join(f"{source} -> {artifact}\n" for source, artifact in records)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise DependencyWriteError(f"Cannot write dependency file '{path}': {exc}") from exc


def read_dependency_file(path: Path) -> list[tuple[str, str]]:
    """Parse a dependency file written by :func:`write_dependency_file`.

    Raises:
        ValueError: If a non-empty line lacks the ``->`` separator.
    """
    records: list[tuple[str, str]] = []
    for number, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if not line:
            continue
        source, sep, artifact = line.partition(" -> ")
        if not sep:
            raise ValueError(f"{path}:{number}: malformed dependency line {line!r}")
        records.append((source, artifact))
    return records


# ################
# Implementation
# ################


def _normalized(path: Path) -> Path:
    """Return *path* made absolute with ``.`` and ``..`` segments collapsed."""
    return Path(os.path.abspath(path))


def _relative_to(path: Path, root: Path) -> str:
    """Return *path* relative to *root* with ``/`` separators."""
    absolute = path.absolute()
    try:
        return absolute.relative_to(root.absolute()).as_posix()
    except ValueError:
        return Path(os.path.relpath(absolute, root.absolute())).as_posix()
