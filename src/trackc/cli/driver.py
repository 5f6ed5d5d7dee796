# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Drives one compilation: arguments, reporter, file manager, service."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TextIO

from trackc.cli.args import ArgumentError, parse_args
from trackc.compiler.file_manager import DependencyTrackingFileManager
from trackc.compiler.pycompile import PythonCompiler
from trackc.compiler.service import CompilationService, FileManager
from trackc.diagnostics.reporter import ConsoleReporter

# ###############
# Public Interface
# ###############


def compile_sources(
    args: Sequence[str],
    compiler: CompilationService | None = None,
    *,
    stream: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Compile with *compiler*, tracking generated artifacts per source file.

    Args:
        args: Command-line tokens (trackc flags, pass-through options and
            compilation-unit paths).
        compiler: The compilation service; defaults to :class:`PythonCompiler`.
        stream: Where diagnostics are printed (default: stderr).
        err: Where argument errors and warnings are printed (default: stderr).

    Returns:
        0 if compilation succeeded, 1 on compilation failure or bad arguments.

    Raises:
        DependencyWriteError: If the dependency file cannot be written.
    """
    err_stream = err if err is not None else sys.stderr
    if compiler is None:
        compiler = PythonCompiler()
    standard_file_manager = compiler.get_standard_file_manager()

    try:
        parsed = parse_args(args, compiler, standard_file_manager, err=err_stream)
    except ArgumentError as exc:
        print(f"Error: {exc}", file=err_stream)
        return 1

    reporter = ConsoleReporter(stream)
    reporter.set_filter(parsed.diagnostic_filter)

    with reporter.prepare(parsed.color) as session:
        file_manager: FileManager = standard_file_manager
        if parsed.dependency_file is not None:
            file_manager = DependencyTrackingFileManager(standard_file_manager, parsed.dependency_file)

        try:
            try:
                task = compiler.get_task(
                    list(parsed.options),
                    list(parsed.compilation_units),
                    session,
                    file_manager,
                )
            except ValueError as exc:
                print(f"Error: {exc}", file=err_stream)
                return 1
            success = task.call()
            return 0 if success else 1
        finally:
            file_manager.close()
