# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""File managers and the default Python bytecode service."""

from trackc.compiler.file_manager import (
    DependencyTrackingFileManager,
    DependencyWriteError,
    FileOutput,
    StandardFileManager,
    UnrootedSourceError,
    read_dependency_file,
    write_dependency_file,
)
from trackc.compiler.pycompile import PythonCompiler
from trackc.compiler.service import (
    UNSUPPORTED_OPTION,
    CompilationService,
    CompilationTask,
    DiagnosticListener,
    FileManager,
    OutputFile,
)

__all__ = [
    "UNSUPPORTED_OPTION",
    "CompilationService",
    "CompilationTask",
    "DependencyTrackingFileManager",
    "DependencyWriteError",
    "DiagnosticListener",
    "FileManager",
    "FileOutput",
    "OutputFile",
    "PythonCompiler",
    "StandardFileManager",
    "UnrootedSourceError",
    "read_dependency_file",
    "write_dependency_file",
]
