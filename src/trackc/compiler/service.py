# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Collaborator interfaces between the driver and a compilation service.

The compilation service is opaque: trackc only asks it how many arguments an
option takes and hands it a task to run.  Artifacts flow back through a
:class:`FileManager` and diagnostics through a :class:`DiagnosticListener`,
which is where the dependency tracker and the console reporter hook in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from trackc.diagnostics.model import Diagnostic

# ###############
# Public Interface
# ###############

UNSUPPORTED_OPTION = -1
"""Option arity returned for flags a collaborator does not recognize."""


class DiagnosticListener(Protocol):
    def report(self, diagnostic: Diagnostic) -> None: ...


class OutputFile(Protocol):
    """A writable artifact handed out by a file manager."""

    @property
    def path(self) -> Path: ...

    @property
    def source(self) -> str | None: ...

    def write_bytes(self, data: bytes) -> None: ...


class FileManager(Protocol):
    """Resolves and creates the artifacts a compilation service produces."""

    @property
    def output_root(self) -> Path: ...

    def is_supported_option(self, option: str) -> int: ...

    def handle_option(self, option: str, values: list[str]) -> None: ...

    def relative_name(self, unit: str) -> str:
        """Return the artifact stem for *unit*; raise ``ValueError`` if it cannot be placed."""
        ...

    def get_output_file(self, name: str, source: str | None) -> OutputFile: ...

    def close(self) -> None: ...


class CompilationTask(Protocol):
    def call(self) -> bool: ...


class CompilationService(Protocol):
    """An external compiler driven by trackc."""

    def is_supported_option(self, option: str) -> int: ...

    def get_standard_file_manager(self) -> FileManager: ...

    def get_task(
        self,
        options: list[str],
        units: list[str],
        diagnostic_listener: DiagnosticListener,
        file_manager: FileManager,
    ) -> CompilationTask: ...
