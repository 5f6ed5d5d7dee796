# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Console reporter that filters and renders diagnostics.

The reporter itself only holds configuration (output stream and filter).  All
console state lives in a :class:`ConsoleSession` returned by
:meth:`ConsoleReporter.prepare`; the session is the diagnostic sink handed to
the compilation service and must be released exactly once, which the
context-manager protocol guarantees.
"""

from __future__ import annotations

import sys
import threading
from types import TracebackType
from typing import TextIO

from yachalk import chalk
from yachalk.types import ColorMode

from trackc.diagnostics.filters import DiagnosticFilter
from trackc.diagnostics.model import Diagnostic, Kind

# ###############
# Public Interface
# ###############


class ConsoleReporter:
    """Renders diagnostics to a text stream, skipping suppressed ones."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._filter: DiagnosticFilter | None = None

    @property
    def filter(self) -> DiagnosticFilter | None:
        return self._filter

    def set_filter(self, diagnostic_filter: DiagnosticFilter | None) -> None:
        """Install the suppression filter; ``None`` suppresses nothing."""
        self._filter = diagnostic_filter

    def prepare(self, color: bool) -> ConsoleSession:
        """Start a console session, styling output only when *color* is set."""
        stream = self._stream if self._stream is not None else sys.stderr
        return ConsoleSession(stream, self._filter, color)


class ConsoleSession:
    """An active reporting session.

    While active, the global ``yachalk`` color mode is pinned to the requested
    setting; :meth:`release` restores whatever mode was in effect before.

    Attributes:
        reported: Number of diagnostics written to the stream.
        suppressed: Number of diagnostics dropped by the filter.
    """

    def __init__(self, stream: TextIO, diagnostic_filter: DiagnosticFilter | None, color: bool) -> None:
        self._stream = stream
        self._filter = diagnostic_filter
        self._color = color
        self._lock = threading.Lock()
        self._previous_mode: ColorMode | None = chalk.get_color_mode()
        chalk.set_color_mode(ColorMode.Basic16 if color else ColorMode.AllOff)
        self._active = True
        self.reported = 0
        self.suppressed = 0

    @property
    def color(self) -> bool:
        return self._color

    @property
    def active(self) -> bool:
        return self._active

    def report(self, diagnostic: Diagnostic) -> None:
        """Print *diagnostic* unless the installed filter suppresses it."""
        with self._lock:
            if self._filter is not None and self._filter(diagnostic):
                self.suppressed += 1
                return
            print(self._render(diagnostic), file=self._stream, flush=True)
            self.reported += 1

    def release(self) -> None:
        """End the session and restore the previous color mode.  Idempotent."""
        with self._lock:
            if not self._active:
                return
            self._active = False
            if self._previous_mode is not None:
                chalk.set_color_mode(self._previous_mode)
                self._previous_mode = None

    def __enter__(self) -> ConsoleSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def _render(self, diagnostic: Diagnostic) -> str:
        parts = [diagnostic.location, _LABELS[diagnostic.kind], diagnostic.message]
        text = ": ".join(part for part in parts if part)
        if not self._color:
            return text
        if diagnostic.kind is Kind.ERROR:
            return chalk.red.bold(text)
        if diagnostic.kind in (Kind.WARNING, Kind.MANDATORY_WARNING):
            return chalk.yellow(text)
        if diagnostic.kind is Kind.NOTE:
            return chalk.blue(text)
        return text


# ################
# Implementation
# ################

_LABELS: dict[Kind, str] = {
    Kind.ERROR: "error",
    Kind.MANDATORY_WARNING: "warning",
    Kind.WARNING: "warning",
    Kind.NOTE: "note",
    Kind.OTHER: "",
}
