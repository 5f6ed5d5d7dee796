# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagnostic entries produced by a compilation service."""

from __future__ import annotations

import enum
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class Kind(enum.Enum):
    """Severity of a diagnostic."""

    ERROR = "error"
    MANDATORY_WARNING = "mandatory-warning"
    WARNING = "warning"
    NOTE = "note"
    OTHER = "other"


@dataclass(frozen=True)
class Diagnostic:
    """A single message emitted by the compilation service.

    Attributes:
        kind: Severity of the diagnostic.
        message: Human-readable message text.
        source: Path of the originating compilation unit, exactly as it was
            handed to the service, or ``None`` for diagnostics that are not
            tied to a source file.
        line: 1-based line number within *source*, if known.
        column: 1-based column number within *source*, if known.
    """

    kind: Kind
    message: str
    source: str | None = None
    line: int | None = None
    column: int | None = None

    @property
    def location(self) -> str | None:
        """Return ``source[:line[:column]]`` or ``None`` without a source."""
        if self.source is None:
            return None
        parts = [self.source]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)
