# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagnostic model, filtering and console reporting."""

from trackc.diagnostics.filters import (
    DiagnosticFilter,
    combine,
    guarded,
    ignore_messages_matching,
    ignore_path_prefixes,
    is_warning,
)
from trackc.diagnostics.model import Diagnostic, Kind
from trackc.diagnostics.reporter import ConsoleReporter, ConsoleSession

__all__ = [
    "ConsoleReporter",
    "ConsoleSession",
    "Diagnostic",
    "DiagnosticFilter",
    "Kind",
    "combine",
    "guarded",
    "ignore_messages_matching",
    "ignore_path_prefixes",
    "is_warning",
]
