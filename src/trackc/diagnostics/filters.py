# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Composable diagnostic filters.

A filter is a plain callable that receives a :class:`Diagnostic` and returns
``True`` when the diagnostic should be suppressed.  Filters hold no state
beyond what they capture at construction time, so they can be shared freely
and composed with :func:`guarded` and :func:`combine`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from trackc.diagnostics.model import Diagnostic, Kind

# ###############
# Public Interface
# ###############

DiagnosticFilter = Callable[[Diagnostic], bool]
Guard = Callable[[Diagnostic], bool]


def is_warning(diagnostic: Diagnostic) -> bool:
    """Return True for plain warnings.

    Errors and mandatory warnings never pass this guard, so operator
    configured suppression can not hide them.
    """
    return diagnostic.kind is Kind.WARNING


def ignore_path_prefixes(prefixes: Iterable[str]) -> DiagnosticFilter:
    """Suppress diagnostics whose source path starts with any of *prefixes*.

    The comparison is a plain string prefix test; trailing separators are
    significant.  Diagnostics without a source are never suppressed.
    """
    prefix_tuple = tuple(prefixes)

    def _filter(diagnostic: Diagnostic) -> bool:
        if diagnostic.source is None or not prefix_tuple:
            return False
        return diagnostic.source.startswith(prefix_tuple)

    return _filter


def ignore_messages_matching(patterns: Iterable[re.Pattern[str]]) -> DiagnosticFilter:
    """Suppress diagnostics whose message contains a match for any of *patterns*."""
    pattern_list = list(patterns)

    def _filter(diagnostic: Diagnostic) -> bool:
        return any(pattern.search(diagnostic.message) for pattern in pattern_list)

    return _filter


def guarded(diagnostic_filter: DiagnosticFilter, guard: Guard) -> DiagnosticFilter:
    """Apply *diagnostic_filter* only to diagnostics that *guard* permits."""

    def _filter(diagnostic: Diagnostic) -> bool:
        return guard(diagnostic) and diagnostic_filter(diagnostic)

    return _filter


def combine(filters: Iterable[DiagnosticFilter]) -> DiagnosticFilter:
    """Suppress a diagnostic if any of *filters* would suppress it.

    Combining an empty collection yields a filter that suppresses nothing.
    """
    filter_list = list(filters)

    def _filter(diagnostic: Diagnostic) -> bool:
        return any(f(diagnostic) for f in filter_list)

    return _filter
