# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for composable diagnostic filters."""

import re

import pytest

from trackc.diagnostics.filters import (
    combine,
    guarded,
    ignore_messages_matching,
    ignore_path_prefixes,
    is_warning,
)
from trackc.diagnostics.model import Diagnostic, Kind

# ###############
# Helpers
# ###############


def _diag(kind: Kind = Kind.WARNING, message: str = "msg", source: str | None = "src/a.py") -> Diagnostic:
    return Diagnostic(kind=kind, message=message, source=source, line=3)


ALL_KINDS = list(Kind)

# ###############
# Path prefixes
# ###############


def test_path_prefix_suppresses_matching_source() -> None:
    f = ignore_path_prefixes(["gen/", "vendor/"])
    assert f(_diag(source="gen/a.py"))
    assert f(_diag(source="vendor/lib/b.py"))


def test_path_prefix_keeps_non_matching_source() -> None:
    f = ignore_path_prefixes(["gen/"])
    assert not f(_diag(source="src/gen/a.py"))


def test_path_prefix_is_plain_string_comparison() -> None:
    """A trailing separator is significant; no path normalization happens."""
    assert ignore_path_prefixes(["gen"])(_diag(source="generated/a.py"))
    assert not ignore_path_prefixes(["gen/"])(_diag(source="generated/a.py"))
    assert not ignore_path_prefixes(["./gen/"])(_diag(source="gen/a.py"))


def test_path_prefix_ignores_diagnostics_without_source() -> None:
    assert not ignore_path_prefixes(["gen/"])(_diag(source=None))


def test_path_prefix_with_no_prefixes_suppresses_nothing() -> None:
    assert not ignore_path_prefixes([])(_diag())


# ###############
# Message regexes
# ###############


def test_message_regex_uses_search_semantics() -> None:
    f = ignore_messages_matching([re.compile("TODO")])
    assert f(_diag(message="found a TODO here"))
    assert not f(_diag(message="all done"))


def test_message_regex_any_pattern_matches() -> None:
    f = ignore_messages_matching([re.compile("^deprecated"), re.compile(r"unused \w+$")])
    assert f(_diag(message="deprecated api"))
    assert f(_diag(message="unused variable"))
    assert not f(_diag(message="not deprecated"))


# ###############
# Composition
# ###############


def test_combine_empty_suppresses_nothing() -> None:
    f = combine([])
    for kind in ALL_KINDS:
        assert not f(_diag(kind=kind))


def test_combine_is_union_of_constituents() -> None:
    a = ignore_path_prefixes(["gen/"])
    b = ignore_messages_matching([re.compile("TODO")])
    both = combine([a, b])
    samples = [
        _diag(source="gen/x.py", message="ok"),
        _diag(source="src/x.py", message="a TODO"),
        _diag(source="gen/x.py", message="a TODO"),
        _diag(source="src/x.py", message="ok"),
    ]
    for d in samples:
        assert both(d) == (a(d) or b(d))


def test_guarded_applies_only_where_guard_permits() -> None:
    f = guarded(ignore_path_prefixes(["gen/"]), is_warning)
    assert f(_diag(kind=Kind.WARNING, source="gen/a.py"))
    assert not f(_diag(kind=Kind.ERROR, source="gen/a.py"))
    assert not f(_diag(kind=Kind.NOTE, source="gen/a.py"))


@pytest.mark.parametrize("kind", [Kind.ERROR, Kind.MANDATORY_WARNING])
def test_warning_guard_never_hides_errors_or_mandatory_warnings(kind: Kind) -> None:
    everything = combine([ignore_path_prefixes(["src/"]), ignore_messages_matching([re.compile(".*")])])
    f = guarded(everything, is_warning)
    assert not f(_diag(kind=kind, source="src/a.py", message="anything"))


def test_is_warning_only_accepts_plain_warnings() -> None:
    assert is_warning(_diag(kind=Kind.WARNING))
    for kind in ALL_KINDS:
        if kind is not Kind.WARNING:
            assert not is_warning(_diag(kind=kind))
