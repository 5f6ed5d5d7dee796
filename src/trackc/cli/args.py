# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Argument routing for the trackc command line.

The raw token list is partitioned in a single left-to-right pass into trackc
flags, options forwarded to the compilation service (or its file manager),
and compilation-unit paths.  Pass-through options are never interpreted here;
the collaborators are only asked how many values each one consumes.
"""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from trackc.compiler.service import UNSUPPORTED_OPTION, CompilationService, FileManager
from trackc.diagnostics.filters import (
    DiagnosticFilter,
    combine,
    guarded,
    ignore_messages_matching,
    ignore_path_prefixes,
    is_warning,
)

# ###############
# Public Interface
# ###############

DEPENDENCYFILE_FLAG = "-Tdependencyfile"
COLOR_FLAG = "-Tcolor"
WARN_IGNORE_PATH_PREFIXES = "-Tnowarnprefixes"
WARN_IGNORE_MESSAGE_REGEX = "-Tnowarnregex"

FLAG_PREFIX = "-"


class ArgumentError(ValueError):
    """Raised when a flag is malformed or lacks a required value."""


@dataclass(frozen=True)
class ParsedArgs:
    """The outcome of routing a command line.

    Attributes:
        options: Pass-through options with their values, in command-line order.
        compilation_units: Source paths to compile, in command-line order.
        dependency_file: Where to write the dependency file, if requested.
        color: Whether diagnostics are styled with ANSI colors.
        diagnostic_filter: Combined warning suppression filter, or ``None``
            when no suppression was configured.
    """

    options: tuple[str, ...]
    compilation_units: tuple[str, ...]
    dependency_file: Path | None = None
    color: bool = False
    diagnostic_filter: DiagnosticFilter | None = None


def parse_args(
    args: Sequence[str],
    compiler: CompilationService,
    file_manager: FileManager,
    *,
    err: TextIO | None = None,
) -> ParsedArgs:
    """Route *args* between trackc, the compilation service and source paths.

    Unsupported flags are skipped with a warning on *err* (default: stderr).

    Raises:
        ArgumentError: If a flag is missing a required value or a message
            regex does not compile.
    """
    err_stream = err if err is not None else sys.stderr
    options: list[str] = []
    units: list[str] = []
    dependency_file: Path | None = None
    color = False
    path_prefixes: list[str] = []
    message_regexes: list[re.Pattern[str]] = []

    tokens = iter(args)
    for arg in tokens:
        if arg == DEPENDENCYFILE_FLAG:
            dependency_file = Path(_require_value(tokens, arg, "the output path"))
        elif arg == COLOR_FLAG:
            color = True
        elif arg == WARN_IGNORE_PATH_PREFIXES:
            value = _require_value(tokens, arg, "path prefixes to ignore")
            path_prefixes.extend(p for p in value.split(os.pathsep) if p)
        elif arg == WARN_IGNORE_MESSAGE_REGEX:
            message_regexes.append(_parse_regex(_require_value(tokens, arg, "a warning message regex")))
        elif arg.startswith(FLAG_PREFIX):
            _route_pass_through(arg, tokens, compiler, file_manager, options, err_stream)
        else:
            units.append(arg)

    return ParsedArgs(
        options=tuple(options),
        compilation_units=tuple(units),
        dependency_file=dependency_file,
        color=color,
        diagnostic_filter=_build_filter(path_prefixes, message_regexes),
    )


# ################
# Implementation
# ################


def _require_value(tokens: Iterator[str], flag: str, what: str) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise ArgumentError(f"{flag} requires an argument specifying {what}") from None


def _parse_regex(source: str) -> re.Pattern[str]:
    try:
        return re.compile(source)
    except re.error as exc:
        raise ArgumentError(f"{WARN_IGNORE_MESSAGE_REGEX}: invalid regex '{source}': {exc}") from exc


def _route_pass_through(
    arg: str,
    tokens: Iterator[str],
    compiler: CompilationService,
    file_manager: FileManager,
    options: list[str],
    err: TextIO,
) -> None:
    """Forward *arg* and its values if a collaborator claims it, else warn."""
    arg_count = compiler.is_supported_option(arg)
    if arg_count == UNSUPPORTED_OPTION:
        arg_count = file_manager.is_supported_option(arg)
    if arg_count == UNSUPPORTED_OPTION:
        print(f"Warning: Skipping unsupported option {arg}", file=err)
        return

    options.append(arg)
    for index in range(arg_count):
        try:
            options.append(next(tokens))
        except StopIteration:
            raise ArgumentError(f"{arg} requires {arg_count} argument(s), got {index}") from None


def _build_filter(path_prefixes: list[str], message_regexes: list[re.Pattern[str]]) -> DiagnosticFilter | None:
    """Combine the collected suppression inputs into one warning-only filter."""
    filters: list[DiagnosticFilter] = []
    if path_prefixes:
        filters.append(ignore_path_prefixes(path_prefixes))
    if message_regexes:
        filters.append(ignore_messages_matching(message_regexes))
    if not filters:
        return None
    return guarded(combine(filters), is_warning)
