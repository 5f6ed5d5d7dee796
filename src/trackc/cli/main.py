# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the trackc command-line interface.

Usage::

    trackc [-Tdependencyfile FILE] [-Tcolor] [-Tnowarnprefixes P1:P2]
           [-Tnowarnregex REGEX]... [compiler options] SOURCE...

All flags other than the ``-T`` ones are forwarded to the compiler when it
(or its file manager) recognizes them.
"""

import sys
from pathlib import Path

from trackc.cli.driver import compile_sources
from trackc.compiler.file_manager import DependencyWriteError
from trackc.workspace.config import ConfigError, find_config, load_config

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the trackc CLI."""
    sys.exit(_run(sys.argv[1:]))


# ################
# Implementation
# ################


_USAGE = (
    "usage: trackc [-Tdependencyfile FILE] [-Tcolor] [-Tnowarnprefixes PREFIXES]\n"
    "              [-Tnowarnregex REGEX]... [compiler options] SOURCE..."
)


def _run(argv: list[str]) -> int:
    if not argv:
        print(_USAGE)
        return 0

    try:
        config_path = find_config(Path.cwd())
        config_args = load_config(config_path).to_args() if config_path is not None else []
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        return compile_sources(config_args + argv)
    except DependencyWriteError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    main()
