#!/usr/bin/env python3
# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, self-compile, and build.

The self-compile step runs trackc over its own sources with a dependency file,
so a broken entry point fails CI even when the unit tests pass.
"""

import argparse
import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############


def main() -> int:
    """Run the selected CI steps and report results."""
    parser = argparse.ArgumentParser(description="Run trackc CI checks locally.")
    parser.add_argument("--only", action="append", metavar="STEP", help="Run only the named step (repeatable)")
    parser.add_argument("--list", action="store_true", help="List the available steps and exit")
    args = parser.parse_args()

    steps = _steps(_repo_root())
    if args.list:
        for name, _ in steps:
            print(name)
        return 0
    if args.only:
        unknown = sorted(set(args.only) - {name for name, _ in steps})
        if unknown:
            print(chalk.red(f"Unknown step(s): {', '.join(unknown)}"), file=sys.stderr)
            return 1
        steps = [(name, cmd) for name, cmd in steps if name in args.only]

    results: list[tuple[str, int, float]] = []
    for name, cmd in steps:
        _banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        results.append((name, proc.returncode, time.monotonic() - start))

    _banner("Summary")
    for name, returncode, elapsed in results:
        if returncode == 0:
            print(chalk.green(f"  PASS  {name} ({elapsed:.1f}s)"))
        else:
            print(chalk.red(f"  FAIL  {name} ({elapsed:.1f}s, exit {returncode})"))
    print()
    return 0 if all(returncode == 0 for _, returncode, _ in results) else 1


# ################
# Implementation
# ################


def _repo_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _steps(root: Path) -> list[tuple[str, list[str]]]:
    build = root / "build" / "ci"
    sources = sorted(str(p.relative_to(root)) for p in (root / "src").rglob("*.py"))
    self_compile = [
        "uv",
        "run",
        "trackc",
        "-Tdependencyfile",
        str(build / "deps.txt"),
        "-d",
        str(build / "bytecode"),
        "-sourcepath",
        "src",
        *sources,
    ]
    return [
        ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
        ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/"]),
        ("Type check", ["uv", "run", "ty", "check", "src/"]),
        ("Tests", ["uv", "run", "pytest", "--cov=trackc", "--cov-report=term-missing"]),
        ("Self-compile", self_compile),
        ("Build", ["uv", "build"]),
    ]


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(f"  {title}"))
    print(sep)


if __name__ == "__main__":
    sys.exit(main())
