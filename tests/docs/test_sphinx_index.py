# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests that the Sphinx index documents every trackc module."""

import importlib
import re
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
_INDEX = _ROOT / "docs" / "sphinx" / "index.rst"


def _documented_modules() -> list[str]:
    return re.findall(r"^\.\. automodule:: (\S+)$", _INDEX.read_text(encoding="utf-8"), re.MULTILINE)


def test_index_documents_every_module() -> None:
    package = _ROOT / "src" / "trackc"
    modules = {
        ".".join(path.relative_to(package.parent).with_suffix("").parts)
        for path in package.rglob("*.py")
        if path.name != "__init__.py"
    }
    assert set(_documented_modules()) == modules


def test_documented_modules_import() -> None:
    for name in _documented_modules():
        assert importlib.import_module(name).__doc__
