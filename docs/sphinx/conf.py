# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for trackc documentation."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

project = "trackc"
author = "trackc Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]
autodoc_member_order = "bysource"

master_doc = "index"
exclude_patterns = ["_build"]

html_theme = "alabaster"
