# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the trackc CLI entry point."""

import sys
from pathlib import Path

import pytest

from trackc.cli.main import main
from trackc.workspace.config import CONFIG_ENV_VAR, CONFIG_FILE_NAME

# ###############
# Helpers
# ###############


def _run_main(monkeypatch: pytest.MonkeyPatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["trackc", *args])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


# ###############
# Public Interface
# ###############


def test_main_no_args_prints_usage_and_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    assert _run_main(monkeypatch) == 0
    assert "usage: trackc" in capsys.readouterr().out


def test_main_compiles_and_writes_dependency_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "mod.py").write_text("VALUE = 1\n", encoding="utf-8")
    assert _run_main(monkeypatch, "-Tdependencyfile", "deps.txt", "-d", "out", "mod.py") == 0
    assert (tmp_path / "out" / "mod.pyc").exists()
    assert (tmp_path / "deps.txt").read_text(encoding="utf-8") == "mod.py -> mod.pyc\n"


def test_main_compile_failure_exits_one(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "bad.py").write_text("def f(:\n", encoding="utf-8")
    assert _run_main(monkeypatch, "bad.py") == 1
    assert "bad.py:1" in capsys.readouterr().err


def test_main_argument_error_exits_one(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    assert _run_main(monkeypatch, "mod.py", "-Tnowarnregex") == 1
    assert "Error: -Tnowarnregex requires an argument" in capsys.readouterr().err


def test_main_dependency_write_error_exits_one(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "mod.py").write_text("VALUE = 1\n", encoding="utf-8")
    assert _run_main(monkeypatch, "-Tdependencyfile", "missing/deps.txt", "mod.py") == 1
    assert "Error: Cannot write dependency file" in capsys.readouterr().err


# ###############
# Configuration
# ###############


def test_main_applies_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / CONFIG_FILE_NAME).write_text(
        "dependency-file: deps.txt\noptions: ['-d', 'build']\n",
        encoding="utf-8",
    )
    (tmp_path / "mod.py").write_text("VALUE = 1\n", encoding="utf-8")
    assert _run_main(monkeypatch, "mod.py") == 0
    assert (tmp_path / "build" / "mod.pyc").exists()
    assert (tmp_path / "deps.txt").read_text(encoding="utf-8") == "mod.py -> mod.pyc\n"


def test_main_config_from_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    config = tmp_path / "conf" / "trackc.yaml"
    config.parent.mkdir()
    config.write_text("nowarn-regex: ['is.*literal']\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config))
    (tmp_path / "w.py").write_text("x = 1\nif x is 1:\n    pass\n", encoding="utf-8")
    assert _run_main(monkeypatch, "w.py") == 0
    assert "literal" not in capsys.readouterr().err


def test_main_invalid_config_exits_one(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / CONFIG_FILE_NAME).write_text("colour: true\n", encoding="utf-8")
    assert _run_main(monkeypatch, "mod.py") == 1
    assert "Error: Invalid config file" in capsys.readouterr().err
