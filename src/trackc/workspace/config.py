# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Optional YAML configuration supplying default trackc arguments.

Example ``.trackc.yaml``::

    dependency-file: build/deps.txt
    color: true
    nowarn-prefixes:
      - generated/
    nowarn-regex:
      - "invalid escape sequence"
    options: ["-d", "build/classes", "-O"]

The configuration is rendered back into command-line tokens by
:meth:`ToolConfig.to_args` so that the argument router stays the only place
where flags are interpreted.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trackc.cli.args import (
    COLOR_FLAG,
    DEPENDENCYFILE_FLAG,
    WARN_IGNORE_MESSAGE_REGEX,
    WARN_IGNORE_PATH_PREFIXES,
)

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".trackc.yaml"
CONFIG_ENV_VAR = "TRACKC_CONFIG"


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or is invalid."""


class ToolConfig(BaseModel):
    """Default arguments applied before the command-line arguments."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    dependency_file: str | None = Field(alias="dependency-file", default=None)
    color: bool = False
    nowarn_prefixes: list[str] = Field(alias="nowarn-prefixes", default_factory=list)
    nowarn_regex: list[str] = Field(alias="nowarn-regex", default_factory=list)
    options: list[str] = Field(default_factory=list)

    def to_args(self) -> list[str]:
        """Render the configuration as command-line tokens."""
        args: list[str] = []
        if self.dependency_file is not None:
            args += [DEPENDENCYFILE_FLAG, self.dependency_file]
        if self.color:
            args.append(COLOR_FLAG)
        if self.nowarn_prefixes:
            args += [WARN_IGNORE_PATH_PREFIXES, os.pathsep.join(self.nowarn_prefixes)]
        for regex in self.nowarn_regex:
            args += [WARN_IGNORE_MESSAGE_REGEX, regex]
        args += self.options
        return args


def find_config(directory: Path) -> Path | None:
    """Return the configuration file to use, or ``None`` if there is none.

    The :data:`CONFIG_ENV_VAR` environment variable takes precedence over a
    :data:`CONFIG_FILE_NAME` file in *directory*.

    Raises:
        ConfigError: If the environment variable names a missing file.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        if not path.is_file():
            raise ConfigError(f"Config file from {CONFIG_ENV_VAR} not found: {path}")
        return path
    candidate = directory / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def load_config(path: Path) -> ToolConfig:
    """Load and validate a configuration file.

    An empty file yields the default configuration.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML, or
            does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: config must be a YAML mapping")

    try:
        return ToolConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file '{path}': {exc}") from exc
