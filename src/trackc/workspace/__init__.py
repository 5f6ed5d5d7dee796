# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Workspace configuration for trackc."""

from trackc.workspace.config import (
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    ConfigError,
    ToolConfig,
    find_config,
    load_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ToolConfig",
    "find_config",
    "load_config",
]
