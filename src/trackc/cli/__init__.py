# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface: argument routing, driver and entry point."""
