# Copyright 2026 trackc Contributors
# SPDX-License-Identifier: Apache-2.0

"""trackc: a compiler wrapper that tracks which artifacts each source produced."""
