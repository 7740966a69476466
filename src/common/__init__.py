# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Common modules for the TestRail MCP server.
Exposes submodules for easy access.
"""

from . import (
    config,  # noqa: F401
    validation,  # noqa: F401
)
