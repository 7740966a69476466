# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Tools module for the TestRail MCP server.
Imports all tool modules to register them with MCP.
"""

from . import (
    cases,  # noqa: F401
    projects,  # noqa: F401
    sections,  # noqa: F401
    suites,  # noqa: F401
)
