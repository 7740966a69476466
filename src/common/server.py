# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
TestRail MCP server initialization module.
Initializes MCP server for TestRail integration.
"""

import logging

from fastmcp import FastMCP

logger = logging.getLogger(__name__)

mcp = FastMCP("TestRail MCP Server")
logger.info("MCP server initialized successfully.")
