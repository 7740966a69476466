# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Configuration loader for MCP TestRail server.
Loads settings from environment variables with validation.

Settings are read once per process and cached; tools receive the resulting
immutable config objects explicitly.
"""

import logging
from functools import lru_cache

from dotenv import load_dotenv

from .validation import (
    MCPConfig,
    TestRailConfig,
    load_validated_config,
)

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


@lru_cache(maxsize=1)
def _load() -> tuple[TestRailConfig, MCPConfig]:
    testrail_config, mcp_config = load_validated_config()
    logger.info("Configuration validated and loaded successfully")
    return testrail_config, mcp_config


def get_testrail_config() -> TestRailConfig:
    """Return the process-wide TestRail settings, raising ConfigurationError if invalid."""
    return _load()[0]


def get_mcp_config() -> MCPConfig:
    """Return the process-wide MCP server settings."""
    return _load()[1]


def reset() -> None:
    """Forget cached settings so the next access re-reads the environment."""
    _load.cache_clear()
