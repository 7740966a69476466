# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Configuration validation module for MCP TestRail server.
Provides schema validation and error handling for environment variables.
"""

import logging
import os
import re
import urllib.parse
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

# Official MCP transport types as defined in FastMCP
MCPTransportType = Literal["stdio", "streamable-http", "sse"]
VALID_MCP_TRANSPORTS = ["stdio", "streamable-http", "sse"]

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class TestRailConfig:
    """Connection settings for the TestRail instance."""

    __test__ = False

    base_url: str
    user: str
    api_key: str

    def __post_init__(self) -> None:
        """Validate TestRail configuration after initialization."""
        parsed = urllib.parse.urlparse(self.base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(
                f"A valid TestRail URL is required, got: {self.base_url!r}"
            )

        if not self.user or not EMAIL_PATTERN.match(self.user):
            raise ValueError(
                f"A valid TestRail user email is required, got: {self.user!r}"
            )

        if not self.api_key:
            raise ValueError("A TestRail API key is required")

        # Normalize so path segments can be appended directly
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def api_url(self) -> str:
        """Root of the v2 API; TestRail routes through the query string."""
        return f"{self.base_url}/index.php?/api/v2"

    def __repr__(self) -> str:
        return f"TestRailConfig(base_url={self.base_url!r}, user={self.user!r})"


@dataclass(frozen=True)
class MCPConfig:
    """MCP server configuration."""

    transport: MCPTransportType = "stdio"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate MCP configuration after initialization."""
        if self.transport not in VALID_MCP_TRANSPORTS:
            raise ValueError(
                f"Invalid transport: {self.transport}. Must be one of: {VALID_MCP_TRANSPORTS}"
            )

        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_log_levels:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of: {valid_log_levels}"
            )

        object.__setattr__(self, "log_level", self.log_level.upper())


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


class ConfigValidator:
    """Validates and loads configuration from environment variables."""

    @staticmethod
    def get_env_str(key: str, default: str = "") -> str:
        """Get a stripped string value from environment variable."""
        return os.getenv(key, default).strip()

    @classmethod
    def load_testrail_config(cls) -> TestRailConfig:
        """Build the TestRail connection settings from the environment."""
        try:
            return TestRailConfig(
                base_url=cls.get_env_str("TESTRAIL_URL"),
                user=cls.get_env_str("TESTRAIL_USER"),
                api_key=cls.get_env_str("TESTRAIL_API_KEY"),
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def load_mcp_config(cls) -> MCPConfig:
        """Build the MCP server settings from the environment."""
        transport_str = cls.get_env_str("MCP_TRANSPORT", "stdio")
        if transport_str not in VALID_MCP_TRANSPORTS:
            raise ConfigurationError(
                f"Invalid transport: {transport_str}. Must be one of: {VALID_MCP_TRANSPORTS}"
            )
        try:
            return MCPConfig(
                transport=transport_str,  # type: ignore[arg-type]
                log_level=cls.get_env_str("MCP_TESTRAIL_LOG_LEVEL", "INFO"),
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    @classmethod
    def load_config(cls) -> tuple[TestRailConfig, MCPConfig]:
        """Load and validate complete configuration from environment variables."""
        try:
            testrail_config = cls.load_testrail_config()
            mcp_config = cls.load_mcp_config()

            logger.info(
                f"Configuration loaded successfully: {testrail_config.base_url}, transport: {mcp_config.transport}"
            )
            return testrail_config, mcp_config

        except Exception as e:
            if isinstance(e, ConfigurationError):
                raise
            else:
                raise ConfigurationError(f"Failed to load configuration: {e}") from e


def load_validated_config() -> tuple[TestRailConfig, MCPConfig]:
    """Load and validate configuration, with user-friendly error messages."""
    try:
        return ConfigValidator.load_config()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        logger.error("Please check your environment variables and .env file")
        raise
    except Exception as e:
        logger.error(f"Unexpected error loading configuration: {e}")
        raise ConfigurationError(
            "Failed to load configuration due to unexpected error"
        ) from e
