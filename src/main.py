# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Main entry point for the TestRail MCP server.
Validates configuration and starts the MCP server.
"""

import logging
import sys

from . import tools  # noqa: F401
from .common import config
from .common.server import mcp
from .common.validation import ConfigurationError


class TestRailMCPServer:
    """
    Main TestRail MCP server class. Checks the configuration and starts the MCP server.
    """

    __test__ = False

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.logger.info("Starting the TestRailMCPServer")
        # Fail fast: every tool call needs the TestRail credentials
        self.testrail_config = config.get_testrail_config()
        self.mcp_config = config.get_mcp_config()
        self.logger.info(
            f"Using TestRail instance {self.testrail_config.base_url} as {self.testrail_config.user}"
        )

    def run(self):
        """
        Starts the MCP server with the configured transport.
        """
        try:
            mcp.run(transport=self.mcp_config.transport)
        except Exception as e:
            self.logger.error(f"Error running mcp: {e}")
            raise


def main():
    """
    Main entry point for the TestRail MCP server.
    """
    try:
        mcp_config = config.get_mcp_config()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR, stream=sys.stderr)
        logging.getLogger(__name__).error(f"Configuration error: {e}")
        sys.exit(1)

    # Configure logging to stderr, stdout carries the stdio transport
    logging.basicConfig(
        level=getattr(logging, mcp_config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    try:
        server = TestRailMCPServer()
    except ConfigurationError as e:
        logging.getLogger(__name__).error(f"Configuration error: {e}")
        sys.exit(1)
    server.run()


if __name__ == "__main__":
    main()
