# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Test configuration and fixtures for mcp-testrail test suite.
"""

import os
import sys
from pathlib import Path

import pytest

# Repository root for ``src`` imports, test directory for ``helpers``
test_dir = Path(__file__).parent
sys.path.insert(0, str(test_dir.parent))
sys.path.insert(0, str(test_dir))

# Test environment variables, set before the tools read any configuration
os.environ.update(
    {
        "TESTRAIL_URL": "https://testrail.example.com",
        "TESTRAIL_USER": "qa@example.com",
        "TESTRAIL_API_KEY": "test-api-key",
        "MCP_TRANSPORT": "stdio",
        "MCP_TESTRAIL_LOG_LEVEL": "WARNING",  # Reduce log noise in tests
    }
)

# Import the package properly - this will trigger tool registration
import src.tools  # noqa: F401, E402
from src.common.validation import TestRailConfig  # noqa: E402


@pytest.fixture
def testrail_config():
    """Provide TestRail settings matching the test environment."""
    return TestRailConfig(
        base_url="https://testrail.example.com",
        user="qa@example.com",
        api_key="test-api-key",
    )
