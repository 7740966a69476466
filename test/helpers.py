# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Test helpers for mcp-testrail test suite.
"""

import json
import os
from typing import Any

import httpx

from src.common.validation import TestRailConfig

API_URL = "https://testrail.example.com/index.php?/api/v2"


def make_config(**overrides) -> TestRailConfig:
    """Create TestRail settings for tests, with optional overrides."""
    values = {
        "base_url": "https://testrail.example.com",
        "user": "qa@example.com",
        "api_key": "test-api-key",
    }
    values.update(overrides)
    return TestRailConfig(**values)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that answers with a fixed response and keeps every request."""

    def __init__(
        self,
        status_code: int = 200,
        *,
        json_body: Any = None,
        text: str | None = None,
        error: Exception | None = None,
    ):
        self.requests: list[httpx.Request] = []
        self.status_code = status_code
        self.json_body = json_body
        self.text = text
        self.error = error
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.json_body is not None:
            return httpx.Response(self.status_code, json=self.json_body)
        return httpx.Response(self.status_code, text=self.text or "")

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Any:
        content = self.last_request.content
        return json.loads(content) if content else None


def extract_call_tool_text(result) -> str:
    """
    Extract the text from a CallToolResult or return direct result.

    This helper handles the different ways MCP tools can return data
    depending on the test context.
    """
    if hasattr(result, "content") and result.content:
        return result.content[0].text
    return result


class MockEnvironment:
    """Context manager for temporarily setting environment variables in tests."""

    def __init__(self, env_vars: dict[str, str]):
        self.env_vars = env_vars
        self.original_values = {}

    def __enter__(self):
        for key, value in self.env_vars.items():
            self.original_values[key] = os.environ.get(key)
            os.environ[key] = value
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for key in self.env_vars:
            original_value = self.original_values[key]
            if original_value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = original_value
