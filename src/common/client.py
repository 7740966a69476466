# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

import base64
import json
import logging

import httpx

from .operations import ResolvedRequest
from .validation import TestRailConfig

logger = logging.getLogger(__name__)


class TestRailAPIError(Exception):
    """Raised when TestRail answers with a non-2xx status."""

    __test__ = False

    def __init__(self, status_code: int, reason: str, text: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.text = text
        super().__init__(f"TestRail API Error: {status_code} {reason} - {text}")


class TestRailClient:
    """Sends resolved requests to TestRail with Basic Auth.

    A fresh ``httpx.AsyncClient`` is opened per call; nothing is retried.
    """

    __test__ = False

    # Overridable for tests (e.g. ``httpx.MockTransport``)
    transport: httpx.AsyncBaseTransport | None = None

    def __init__(
        self,
        config: TestRailConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        if transport is not None:
            self.transport = transport

    @property
    def headers(self) -> dict[str, str]:
        credentials = f"{self.config.user}:{self.config.api_key}".encode()
        return {
            "Authorization": f"Basic {base64.b64encode(credentials).decode('ascii')}",
            "Content-Type": "application/json",
        }

    async def request(self, resolved: ResolvedRequest) -> httpx.Response:
        """Issue one HTTP call and return the successful response."""
        logger.debug(f"Performing {resolved.method} request for {resolved.url}")

        content = json.dumps(resolved.body) if resolved.body is not None else None
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.request(
                    resolved.method,
                    resolved.url,
                    headers=self.headers,
                    content=content,
                )
            except httpx.HTTPError as e:
                logger.warning(
                    f"TestRail {resolved.method} request failed for {resolved.url}: {e}"
                )
                raise

        if not response.is_success:
            logger.warning(
                f"TestRail {resolved.method} {resolved.url} returned {response.status_code}"
            )
            raise TestRailAPIError(
                response.status_code, response.reason_phrase, response.text
            )

        logger.debug(f"Successfully completed request: {resolved.url}")
        return response
