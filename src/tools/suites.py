# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Tool for managing TestRail test suites via MCP integration.
"""

import logging
from typing import Annotated, ClassVar, Literal

from pydantic import Field, PositiveInt

from ..common.dispatch import collect_arguments, run_operation
from ..common.operations import (
    NonEmptyStr,
    OperationRequest,
    ResolvedRequest,
    SoftFlag,
    build_url,
)
from ..common.server import mcp
from ..common.validation import TestRailConfig

logger = logging.getLogger(__name__)

SuiteOperation = Literal["get", "list", "add", "update", "delete"]


class SuiteRequest(OperationRequest):
    REQUIRED_FIELDS: ClassVar[dict[str, tuple[str, ...]]] = {
        "get": ("suite_id",),
        "list": ("project_id",),
        "add": ("project_id", "name"),
        "update": ("suite_id",),
        "delete": ("suite_id",),
    }

    operation: SuiteOperation
    suite_id: PositiveInt | None = None
    project_id: PositiveInt | None = None
    name: NonEmptyStr | None = None
    description: str | None = None
    soft: SoftFlag | None = None


def _suite_fields(request: SuiteRequest) -> dict:
    # Empty descriptions are left out rather than sent as ""
    return {
        key: value
        for key, value in request.payload(include={"name", "description"}).items()
        if value
    }


def build_suite_request(request: SuiteRequest, config: TestRailConfig) -> ResolvedRequest:
    api_url = config.api_url
    operation = request.operation

    if operation == "get":
        return ResolvedRequest("GET", build_url(api_url, "get_suite", request.suite_id))
    if operation == "list":
        return ResolvedRequest(
            "GET", build_url(api_url, "get_suites", request.project_id)
        )
    if operation == "add":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "add_suite", request.project_id),
            _suite_fields(request),
        )
    if operation == "update":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "update_suite", request.suite_id),
            _suite_fields(request),
        )
    if operation == "delete":
        # soft=0 is the default, only a preview request is spelled out
        query = {"soft": 1} if request.soft else None
        return ResolvedRequest(
            "POST", build_url(api_url, "delete_suite", request.suite_id, query)
        )
    raise ValueError(f"Unsupported suite operation: {operation}")


@mcp.tool(annotations={"openWorldHint": True})
async def manage_testrail_suites(
    operation: Annotated[
        SuiteOperation, Field(description="The suite operation to perform")
    ],
    suite_id: Annotated[
        PositiveInt | None,
        Field(description="The ID of the test suite (get, update, delete)"),
    ] = None,
    project_id: Annotated[
        PositiveInt | None, Field(description="The ID of the project (list, add)")
    ] = None,
    name: Annotated[
        NonEmptyStr | None,
        Field(description="The name of the test suite (required for add)"),
    ] = None,
    description: Annotated[
        str | None, Field(description="The description of the test suite")
    ] = None,
    soft: Annotated[
        SoftFlag | None,
        Field(
            description="If soft=1, delete returns the number of affected tests, cases, etc. without deleting"
        ),
    ] = None,
) -> str:
    """
    Manages TestRail suites. Operations: get, list, add, update, delete.

    Returns:
        str: The TestRail response as pretty-printed JSON, a success message, or an error description.
    """
    arguments = collect_arguments(locals())
    logger.info(f"manage_testrail_suites called with operation {operation}")
    return await run_operation(SuiteRequest, build_suite_request, arguments)
