# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Tool for managing TestRail projects via MCP integration.
"""

import logging
from typing import Annotated, ClassVar, Literal

from pydantic import Field, NonNegativeInt, PositiveInt

from ..common.dispatch import collect_arguments, run_operation
from ..common.operations import (
    NonEmptyStr,
    OperationRequest,
    ResolvedRequest,
    build_url,
)
from ..common.server import mcp
from ..common.validation import TestRailConfig

logger = logging.getLogger(__name__)

ProjectOperation = Literal[
    "get_project", "get_projects", "add_project", "update_project", "delete_project"
]
SuiteMode = Annotated[int, Field(ge=1, le=3)]


class ProjectRequest(OperationRequest):
    REQUIRED_FIELDS: ClassVar[dict[str, tuple[str, ...]]] = {
        "get_project": ("project_id",),
        "get_projects": (),
        "add_project": ("name",),
        "update_project": ("project_id",),
        "delete_project": ("project_id",),
    }

    operation: ProjectOperation
    project_id: PositiveInt | None = None
    name: NonEmptyStr | None = None
    announcement: str | None = None
    show_announcement: bool | None = None
    suite_mode: SuiteMode | None = None
    is_completed: bool | None = None
    limit: PositiveInt | None = None
    offset: NonNegativeInt | None = None


def build_project_request(
    request: ProjectRequest, config: TestRailConfig
) -> ResolvedRequest:
    api_url = config.api_url
    operation = request.operation

    if operation == "get_project":
        return ResolvedRequest(
            "GET", build_url(api_url, "get_project", request.project_id)
        )
    if operation == "get_projects":
        query = {
            "is_completed": request.is_completed,
            "limit": request.limit,
            "offset": request.offset,
        }
        return ResolvedRequest("GET", build_url(api_url, "get_projects", query=query))
    if operation == "add_project":
        return ResolvedRequest(
            "POST", build_url(api_url, "add_project"), request.payload()
        )
    if operation == "update_project":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "update_project", request.project_id),
            request.payload(exclude={"project_id"}),
        )
    if operation == "delete_project":
        return ResolvedRequest(
            "POST", build_url(api_url, "delete_project", request.project_id)
        )
    raise ValueError(f"Unsupported project operation: {operation}")


@mcp.tool(annotations={"openWorldHint": True})
async def manage_testrail_projects(
    operation: Annotated[
        ProjectOperation, Field(description="The project operation to perform")
    ],
    project_id: Annotated[
        PositiveInt | None,
        Field(description="The ID of the project (get/update/delete_project)"),
    ] = None,
    name: Annotated[
        NonEmptyStr | None,
        Field(description="The name of the project (required for add_project)"),
    ] = None,
    announcement: Annotated[
        str | None, Field(description="The description/announcement of the project")
    ] = None,
    show_announcement: Annotated[
        bool | None,
        Field(description="Whether to show the announcement on the project overview"),
    ] = None,
    suite_mode: Annotated[
        SuiteMode | None,
        Field(
            description="1 for single suite mode, 2 for single suite + baselines, 3 for multiple suites"
        ),
    ] = None,
    is_completed: Annotated[
        bool | None,
        Field(
            description="Marks a project completed (update_project) or filters by completion (get_projects)"
        ),
    ] = None,
    limit: Annotated[
        PositiveInt | None,
        Field(description="The number of projects to return (get_projects)"),
    ] = None,
    offset: Annotated[
        NonNegativeInt | None,
        Field(description="Where to start counting the projects from (get_projects)"),
    ] = None,
) -> str:
    """
    Manages TestRail projects. Operations: get_project, get_projects, add_project, update_project, delete_project.

    Returns:
        str: The TestRail response as pretty-printed JSON, a success message, or an error description.
    """
    arguments = collect_arguments(locals())
    logger.info(f"manage_testrail_projects called with operation {operation}")
    return await run_operation(ProjectRequest, build_project_request, arguments)
