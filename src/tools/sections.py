# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Tool for managing TestRail sections via MCP integration.
"""

import logging
from typing import Annotated, ClassVar, Literal

from pydantic import Field, NonNegativeInt, PositiveInt

from ..common.dispatch import UNSET, collect_arguments, run_operation
from ..common.operations import (
    NonEmptyStr,
    OperationRequest,
    ResolvedRequest,
    build_url,
    soft_flag,
)
from ..common.server import mcp
from ..common.validation import TestRailConfig

logger = logging.getLogger(__name__)

SectionOperation = Literal[
    "get_section",
    "get_sections",
    "add_section",
    "update_section",
    "delete_section",
    "move_section",
]
# Explicit null is meaningful for these: root parent / first position
NULLABLE_ARGUMENTS = ("parent_id", "after_id")


class SectionRequest(OperationRequest):
    REQUIRED_FIELDS: ClassVar[dict[str, tuple[str, ...]]] = {
        "get_section": ("section_id",),
        "get_sections": ("project_id",),
        "add_section": ("project_id", "name"),
        "update_section": ("section_id",),
        "delete_section": ("section_id",),
        "move_section": ("section_id",),
    }

    operation: SectionOperation
    section_id: PositiveInt | None = None
    project_id: PositiveInt | None = None
    suite_id: PositiveInt | None = None
    # null means "root" / "first position" for move_section
    parent_id: PositiveInt | None = None
    after_id: PositiveInt | None = None
    name: NonEmptyStr | None = None
    description: str | None = None
    soft: bool | None = None
    limit: PositiveInt | None = None
    offset: NonNegativeInt | None = None


def build_section_request(
    request: SectionRequest, config: TestRailConfig
) -> ResolvedRequest:
    api_url = config.api_url
    operation = request.operation

    if operation == "get_section":
        return ResolvedRequest(
            "GET", build_url(api_url, "get_section", request.section_id)
        )
    if operation == "get_sections":
        query = {
            "suite_id": request.suite_id,
            "limit": request.limit,
            "offset": request.offset,
        }
        return ResolvedRequest(
            "GET", build_url(api_url, "get_sections", request.project_id, query)
        )
    if operation == "add_section":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "add_section", request.project_id),
            request.payload(exclude={"project_id"}),
        )
    if operation == "update_section":
        # TestRail rejects unknown fields on update_section
        return ResolvedRequest(
            "POST",
            build_url(api_url, "update_section", request.section_id),
            request.payload(include={"name", "description"}),
        )
    if operation == "delete_section":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "delete_section", request.section_id),
            {"soft": soft_flag(request.soft)},
        )
    if operation == "move_section":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "move_section", request.section_id),
            request.payload(include={"parent_id", "after_id"}),
        )
    raise ValueError(f"Unsupported section operation: {operation}")


@mcp.tool(annotations={"openWorldHint": True})
async def manage_testrail_sections(
    operation: Annotated[
        SectionOperation, Field(description="The section operation to perform")
    ],
    section_id: Annotated[
        PositiveInt | None,
        Field(description="The ID of the section (get/update/delete/move_section)"),
    ] = None,
    project_id: Annotated[
        PositiveInt | None,
        Field(description="The ID of the project (get_sections, add_section)"),
    ] = None,
    suite_id: Annotated[
        PositiveInt | None,
        Field(
            description="The ID of the test suite (optional if the project is in single suite mode)"
        ),
    ] = None,
    parent_id: Annotated[
        PositiveInt | None,
        Field(
            description="The ID of the parent section; null moves the section to the root (move_section)"
        ),
    ] = UNSET,
    after_id: Annotated[
        PositiveInt | None,
        Field(
            description="The section ID after which the section should be put; null puts it first (move_section)"
        ),
    ] = UNSET,
    name: Annotated[
        NonEmptyStr | None,
        Field(description="The name of the section (required for add_section)"),
    ] = None,
    description: Annotated[
        str | None, Field(description="The description of the section")
    ] = None,
    soft: Annotated[
        bool | None,
        Field(
            description="If true, delete_section returns the affected tests, cases, etc. without deleting"
        ),
    ] = None,
    limit: Annotated[
        PositiveInt | None,
        Field(description="The number of sections to return (get_sections)"),
    ] = None,
    offset: Annotated[
        NonNegativeInt | None,
        Field(description="Where to start counting the sections from (get_sections)"),
    ] = None,
) -> str:
    """
    Manages TestRail sections. Operations: get_section, get_sections, add_section, update_section, delete_section, move_section.

    Returns:
        str: The TestRail response as pretty-printed JSON, a success message, or an error description.
    """
    arguments = collect_arguments(locals(), nullable=NULLABLE_ARGUMENTS)
    logger.info(f"manage_testrail_sections called with operation {operation}")
    return await run_operation(SectionRequest, build_section_request, arguments)
