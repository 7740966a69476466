# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Tool for managing TestRail test cases via MCP integration.

Covers single-case operations as well as the bulk endpoints that act on a
list of case IDs within a suite or section.
"""

import logging
from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, PositiveInt

from ..common.dispatch import collect_arguments, run_operation
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

CaseOperation = Literal[
    "get_case",
    "get_cases",
    "get_history",
    "add_case",
    "update_case",
    "update_cases",
    "copy_cases",
    "move_cases",
    "delete_case",
    "delete_cases",
]
CaseIds = Annotated[list[PositiveInt], Field(min_length=1)]


class CaseStep(BaseModel):
    """One step of a step-by-step test case."""

    model_config = ConfigDict(extra="forbid")

    content: str = Field(description="The content/description of the step")
    expected: str | None = Field(
        default=None, description="The expected result of the step"
    )


class CaseRequest(OperationRequest):
    REQUIRED_FIELDS: ClassVar[dict[str, tuple[str, ...]]] = {
        "get_case": ("case_id",),
        "get_cases": ("project_id",),
        "get_history": ("case_id",),
        "add_case": ("section_id", "title"),
        "update_case": ("case_id",),
        "update_cases": ("suite_id", "case_ids"),
        "copy_cases": ("section_id", "case_ids"),
        "move_cases": ("section_id", "suite_id", "case_ids"),
        "delete_case": ("case_id",),
        "delete_cases": ("suite_id", "case_ids"),
    }

    operation: CaseOperation
    case_id: PositiveInt | None = None
    case_ids: CaseIds | None = None
    project_id: PositiveInt | None = None
    suite_id: PositiveInt | None = None
    section_id: PositiveInt | None = None
    milestone_id: PositiveInt | None = None
    priority_id: PositiveInt | None = None
    template_id: PositiveInt | None = None
    type_id: PositiveInt | None = None
    title: NonEmptyStr | None = None
    estimate: str | None = None
    refs: str | None = None
    filter: str | None = None
    custom_preconds: str | None = None
    custom_expected: str | None = None
    custom_steps: list[CaseStep] | None = None
    limit: PositiveInt | None = None
    offset: NonNegativeInt | None = None
    soft: bool | None = None


def build_case_request(request: CaseRequest, config: TestRailConfig) -> ResolvedRequest:
    api_url = config.api_url
    operation = request.operation

    if operation == "get_case":
        return ResolvedRequest("GET", build_url(api_url, "get_case", request.case_id))
    if operation == "get_cases":
        query = {
            "suite_id": request.suite_id,
            "section_id": request.section_id,
            "priority_id": request.priority_id,
            "limit": request.limit,
            "offset": request.offset,
            "filter": request.filter,
        }
        return ResolvedRequest(
            "GET", build_url(api_url, "get_cases", request.project_id, query)
        )
    if operation == "get_history":
        query = {"limit": request.limit, "offset": request.offset}
        return ResolvedRequest(
            "GET", build_url(api_url, "get_history_for_case", request.case_id, query)
        )
    if operation == "add_case":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "add_case", request.section_id),
            request.payload(exclude={"section_id"}),
        )
    if operation == "update_case":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "update_case", request.case_id),
            request.payload(exclude={"case_id"}),
        )
    if operation == "update_cases":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "update_cases", request.suite_id),
            request.payload(exclude={"suite_id"}),
        )
    if operation == "copy_cases":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "copy_cases_to_section", request.section_id),
            {"case_ids": request.case_ids},
        )
    if operation == "move_cases":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "move_cases_to_section", request.section_id),
            {"suite_id": request.suite_id, "case_ids": request.case_ids},
        )
    if operation == "delete_case":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "delete_case", request.case_id),
            {"soft": soft_flag(request.soft)},
        )
    if operation == "delete_cases":
        return ResolvedRequest(
            "POST",
            build_url(api_url, "delete_cases", request.suite_id),
            {"case_ids": request.case_ids, "soft": soft_flag(request.soft)},
        )
    raise ValueError(f"Unsupported case operation: {operation}")


@mcp.tool(annotations={"openWorldHint": True})
async def manage_testrail_cases(
    operation: Annotated[
        CaseOperation, Field(description="The test case operation to perform")
    ],
    case_id: Annotated[
        PositiveInt | None,
        Field(description="The ID of the test case (get_case, get_history, update_case, delete_case)"),
    ] = None,
    case_ids: Annotated[
        CaseIds | None,
        Field(description="The IDs of the test cases for bulk operations"),
    ] = None,
    project_id: Annotated[
        PositiveInt | None, Field(description="The ID of the project (get_cases)")
    ] = None,
    suite_id: Annotated[
        PositiveInt | None,
        Field(description="The ID of the test suite (get_cases filter, update/move/delete_cases)"),
    ] = None,
    section_id: Annotated[
        PositiveInt | None,
        Field(description="The ID of the section (add_case, copy_cases, move_cases, get_cases filter)"),
    ] = None,
    milestone_id: Annotated[
        PositiveInt | None, Field(description="The ID of the milestone to link to")
    ] = None,
    priority_id: Annotated[
        PositiveInt | None, Field(description="The ID of the case priority")
    ] = None,
    template_id: Annotated[
        PositiveInt | None, Field(description="The ID of the template (field layout)")
    ] = None,
    type_id: Annotated[
        PositiveInt | None, Field(description="The ID of the case type")
    ] = None,
    title: Annotated[
        NonEmptyStr | None,
        Field(description="The title of the test case (required for add_case)"),
    ] = None,
    estimate: Annotated[
        str | None, Field(description="The estimate, e.g. '30s' or '1m 45s'")
    ] = None,
    refs: Annotated[
        str | None, Field(description="A comma-separated list of references/requirements")
    ] = None,
    filter: Annotated[
        str | None, Field(description="Only return cases with matching filter string in the title (get_cases)")
    ] = None,
    custom_preconds: Annotated[
        str | None, Field(description="The preconditions of the test case")
    ] = None,
    custom_expected: Annotated[
        str | None, Field(description="The expected result of the test case")
    ] = None,
    custom_steps: Annotated[
        list[CaseStep] | None,
        Field(description="Steps for step-by-step test cases"),
    ] = None,
    limit: Annotated[
        PositiveInt | None,
        Field(description="The number of entries to return (get_cases, get_history)"),
    ] = None,
    offset: Annotated[
        NonNegativeInt | None,
        Field(description="Where to start counting from (get_cases, get_history)"),
    ] = None,
    soft: Annotated[
        bool | None,
        Field(description="If true, delete_case/delete_cases return the affected data without deleting"),
    ] = None,
) -> str:
    """
    Manages TestRail cases. Operations: get_case, get_cases, get_history, add_case, update_case, update_cases, copy_cases, move_cases, delete_case, delete_cases.

    Returns:
        str: The TestRail response as pretty-printed JSON, a success message, or an error description.
    """
    arguments = collect_arguments(locals())
    logger.info(f"manage_testrail_cases called with operation {operation}")
    return await run_operation(CaseRequest, build_case_request, arguments)
