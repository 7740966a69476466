# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Runs one tool call through validate -> build -> send -> normalize.
"""

import logging
from collections.abc import Callable, Collection, Mapping
from enum import Enum
from typing import Any

from fastmcp.exceptions import ToolError

from . import config
from .client import TestRailClient
from .operations import (
    OperationRequest,
    OperationValidationError,
    ResolvedRequest,
    parse_operation,
)
from .responses import format_failure, normalize_response
from .validation import TestRailConfig

logger = logging.getLogger(__name__)

RequestBuilder = Callable[[Any, TestRailConfig], ResolvedRequest]


class Unset(Enum):
    """Default for tool arguments where an explicit null means something.

    The member's value is ``None`` so the advertised JSON schema default
    stays ``null``.
    """

    UNSET = None


UNSET = Unset.UNSET


def collect_arguments(
    values: Mapping[str, Any], nullable: Collection[str] = ()
) -> dict[str, Any]:
    """Keep the tool arguments the caller actually supplied.

    ``None`` is dropped unless the argument is listed in ``nullable``; those
    arguments default to ``UNSET`` so an explicit null can be told apart
    from an omitted argument.
    """
    return {
        key: value
        for key, value in values.items()
        if value is not UNSET and (value is not None or key in nullable)
    }


async def run_operation(
    model_cls: type[OperationRequest],
    builder: RequestBuilder,
    arguments: Mapping[str, Any],
    testrail_config: TestRailConfig | None = None,
) -> str:
    """Execute one operation and return its text result.

    Invalid arguments are rejected with a ToolError before anything is sent.
    Every later failure comes back as a descriptive string.
    """
    try:
        request = parse_operation(model_cls, arguments)
    except OperationValidationError as e:
        logger.warning(f"Rejected arguments for {model_cls.__name__}: {e.fields}")
        raise ToolError(str(e)) from e

    operation = request.operation
    logger.info(f"Running TestRail operation {operation}")
    try:
        if testrail_config is None:
            testrail_config = config.get_testrail_config()
        resolved = builder(request, testrail_config)
        response = await TestRailClient(testrail_config).request(resolved)
        return normalize_response(
            operation,
            response,
            delete=request.is_delete,
            soft=request.is_soft_delete,
        )
    except Exception as e:
        logger.error(f"TestRail operation {operation} failed: {e}")
        return format_failure(operation, e)
