# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Turns TestRail HTTP outcomes into the single text result a tool returns.
"""

import json

import httpx

SUCCESS_MESSAGE = "Operation {operation} successful."
SOFT_DELETE_EMPTY_MESSAGE = (
    "Operation {operation} (soft) successful, no preview data returned."
)


def render_body(text: str) -> str:
    """Pretty-print a JSON body, or hand back the raw text if it is not JSON."""
    try:
        data = json.loads(text)
    except ValueError:
        return text
    return json.dumps(data, indent=2, ensure_ascii=False)


def normalize_response(
    operation: str,
    response: httpx.Response,
    *,
    delete: bool = False,
    soft: bool = False,
) -> str:
    """Map a successful response to the tool's text result.

    Deletes report a fixed message and ignore the body, except soft deletes,
    whose body is the preview of what would be removed.
    """
    text = response.text
    if delete:
        if not soft:
            return SUCCESS_MESSAGE.format(operation=operation)
        if not text.strip():
            return SOFT_DELETE_EMPTY_MESSAGE.format(operation=operation)
        return render_body(text)

    if response.status_code == 204 or not text.strip():
        return SUCCESS_MESSAGE.format(operation=operation)
    return render_body(text)


def format_failure(operation: str | None, error: BaseException) -> str:
    """Describe a failed operation for the caller."""
    detail = str(error) or type(error).__name__
    return f"Failed to perform operation {operation}. Error: {detail}"
