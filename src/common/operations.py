# Copyright 2025 Nokia
# Licensed under the BSD 3-Clause License.
# SPDX-License-Identifier: BSD-3-Clause

"""
Shared building blocks for the per-family operation pipelines.

A tool call arrives as a flat bag of arguments with an ``operation``
discriminant. It is parsed into an ``OperationRequest`` (shape validation by
pydantic, then a required-field pass keyed on the operation) and mapped by a
family builder into a ``ResolvedRequest`` that the transport can send.
"""

import logging
import urllib.parse
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)

HTTPMethod = Literal["GET", "POST"]

NonEmptyStr = Annotated[str, Field(min_length=1)]
SoftFlag = Annotated[int, Field(ge=0, le=1)]

# Same unreserved set as JavaScript's encodeURIComponent
_QUERY_SAFE_CHARS = "-_.!~*'()"


@dataclass(frozen=True)
class ResolvedRequest:
    """A fully built HTTP call for one operation."""

    method: HTTPMethod
    url: str
    body: dict[str, Any] | None = None


@dataclass(frozen=True)
class ValidationIssue:
    """A single violated constraint on one argument."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class OperationValidationError(ValueError):
    """Raised when tool arguments do not satisfy the chosen operation."""

    def __init__(self, operation: str | None, issues: list[ValidationIssue]):
        self.operation = operation
        self.issues = issues
        lines = [f"Invalid arguments for operation '{operation}':"]
        lines.extend(f"- {issue}" for issue in issues)
        super().__init__("\n".join(lines))

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]


class OperationRequest(BaseModel):
    """Base for the discriminated, all-optional request of one resource family.

    Subclasses narrow ``operation`` to a ``Literal`` of their verbs and declare
    ``REQUIRED_FIELDS``, mapping each verb to the arguments it cannot do without.
    """

    model_config = ConfigDict(extra="forbid")

    REQUIRED_FIELDS: ClassVar[dict[str, tuple[str, ...]]] = {}

    operation: str

    @classmethod
    def missing_fields(
        cls, operation: str, values: Mapping[str, Any]
    ) -> list[ValidationIssue]:
        """Return one issue per required argument that is absent or null."""
        return [
            ValidationIssue(
                field=name,
                message=f"{name} is required when operation is '{operation}'",
            )
            for name in cls.REQUIRED_FIELDS.get(operation, ())
            if values.get(name) is None
        ]

    @property
    def is_delete(self) -> bool:
        return self.operation.split("_", 1)[0] == "delete"

    @property
    def is_soft_delete(self) -> bool:
        return self.is_delete and bool(getattr(self, "soft", None))

    def payload(
        self,
        *,
        exclude: set[str] | None = None,
        include: set[str] | None = None,
    ) -> dict[str, Any]:
        """Explicitly supplied arguments, minus the discriminant.

        Unset fields are left out while an explicit ``None`` is kept, so
        callers can tell "clear this" from "leave unchanged".
        """
        return self.model_dump(
            mode="json",
            exclude_unset=True,
            exclude={"operation", *(exclude or set())},
            include=include,
        )


def parse_operation(
    model_cls: type[OperationRequest], arguments: Mapping[str, Any]
) -> OperationRequest:
    """Validate raw tool arguments into a request of ``model_cls``.

    Shape errors and missing required arguments are collected together so
    the caller can correct every field in one go.
    """
    operation = arguments.get("operation")
    try:
        request = model_cls.model_validate(dict(arguments))
    except PydanticValidationError as e:
        issues = [
            ValidationIssue(
                field=".".join(str(part) for part in error["loc"]) or "arguments",
                message=error["msg"],
            )
            for error in e.errors()
        ]
        if isinstance(operation, str) and operation in model_cls.REQUIRED_FIELDS:
            reported = {issue.field for issue in issues}
            issues.extend(
                issue
                for issue in model_cls.missing_fields(operation, arguments)
                if issue.field not in reported
            )
        raise OperationValidationError(operation, issues) from e

    issues = model_cls.missing_fields(request.operation, request.model_dump())
    if issues:
        raise OperationValidationError(request.operation, issues)
    return request


def encode_query(params: Mapping[str, Any]) -> str:
    """Percent-encode the parameters that are set, in the given order."""
    parts = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = int(value)
        encoded_key = urllib.parse.quote(str(key), safe=_QUERY_SAFE_CHARS)
        encoded_value = urllib.parse.quote(str(value), safe=_QUERY_SAFE_CHARS)
        parts.append(f"{encoded_key}={encoded_value}")
    return "&".join(parts)


def build_url(
    api_url: str,
    verb: str,
    resource_id: int | None = None,
    query: Mapping[str, Any] | None = None,
) -> str:
    """Compose ``{api_url}/{verb}[/{id}][&query]``.

    The API root already carries the ``?`` (``index.php?/api/v2``), so extra
    parameters are appended with ``&``.
    """
    url = f"{api_url}/{verb}"
    if resource_id is not None:
        url += f"/{resource_id}"
    query_string = encode_query(query or {})
    if query_string:
        url += f"&{query_string}"
    return url


def soft_flag(value: bool | int | None) -> int:
    """TestRail expects the soft-delete switch as 1/0."""
    return 1 if value else 0
