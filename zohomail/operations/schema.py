"""Static (resource, operation) table.

Validation in the router and the generated parameter reference both read this
table; nothing else decides which parameters an operation takes.
"""

from __future__ import annotations

from dataclasses import dataclass

from zohomail.common.config import HttpMethod
from zohomail.errors import UnsupportedOperationError

SEND_REQUIRED = ("accountId", "fromAddress", "toEmail", "subject", "content")
SEND_OPTIONAL = (
    "additionalFields.ccEmail",
    "additionalFields.bccEmail",
    "additionalFields.fromName",
    "additionalFields.mailFormat",
)
GET_MANY_FILTERS = ("folderId", "status", "from", "to", "subject", "content", "sortby", "sortorder")


@dataclass(frozen=True, slots=True)
class OperationSpec:
    resource: str
    operation: str
    method: HttpMethod
    path: str
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    description: str = ""


OPERATIONS: dict[tuple[str, str], OperationSpec] = {
    (spec.resource, spec.operation): spec
    for spec in (
        OperationSpec(
            "message", "get", "GET",
            "/accounts/{accountId}/folders/{folderId}/messages/{messageId}/content",
            required=("accountId", "folderId", "messageId"),
            description="Get a specific message",
        ),
        OperationSpec(
            "message", "getMany", "GET",
            "/accounts/{accountId}/messages/view",
            required=("accountId",),
            optional=("returnAll", "limit") + tuple(f"additionalFields.{name}" for name in GET_MANY_FILTERS),
            description="Get many messages",
        ),
        OperationSpec(
            "message", "send", "POST",
            "/accounts/{accountId}/messages",
            required=SEND_REQUIRED,
            optional=SEND_OPTIONAL,
            description="Send a message",
        ),
        OperationSpec(
            "message", "saveDraft", "POST",
            "/accounts/{accountId}/messages",
            required=SEND_REQUIRED,
            optional=SEND_OPTIONAL,
            description="Save message as draft",
        ),
        OperationSpec(
            "folder", "get", "GET",
            "/accounts/{accountId}/folders/{folderId}",
            required=("accountId", "folderId"),
            description="Get a folder",
        ),
        OperationSpec(
            "folder", "getMany", "GET",
            "/accounts/{accountId}/folders",
            required=("accountId",),
            description="Get many folders",
        ),
        OperationSpec(
            "account", "get", "GET",
            "/accounts/{accountId}",
            required=("accountId",),
            description="Get account details",
        ),
        OperationSpec(
            "account", "getAll", "GET",
            "/accounts",
            description="Get all user accounts",
        ),
    )
}


def get_operation(resource: object, operation: object) -> OperationSpec:
    spec = OPERATIONS.get((resource, operation))  # type: ignore[arg-type]
    if spec is None:
        raise UnsupportedOperationError(resource, operation)
    return spec


def required_parameters(resource: str, operation: str) -> tuple[str, ...]:
    return get_operation(resource, operation).required


def optional_parameters(resource: str, operation: str) -> tuple[str, ...]:
    return get_operation(resource, operation).optional


def describe_operations() -> str:
    """Markdown reference of every supported operation."""
    lines = [
        "| resource | operation | method | path | required | optional |",
        "|---|---|---|---|---|---|",
    ]
    for spec in OPERATIONS.values():
        lines.append(
            f"| {spec.resource} | {spec.operation} | {spec.method} | {spec.path} "
            f"| {', '.join(spec.required) or '-'} | {', '.join(spec.optional) or '-'} |"
        )
    return "\n".join(lines)
