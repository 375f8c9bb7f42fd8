from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

from zohomail.errors import ConfigurationError, MissingParameterError
from zohomail.operations.addresses import normalize_address_list, normalize_single_address
from zohomail.operations.schema import GET_MANY_FILTERS, OperationSpec, get_operation
from zohomail.transport.models import RequestDescriptor

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 50
MAIL_FORMATS = ("html", "plaintext")

# POST /messages doubles as "save draft"; the body field marking a draft is configurable.
DEFAULT_DRAFT_FIELD = "mode"
DEFAULT_DRAFT_VALUE = "draft"


class OperationRouter:
    """
    Turns a (resource, operation) selection plus item parameters into a
    RequestDescriptor. Performs no I/O.
    """

    def __init__(
        self,
        *,
        draft_field: str = DEFAULT_DRAFT_FIELD,
        draft_value: Any = DEFAULT_DRAFT_VALUE,
    ) -> None:
        if not draft_field:
            raise ValueError("draft_field must be a non-empty string.")
        self.draft_field = draft_field
        self.draft_value = draft_value

    def route(
        self,
        resource: str,
        operation: str,
        params: Mapping[str, Any] | None = None,
    ) -> RequestDescriptor:
        spec = get_operation(resource, operation)
        params = params or {}
        values = self._require(spec, params)

        endpoint = spec.path.format(**{name: quote(value, safe="") for name, value in values.items()})
        query: dict[str, Any] = {}
        body: dict[str, Any] = {}

        if spec.resource == "message" and spec.operation == "getMany":
            query = self._message_list_query(params)
        elif spec.resource == "message" and spec.operation in ("send", "saveDraft"):
            body = self._message_body(values, params, draft=spec.operation == "saveDraft")

        return RequestDescriptor(method=spec.method, endpoint=endpoint, query=query, body=body)

    # -------------
    # helpers
    # -------------
    def _require(self, spec: OperationSpec, params: Mapping[str, Any]) -> dict[str, str]:
        values: dict[str, str] = {}
        for name in spec.required:
            value = params.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MissingParameterError(name, spec.resource, spec.operation)
            if name == "content":
                values[name] = str(value)  # message bodies keep their whitespace
            else:
                values[name] = str(value).strip()
        return values

    def _message_list_query(self, params: Mapping[str, Any]) -> dict[str, Any]:
        additional = _additional_fields(params)

        if _coerce_bool(params.get("returnAll")):
            limit = MAX_PAGE_SIZE
        else:
            limit = params.get("limit")
            limit = DEFAULT_PAGE_SIZE if limit in (None, "") else _coerce_limit(limit)

        query: dict[str, Any] = {"limit": limit, "start": 1}
        for name in GET_MANY_FILTERS:
            value = additional.get(name)
            if value not in (None, ""):
                query[name] = value
        return query

    def _message_body(
        self,
        values: Mapping[str, str],
        params: Mapping[str, Any],
        *,
        draft: bool,
    ) -> dict[str, Any]:
        additional = _additional_fields(params)

        mail_format = additional.get("mailFormat") or "html"
        if mail_format not in MAIL_FORMATS:
            raise ConfigurationError(
                f"Unsupported mailFormat '{mail_format}'; expected one of {', '.join(MAIL_FORMATS)}."
            )

        body: dict[str, Any] = {
            "fromAddress": normalize_single_address(values["fromAddress"], field="fromAddress"),
            "toAddress": normalize_address_list(values["toEmail"], field="toEmail"),
            "subject": values["subject"],
            "content": values["content"],
            "mailFormat": mail_format,
        }
        if draft:
            body[self.draft_field] = self.draft_value
        if additional.get("ccEmail"):
            body["ccAddress"] = normalize_address_list(additional["ccEmail"], field="ccEmail")
        if additional.get("bccEmail"):
            body["bccAddress"] = normalize_address_list(additional["bccEmail"], field="bccEmail")
        if additional.get("fromName"):
            body["fromName"] = str(additional["fromName"])
        return body


def _additional_fields(params: Mapping[str, Any]) -> Mapping[str, Any]:
    additional = params.get("additionalFields")
    if additional is None:
        return {}
    if not isinstance(additional, Mapping):
        raise ConfigurationError("additionalFields must be a mapping.")
    return additional


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y", "on")
    return bool(value)


def _coerce_limit(value: Any) -> int:
    try:
        limit = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"limit must be a number, got {value!r}.") from None
    return max(1, min(limit, MAX_PAGE_SIZE))
