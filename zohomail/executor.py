from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from zohomail.errors import BatchItemError, TokenError
from zohomail.logging import get_logger
from zohomail.operations.router import OperationRouter
from zohomail.transport.dispatch import RequestDispatcher

logger = get_logger(__name__)

REAUTHORIZE_HINT = "Please check if token is valid or try to reauthorize."


@dataclass(slots=True)
class OutputRecord:
    json: Any
    paired_item: int
    error: bool = False


def is_auth_error(exc: BaseException) -> bool:
    if isinstance(exc, TokenError):
        return True
    if getattr(exc, "status_code", None) == 401:
        return True
    return "token" in str(exc).lower()


def describe_failure(exc: BaseException) -> str:
    message = str(exc)
    if is_auth_error(exc):
        return f"Authentication error: {message}. {REAUTHORIZE_HINT}"
    return message


class BatchExecutor:
    """
    Runs one routed request per input item, strictly in order.

    With ``continue_on_fail`` a failing item yields an error record and the
    batch carries on; otherwise the first failure aborts the batch.
    """

    def __init__(
        self,
        router: OperationRouter,
        dispatcher: RequestDispatcher,
        *,
        continue_on_fail: bool = False,
    ) -> None:
        self.router = router
        self.dispatcher = dispatcher
        self.continue_on_fail = continue_on_fail

    def execute(
        self,
        items: Iterable[Mapping[str, Any]],
        *,
        resource: str | None = None,
        operation: str | None = None,
    ) -> list[OutputRecord]:
        records: list[OutputRecord] = []
        for index, params in enumerate(items):
            try:
                item_resource = params.get("resource", resource)
                item_operation = params.get("operation", operation)
                descriptor = self.router.route(item_resource, item_operation, params)
                response = self.dispatcher.send(descriptor)
            except Exception as exc:
                message = describe_failure(exc)
                details = getattr(exc, "response_body", None)
                logger.error("Error executing item %d: %s", index, message)

                if self.continue_on_fail:
                    records.append(
                        OutputRecord(
                            json={"error": message, "details": details},
                            paired_item=index,
                            error=True,
                        )
                    )
                    continue
                raise BatchItemError(
                    message,
                    item_index=index,
                    status_code=getattr(exc, "status_code", None),
                    response_body=details,
                ) from exc

            records.extend(
                OutputRecord(json=element, paired_item=index)
                for element in _as_sequence(response)
            )
        return records


def _as_sequence(response: Any) -> list[Any]:
    if isinstance(response, list):
        return response
    return [response]
