from __future__ import annotations

from typing import Any, Mapping, Protocol

import requests

from zohomail.errors import ZohoApiError
from zohomail.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30.0


class HttpTransport(Protocol):
    """The single "perform HTTP request" primitive the gateway relies on.

    Implementations return the decoded JSON body and raise ZohoApiError for
    non-2xx responses and network failures.
    """

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        params: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


class RequestsTransport:
    """
    Sends requests to Zoho with the ``requests`` library.
    """

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        params: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> Any:
        logger.debug("%s %s params=%s", method, url, sorted((params or {}).keys()))
        try:
            resp = requests.request(
                method,
                url,
                headers=dict(headers),
                params=dict(params) if params else None,
                json=dict(json) if json else None,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise ZohoApiError(f"Zoho request failed: {method} {url}: {exc}") from exc

        body = self._decode_body(resp)
        if not 200 <= resp.status_code < 300:
            raise ZohoApiError(
                f"Zoho request failed: {resp.status_code} {resp.text}",
                status_code=resp.status_code,
                response_body=body,
            )
        return body

    @staticmethod
    def _decode_body(resp: requests.Response) -> Any:
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError:
            return resp.text
