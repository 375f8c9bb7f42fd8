"""Authenticated request gateway for the Zoho Mail API.

Every call carries ``Authorization: Zoho-oauthtoken <token>``. Zoho reports an
expired or revoked token as HTTP 404 with ``data.errorCode`` set to
``INVALID_OAUTHTOKEN`` (not 401); on that signal the dispatcher refreshes the
token once and resends the request once.
"""

from __future__ import annotations

import threading
from typing import Any, Mapping

from zohomail.auth.token_refresh import TokenRefresher
from zohomail.common.config import HttpMethod
from zohomail.credentials.models import Credentials
from zohomail.credentials.region import resolve_region
from zohomail.errors import ZohoApiError
from zohomail.logging import get_logger
from zohomail.transport.http_transport import HttpTransport
from zohomail.transport.models import RequestDescriptor

logger = get_logger(__name__)

INVALID_TOKEN_STATUS = 404
INVALID_TOKEN_ERROR_CODE = "INVALID_OAUTHTOKEN"


def is_invalid_token_error(exc: BaseException) -> bool:
    """True only for HTTP 404 whose body has ``data.errorCode == "INVALID_OAUTHTOKEN"``."""
    if not isinstance(exc, ZohoApiError) or exc.status_code != INVALID_TOKEN_STATUS:
        return False
    body = exc.response_body
    if not isinstance(body, Mapping):
        return False
    data = body.get("data")
    if not isinstance(data, Mapping):
        return False
    return data.get("errorCode") == INVALID_TOKEN_ERROR_CODE


def authorization_header(access_token: str | None) -> str:
    return f"Zoho-oauthtoken {access_token or ''}"


class RequestDispatcher:
    def __init__(
        self,
        credentials: Credentials,
        transport: HttpTransport,
        refresher: TokenRefresher | None = None,
    ) -> None:
        self.credentials = credentials
        self._transport = transport
        self._refresher = refresher or TokenRefresher(transport)
        self._refresh_lock = threading.Lock()

    def dispatch(
        self,
        method: HttpMethod,
        endpoint: str,
        body: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        uri: str | None = None,
    ) -> Any:
        descriptor = RequestDescriptor(
            method=method,
            endpoint=endpoint,
            body=body or {},
            query=query or {},
            uri=uri,
        )
        return self.send(descriptor)

    def send(self, descriptor: RequestDescriptor) -> Any:
        """Send once; on an invalid-token reply refresh once and resend once."""
        url = descriptor.url(resolve_region(self.credentials.data_center).api_base_url)

        refreshed = False
        access_token = self.credentials.access_token
        if not access_token and self.credentials.refresh_token:
            logger.info("No access token available; refreshing before first request")
            access_token = self._refresh()
            refreshed = True

        try:
            return self._issue(descriptor, url, access_token)
        except ZohoApiError as exc:
            if refreshed or not is_invalid_token_error(exc):
                raise
            logger.info("Zoho rejected the access token for %s %s; refreshing", descriptor.method, url)

        access_token = self._refresh()
        return self._issue(descriptor, url, access_token)

    def _refresh(self) -> str:
        with self._refresh_lock:
            record = self._refresher.refresh(self.credentials)
            self.credentials.apply_token(record)
        return record.access_token

    def _issue(self, descriptor: RequestDescriptor, url: str, access_token: str | None) -> Any:
        headers = {
            "Accept": "application/json",
            "Authorization": authorization_header(access_token),
        }
        return self._transport.request(
            descriptor.method,
            url,
            headers=headers,
            params=dict(descriptor.query) or None,
            json=dict(descriptor.body) or None,
        )
