"""OAuth2 refresh-token grant against the Zoho accounts server."""

from __future__ import annotations

import time
from typing import Any, Callable

from zohomail.credentials.models import Credentials, TokenRecord
from zohomail.credentials.region import resolve_region
from zohomail.errors import (
    InvalidTokenResponseError,
    MissingRefreshTokenError,
    TokenRefreshError,
    ZohoApiError,
)
from zohomail.logging import get_logger
from zohomail.transport.http_transport import HttpTransport

logger = get_logger(__name__)

DEFAULT_EXPIRES_IN = 3600


class TokenRefresher:
    """
    Exchanges a refresh token for a new access token.

    The refresher never mutates the Credentials it is given; it returns a
    TokenRecord and leaves the write-back to the caller.
    """

    def __init__(
        self,
        transport: HttpTransport,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._transport = transport
        self._clock = clock

    def refresh(self, credentials: Credentials) -> TokenRecord:
        refresh_token = credentials.refresh_token
        if not refresh_token:
            raise MissingRefreshTokenError()

        token_url = resolve_region(credentials.data_center).token_url
        params = {
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
            "client_id": credentials.client_id or "",
            "client_secret": credentials.client_secret or "",
        }

        logger.info("Refreshing Zoho Mail access token via %s", token_url)
        try:
            response = self._transport.request(
                "POST",
                token_url,
                headers={"Accept": "application/json"},
                params=params,
            )
        except ZohoApiError as exc:
            logger.error("Token refresh failed: %s", exc)
            raise TokenRefreshError(
                f"Token refresh failed: {exc}",
                status_code=exc.status_code,
                response_body=exc.response_body,
            ) from exc

        return self._to_record(response)

    def _to_record(self, response: Any) -> TokenRecord:
        if not isinstance(response, dict) or not response.get("access_token"):
            # Zoho answers 200 with {"error": "invalid_code"} for revoked refresh tokens.
            error = response.get("error") if isinstance(response, dict) else None
            if error:
                raise InvalidTokenResponseError(
                    f"Invalid response from Zoho token endpoint: {error}"
                )
            raise InvalidTokenResponseError()

        expires_in = _coerce_expires_in(response.get("expires_in"))
        now_ms = int(self._clock() * 1000)
        logger.info("Zoho Mail access token refreshed (expires in %ss)", expires_in)
        return TokenRecord(
            access_token=str(response["access_token"]),
            expires_in=expires_in,
            expires_at=now_ms + expires_in * 1000,
        )


def _coerce_expires_in(value: Any) -> int:
    if value is None or value == "":
        return DEFAULT_EXPIRES_IN
    try:
        return int(value)
    except (TypeError, ValueError):
        return DEFAULT_EXPIRES_IN
