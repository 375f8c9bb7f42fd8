from typing import Any

import pytest

from zohomail.credentials import Credentials, OAuthTokenData
from zohomail.errors import ZohoApiError


class FakeTransport:
    """Scripted transport: each call pops the next response (or raises it)."""

    def __init__(self, responses: list[Any] | None = None) -> None:
        self._responses = list(responses or [])
        self.calls: list[dict] = []

    def queue(self, *responses: Any) -> "FakeTransport":
        self._responses.extend(responses)
        return self

    def request(self, method, url, *, headers, params=None, json=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": dict(headers),
                "params": dict(params) if params else None,
                "json": dict(json) if json else None,
            }
        )
        if not self._responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    def calls_to(self, fragment: str) -> list[dict]:
        return [call for call in self.calls if fragment in call["url"]]


def invalid_token_error() -> ZohoApiError:
    return ZohoApiError(
        "Zoho request failed: 404",
        status_code=404,
        response_body={
            "data": {"errorCode": "INVALID_OAUTHTOKEN"},
            "status": {"code": 404, "description": "Invalid Input"},
        },
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(
        client_id="client-123",
        client_secret="secret-456",
        data_center="eu",
        oauth_token_data=OAuthTokenData(
            access_token="old-token",
            refresh_token="refresh-abc",
            expires_in=3600,
            expires_at=1_000,
        ),
    )
