import pytest

from zohomail.auth import TokenRefresher
from zohomail.credentials import Credentials, OAuthTokenData
from zohomail.errors import InvalidTokenResponseError, MissingRefreshTokenError, ZohoApiError
from zohomail.transport.dispatch import RequestDispatcher, is_invalid_token_error
from zohomail.transport.models import RequestDescriptor

from conftest import invalid_token_error

FIXED_NOW = 1_700_000_000.0


def make_dispatcher(credentials, transport):
    return RequestDispatcher(
        credentials,
        transport,
        TokenRefresher(transport, clock=lambda: FIXED_NOW),
    )


def test_dispatch_sends_authorized_request(transport, credentials):
    transport.queue({"data": [{"accountId": "1"}]})
    dispatcher = make_dispatcher(credentials, transport)

    response = dispatcher.dispatch("GET", "/accounts", query={"limit": 5})

    assert response == {"data": [{"accountId": "1"}]}
    call = transport.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://mail.zoho.eu/api/accounts"
    assert call["headers"]["Authorization"] == "Zoho-oauthtoken old-token"
    assert call["headers"]["Accept"] == "application/json"
    assert call["params"] == {"limit": 5}
    assert call["json"] is None


def test_absolute_uri_overrides_endpoint(transport, credentials):
    transport.queue({})
    dispatcher = make_dispatcher(credentials, transport)

    dispatcher.dispatch("GET", "/ignored", uri="https://mail.zoho.eu/api/custom")

    assert transport.calls[0]["url"] == "https://mail.zoho.eu/api/custom"


def test_invalid_token_triggers_one_refresh_and_one_retry(transport, credentials):
    transport.queue(
        invalid_token_error(),
        {"access_token": "new-token", "expires_in": 3600},
        {"data": "ok"},
    )
    dispatcher = make_dispatcher(credentials, transport)

    response = dispatcher.send(RequestDescriptor("POST", "/accounts/1/messages", body={"subject": "Hi"}))

    assert response == {"data": "ok"}
    assert len(transport.calls_to("/oauth/v2/token")) == 1
    api_calls = transport.calls_to("/api/accounts/1/messages")
    assert len(api_calls) == 2
    assert api_calls[0]["headers"]["Authorization"] == "Zoho-oauthtoken old-token"
    assert api_calls[1]["headers"]["Authorization"] == "Zoho-oauthtoken new-token"
    assert api_calls[0]["json"] == api_calls[1]["json"] == {"subject": "Hi"}

    assert credentials.access_token == "new-token"
    assert credentials.refresh_token == "refresh-abc"
    assert credentials.oauth_token_data.expires_at == int(FIXED_NOW * 1000) + 3_600_000


def test_second_invalid_token_is_propagated_without_another_refresh(transport, credentials):
    second = invalid_token_error()
    transport.queue(
        invalid_token_error(),
        {"access_token": "new-token", "expires_in": 3600},
        second,
    )
    dispatcher = make_dispatcher(credentials, transport)

    with pytest.raises(ZohoApiError) as excinfo:
        dispatcher.dispatch("GET", "/accounts")

    assert excinfo.value is second
    assert len(transport.calls_to("/oauth/v2/token")) == 1
    assert len(transport.calls_to("/api/accounts")) == 2


def test_refresh_failure_propagates_instead_of_request_error(transport, credentials):
    transport.queue(invalid_token_error(), {"error": "invalid_code"})
    dispatcher = make_dispatcher(credentials, transport)

    with pytest.raises(InvalidTokenResponseError):
        dispatcher.dispatch("GET", "/accounts")

    assert credentials.refresh_token == "refresh-abc"
    assert credentials.access_token == "old-token"
    assert len(transport.calls) == 2


def test_missing_refresh_token_after_invalid_token(transport):
    creds = Credentials(client_id="c", oauth_token_data=OAuthTokenData(access_token="stale"))
    transport.queue(invalid_token_error())
    dispatcher = make_dispatcher(creds, transport)

    with pytest.raises(MissingRefreshTokenError):
        dispatcher.dispatch("GET", "/accounts")

    assert len(transport.calls) == 1


def test_other_errors_are_not_retried(transport, credentials):
    failure = ZohoApiError("server error", status_code=500, response_body={"status": {"code": 500}})
    transport.queue(failure)
    dispatcher = make_dispatcher(credentials, transport)

    with pytest.raises(ZohoApiError) as excinfo:
        dispatcher.dispatch("GET", "/accounts")

    assert excinfo.value is failure
    assert len(transport.calls) == 1


def test_missing_access_token_refreshes_before_first_send(transport):
    creds = Credentials(client_id="c", oauth_token_data=OAuthTokenData(refresh_token="ref"))
    transport.queue({"access_token": "fresh", "expires_in": 60}, invalid_token_error())
    dispatcher = make_dispatcher(creds, transport)

    with pytest.raises(ZohoApiError):
        dispatcher.dispatch("GET", "/accounts")

    # the up-front refresh is the only one allowed
    assert len(transport.calls_to("/oauth/v2/token")) == 1
    assert len(transport.calls_to("/api/accounts")) == 1
    assert transport.calls[1]["headers"]["Authorization"] == "Zoho-oauthtoken fresh"


@pytest.mark.parametrize(
    "error, expected",
    [
        (invalid_token_error(), True),
        (ZohoApiError("x", status_code=401, response_body={"data": {"errorCode": "INVALID_OAUTHTOKEN"}}), False),
        (ZohoApiError("x", status_code=404, response_body={"data": {"errorCode": "NOT_FOUND"}}), False),
        (ZohoApiError("x", status_code=404, response_body="INVALID_OAUTHTOKEN"), False),
        (ZohoApiError("x", status_code=404, response_body={"data": ["INVALID_OAUTHTOKEN"]}), False),
        (RuntimeError("INVALID_OAUTHTOKEN"), False),
    ],
)
def test_invalid_token_predicate(error, expected):
    assert is_invalid_token_error(error) is expected
