import pytest
import requests

from zohomail.errors import ZohoApiError
from zohomail.transport.http_transport import RequestsTransport


class DummyResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str | None = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else str(payload)
        self.content = b"" if payload is None and not text else self.text.encode()

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def test_request_passes_headers_params_and_timeout(monkeypatch):
    captured: dict = {}

    def fake_request(method, url, headers=None, params=None, json=None, timeout=None):
        captured.update(method=method, url=url, headers=headers, params=params, json=json, timeout=timeout)
        return DummyResponse(200, {"data": []})

    monkeypatch.setattr("zohomail.transport.http_transport.requests.request", fake_request)

    result = RequestsTransport(timeout=5).request(
        "POST",
        "https://mail.zoho.com/api/accounts/1/messages",
        headers={"Authorization": "Zoho-oauthtoken t"},
        json={"subject": "Hi"},
    )

    assert result == {"data": []}
    assert captured["method"] == "POST"
    assert captured["headers"] == {"Authorization": "Zoho-oauthtoken t"}
    assert captured["params"] is None
    assert captured["json"] == {"subject": "Hi"}
    assert captured["timeout"] == 5


def test_non_2xx_raises_with_status_and_body(monkeypatch):
    body = {"data": {"errorCode": "INVALID_OAUTHTOKEN"}, "status": {"code": 404}}
    monkeypatch.setattr(
        "zohomail.transport.http_transport.requests.request",
        lambda *a, **kw: DummyResponse(404, body),
    )

    with pytest.raises(ZohoApiError) as excinfo:
        RequestsTransport().request("GET", "https://mail.zoho.com/api/accounts", headers={})

    assert excinfo.value.status_code == 404
    assert excinfo.value.response_body == body


def test_non_json_error_body_is_kept_as_text(monkeypatch):
    monkeypatch.setattr(
        "zohomail.transport.http_transport.requests.request",
        lambda *a, **kw: DummyResponse(502, None, text="Bad Gateway"),
    )

    with pytest.raises(ZohoApiError) as excinfo:
        RequestsTransport().request("GET", "https://mail.zoho.com/api/accounts", headers={})

    assert excinfo.value.response_body == "Bad Gateway"


def test_network_failure_is_wrapped(monkeypatch):
    def fake_request(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr("zohomail.transport.http_transport.requests.request", fake_request)

    with pytest.raises(ZohoApiError) as excinfo:
        RequestsTransport().request("GET", "https://mail.zoho.com/api/accounts", headers={})

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_empty_body_returns_empty_mapping(monkeypatch):
    monkeypatch.setattr(
        "zohomail.transport.http_transport.requests.request",
        lambda *a, **kw: DummyResponse(204, None, text=""),
    )

    assert RequestsTransport().request("DELETE", "https://mail.zoho.com/api/x", headers={}) == {}
