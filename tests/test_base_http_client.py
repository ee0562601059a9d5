from __future__ import annotations

import asyncio
from typing import Any, Iterable, Optional

import pytest
import requests

import opencitations_mcp.providers.clients.base as base
from opencitations_mcp.providers.clients.base import (
    BaseHttpClient,
    DecodeError,
    ForbiddenError,
    NotFoundError,
    RateLimitedError,
    RequestFailedError,
    TransportError,
    UnauthorizedError,
)


class _StubSession:
    def __init__(self, responses: Iterable[Any]):
        self._responses = list(responses)
        self.headers: dict[str, str] = {}
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, timeout: float = 0, **kwargs: Any):
        self.calls.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        result = self._responses[len(self.calls) - 1]
        if isinstance(result, Exception):
            raise result
        return result


class _DummyClient(BaseHttpClient):
    BASE_URL = "https://example.test"

    def __init__(self, responses: Iterable[Any]):
        super().__init__(session=_StubSession(responses), timeout=2.5)

    @property
    def stub_session(self) -> _StubSession:
        return self.session  # type: ignore[return-value]


def _make_response(
    status: int,
    body: str = "",
    headers: Optional[dict[str, str]] = None,
    reason: Optional[str] = None,
):
    response = requests.Response()
    response.status_code = status
    response.reason = reason
    response._content = body.encode()
    response.url = "https://example.test/resource"
    response.headers.update(headers or {})
    response.encoding = "utf-8"
    return response


def test_default_headers_are_applied_to_session():
    client = _DummyClient([])

    assert client.session.headers["Accept"] == "application/json"
    assert client.session.headers["User-Agent"] == "opencitations-mcp"


def test_request_builds_url_and_passes_timeout():
    client = _DummyClient([_make_response(200, "[]")])

    client._request("GET", "/citations/doi:10.1/x")

    call = client.stub_session.calls[0]
    assert call["url"] == "https://example.test/citations/doi:10.1/x"
    assert call["timeout"] == 2.5


def test_authorization_header_is_sent_verbatim():
    client = _DummyClient([_make_response(200, "[]")])

    client._request("GET", "/resource", access_token="secret-token")

    assert client.stub_session.calls[0]["headers"]["Authorization"] == "secret-token"


def test_authorization_header_is_removed_without_token():
    client = _DummyClient([_make_response(200, "[]"), _make_response(200, "[]")])

    client._request("GET", "/resource")
    client._request("GET", "/resource", access_token="")

    for call in client.stub_session.calls:
        assert call["headers"]["Authorization"] is None


def test_http_400_raises_request_failed_error():
    response = _make_response(400, body="Bad request details" + "!" * 500, reason="Bad Request")
    client = _DummyClient([response])

    with pytest.raises(RequestFailedError) as excinfo:
        client._handle_response(response)

    assert excinfo.value.status == 400
    assert excinfo.value.reason == "Bad Request"
    assert str(excinfo.value) == "API request failed: 400 Bad Request"
    assert excinfo.value.body_excerpt is not None
    assert len(excinfo.value.body_excerpt) <= 200
    assert "Bad request details" in excinfo.value.body_excerpt


def test_http_401_and_403_raise_specific_errors():
    unauthorized = _make_response(401, body="token expired")
    forbidden = _make_response(403, body="denied")
    client = _DummyClient([unauthorized, forbidden])

    with pytest.raises(UnauthorizedError) as unauthorized_info:
        client._handle_response(unauthorized)
    with pytest.raises(ForbiddenError):
        client._handle_response(forbidden)

    assert unauthorized_info.value.status == 401


def test_http_404_raises_not_found():
    response = _make_response(404, reason="Not Found")
    client = _DummyClient([response])

    with pytest.raises(NotFoundError) as excinfo:
        client._handle_response(response)

    assert isinstance(excinfo.value, RequestFailedError)
    assert excinfo.value.status == 404


def test_http_429_is_not_retried_and_reports_retry_after():
    rate_limited = _make_response(429, headers={"Retry-After": "7"})
    client = _DummyClient([rate_limited, _make_response(200, "[]")])

    with pytest.raises(RateLimitedError) as excinfo:
        client._request("GET", "/resource")

    assert excinfo.value.status == 429
    assert excinfo.value.retry_after == 7
    assert len(client.stub_session.calls) == 1


def test_http_500_is_not_retried():
    client = _DummyClient([_make_response(503, reason="Service Unavailable"), _make_response(200, "[]")])

    with pytest.raises(RequestFailedError) as excinfo:
        client._request("GET", "/resource")

    assert excinfo.value.status == 503
    assert len(client.stub_session.calls) == 1


@pytest.mark.parametrize(
    "failure",
    [requests.ConnectionError("refused"), requests.Timeout("too slow")],
)
def test_network_failures_raise_transport_error(failure):
    client = _DummyClient([failure])

    with pytest.raises(TransportError) as excinfo:
        client._request("GET", "/resource")

    assert excinfo.value.__cause__ is failure


def test_request_json_decodes_body():
    client = _DummyClient([_make_response(200, '[{"count": "3"}]')])

    payload = asyncio.run(client._request_json("/resource"))

    assert payload == [{"count": "3"}]


def test_request_json_rejects_invalid_json():
    client = _DummyClient([_make_response(200, "<html>oops</html>")])

    with pytest.raises(DecodeError):
        asyncio.run(client._request_json("/resource"))


def test_parse_retry_after_handles_missing_and_invalid_values():
    assert base._parse_retry_after(None) is None
    assert base._parse_retry_after("not a date") is None
    assert base._parse_retry_after("Wed, 21 Oct 2015 07:28:00 GMT") == 0.0


def test_accept_header_overrides_requests_default():
    session = requests.Session()
    assert session.headers["Accept"] == "*/*"

    client = BaseHttpClient(session=session)

    assert client.session.headers["Accept"] == "application/json"


def test_request_sends_json_accept_header_and_leaves_session_untouched():
    client = _DummyClient([_make_response(200, "[]")])

    client._request("GET", "/resource", access_token="secret-token")

    assert client.stub_session.calls[0]["headers"]["Accept"] == "application/json"
    assert "Authorization" not in client.session.headers
