"""
Tests for the HTTP transport.
"""
import pytest
import requests

from squid_sdk.exceptions import TransportError
from squid_sdk.transport import HttpAdapter, HttpResponse

BASE = "https://api.example.com/"


@pytest.fixture
def adapter():
    http = HttpAdapter(BASE, headers={"x-integrator-id": "abc"}, timeout=5, retry_count=2)
    yield http
    http.close()


def test_session_has_retry_adapter(adapter):
    mounted = adapter.session.get_adapter(BASE)
    assert mounted.max_retries.total == 2
    assert 503 in mounted.max_retries.status_forcelist
    assert adapter.session.headers["x-integrator-id"] == "abc"


def test_get_returns_body_headers_and_status(adapter, requests_mock):
    mock = requests_mock.get(BASE + "v1/status", json={"ok": True}, headers={"X-Request-Id": "r1"})

    response = adapter.get("/v1/status", params={"transactionId": "0x1"}, headers={"x-extra": "1"})

    assert response.data == {"ok": True}
    assert response.status == 200
    assert response.header("x-request-id") == "r1"
    assert response.header("missing") is None
    assert mock.last_request.headers["x-extra"] == "1"
    assert mock.last_request.headers["x-integrator-id"] == "abc"
    assert mock.last_request.timeout == 5


def test_error_status_does_not_raise(adapter, requests_mock):
    requests_mock.post(BASE + "v1/route", json={"error": "bad"}, status_code=400)

    response = adapter.post("v1/route", json={"fromChain": "1"})

    assert response.status == 400
    assert response.data == {"error": "bad"}
    assert requests_mock.last_request.json() == {"fromChain": "1"}


def test_non_json_body(adapter, requests_mock):
    requests_mock.get(BASE + "v1/sdk-info", text="<html>oops</html>", status_code=502,
                      headers={"Content-Type": "text/html"})

    response = adapter.get("v1/sdk-info")

    assert response.data == {"error": "<html>oops</html>"}


def test_connection_failure(adapter, requests_mock):
    requests_mock.get(BASE + "v1/sdk-info", exc=requests.ConnectTimeout("timed out"))

    with pytest.raises(TransportError, match="Request to https://api.example.com/v1/sdk-info failed"):
        adapter.get("v1/sdk-info")


def test_http_response_header_lookup():
    response = HttpResponse(data={}, headers={"Content-Type": "application/json"}, status=200)
    assert response.header("content-type") == "application/json"
