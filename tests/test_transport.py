from __future__ import annotations

import json

import httpx
import pytest

from shsuggest.common.errors import TransportError
from shsuggest.ollama.transport import Transport


def _transport(handler) -> Transport:  # noqa: ANN001
    return Transport("http://ollama.test:11434/", timeout=5, transport=httpx.MockTransport(handler))


def test_post_sends_compact_json() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content.decode()
        seen["ctype"] = request.headers["content-type"]
        return httpx.Response(200, json={"response": "ok"})

    data = _transport(handler).post("/api/generate", {"model": "m", "stream": False})
    assert data == {"response": "ok"}
    assert seen["url"] == "http://ollama.test:11434/api/generate"
    assert seen["body"] == '{"model":"m","stream":false}'
    assert seen["ctype"] == "application/json"


def test_timeout_reaches_the_request() -> None:
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["timeout"] = request.extensions["timeout"]
        return httpx.Response(200, json={})

    _transport(handler).get("/api/tags")
    assert seen["timeout"] == {"connect": 5, "read": 5, "write": 5, "pool": 5}


def test_get_returns_object() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        return httpx.Response(200, json={"models": []})

    assert _transport(handler).get("/api/tags") == {"models": []}


def test_http_error_carries_status_and_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text='{"error":"model not found"}')

    with pytest.raises(TransportError) as exc_info:
        _transport(handler).post("/api/generate", {})
    assert exc_info.value.status_code == 404
    assert exc_info.value.body == '{"error":"model not found"}'
    assert "HTTP 404" in str(exc_info.value)


def test_network_failure_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with pytest.raises(TransportError) as exc_info:
        _transport(handler).get("/api/tags")
    assert "Connection refused" in str(exc_info.value)
    assert exc_info.value.status_code is None


def test_timeout_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(TransportError):
        _transport(handler).post("/api/generate", {})


@pytest.mark.parametrize("body", ["not json", json.dumps([1, 2]), '"text"'])
def test_non_object_body_is_rejected(body: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text=body)

    with pytest.raises(TransportError) as exc_info:
        _transport(handler).get("/api/tags")
    assert exc_info.value.body == body
