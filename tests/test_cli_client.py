from __future__ import annotations

import json
from typing import List

import httpx
import pytest
import typer

from cli.client import ApiClient
from cli.config import CLIConfig

CONFIG = CLIConfig(base_url="http://gateway.test", timeout=1.0)


def _client(handler) -> ApiClient:
    return ApiClient(CONFIG, transport=httpx.MockTransport(handler))


def test_lookup_posts_zipcode_and_returns_body() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"city": "São Paulo", "temp_C": 25.0})

    client = _client(handler)
    try:
        status, payload = client.lookup("01001000")
    finally:
        client.close()

    assert status == 200
    assert payload == {"city": "São Paulo", "temp_C": 25.0}
    (request,) = seen
    assert request.method == "POST"
    assert request.url.path == "/cep"
    assert json.loads(request.content) == {"cep": "01001000"}


def test_lookup_wraps_plain_text_errors() -> None:
    client = _client(lambda request: httpx.Response(502, text="Bad Gateway\n"))

    assert client.lookup("01001000") == (502, {"message": "Bad Gateway"})


def test_lookup_wraps_non_object_json() -> None:
    client = _client(lambda request: httpx.Response(200, json=["unexpected"]))

    assert client.lookup("01001000") == (200, {"message": "['unexpected']"})


def test_lookup_exits_when_gateway_is_unreachable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)

    with pytest.raises(typer.Exit) as excinfo:
        client.lookup("01001000")
    assert excinfo.value.exit_code == 1
