"""Tests for the Extras proxy client."""

import httpx
import pytest

from conftest import PROXY_BASE, RecordingHandler, json_response
from itgfetch.extras import ExtrasClient


def client_with(handler, **kwargs):
    return ExtrasClient(PROXY_BASE, transport=httpx.MockTransport(handler), **kwargs)


def test_get_api_url():
    assert ExtrasClient(PROXY_BASE).get_api_url() == PROXY_BASE


def test_default_headers_without_key():
    headers = ExtrasClient(PROXY_BASE).default_headers()
    assert headers == {"Bypass-Tunnel-Reminder": "bypass"}


@pytest.mark.asyncio
async def test_fetch_sends_api_key_and_caller_headers():
    handler = RecordingHandler(json_response({"ok": True}))
    client = client_with(handler, api_key="secret")

    response = await client.fetch(
        f"{PROXY_BASE}/api/test",
        method="put",
        headers={"Content-Type": "application/json"},
        content='{"a":1}',
    )

    assert response.json() == {"ok": True}
    request = handler.requests[0]
    assert request.method == "PUT"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Bypass-Tunnel-Reminder"] == "bypass"
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == b'{"a":1}'


@pytest.mark.asyncio
async def test_caller_headers_override_defaults():
    handler = RecordingHandler(json_response({}))
    client = client_with(handler, api_key="secret")

    await client.fetch(f"{PROXY_BASE}/api/test", headers={"Authorization": "Bearer other"})

    assert handler.requests[0].headers["Authorization"] == "Bearer other"


@pytest.mark.asyncio
async def test_fetch_propagates_transport_errors():
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    client = client_with(refuse)
    with pytest.raises(httpx.ConnectError):
        await client.fetch(f"{PROXY_BASE}/api/test")
