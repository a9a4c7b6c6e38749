"""Shared fixtures: dispatchers wired to httpx mock transports."""

import json

import httpx
import pytest

from itgfetch.config import Settings
from itgfetch.fetch_command import create_dispatcher

PROXY_BASE = "http://extras.test:5100"


class RecordingHandler:
    """MockTransport handler that remembers every request it saw."""

    def __init__(self, respond):
        self.respond = respond
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)


def json_response(payload, status_code=200):
    return lambda request: httpx.Response(status_code, json=payload)


def echo_body(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=request.content, headers={"Content-Type": "application/json"})


def network_fault(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("Connection refused", request=request)


def build(basic=None, extras=None, **settings):
    """Dispatcher plus the handlers behind its basic and extras transports."""
    basic = RecordingHandler(basic or json_response({}))
    extras = RecordingHandler(extras or echo_body)
    dispatcher = create_dispatcher(
        Settings(extras_api_url=settings.pop("extras_api_url", PROXY_BASE), **settings),
        transport=httpx.MockTransport(basic),
        extras_transport=httpx.MockTransport(extras),
    )
    return dispatcher, basic, extras


@pytest.fixture
def settings():
    return Settings(extras_api_url=PROXY_BASE, extras_api_key="secret")


def sent_json(request: httpx.Request):
    return json.loads(request.content)
