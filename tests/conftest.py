"""Shared fixtures: a fixed ServerConfig, a mocked SendForSign backend and fake tool contexts."""

import json
import os
import sys
from types import SimpleNamespace

import httpx
import pytest

# Ensure project root is on sys.path so `core`, `tools` and `server` resolve
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from core.backend import SendForSignClient  # noqa: E402
from core.config import ServerConfig  # noqa: E402


def make_ctx(headers=None):
    """Mimic FastMCP's Context: headers=None behaves like the stdio transport."""
    request = SimpleNamespace(headers=headers) if headers is not None else None
    return SimpleNamespace(request_context=SimpleNamespace(request=request))


class FakeBackend:
    """Records outgoing requests and answers each one with a fixed status and body."""

    def __init__(self, status_code=200, body='{"ok": true}'):
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body.encode("utf-8"))

    def client(self, config: ServerConfig) -> SendForSignClient:
        return SendForSignClient(config, transport=httpx.MockTransport(self.handler))

    def sent_json(self, index=-1):
        return json.loads(self.requests[index].content)


@pytest.fixture
def env_config():
    """stdio mode with credentials only in the environment."""
    return ServerConfig(api_key="env-api", client_key="env-client")


@pytest.fixture
def http_config():
    return ServerConfig(api_key="env-api", client_key="env-client", http_mode=True, host="0.0.0.0")


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def fake_ctx():
    return make_ctx


@pytest.fixture
def backend_factory():
    return FakeBackend
