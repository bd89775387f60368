"""
Shared fixtures for Gateway tests.
"""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from shared.config import GatewayConfig
from servex_gateway.app.main import create_app


BACKEND_URL = "http://backend.test"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeBackend:
    """Scriptable stand-in for the restaurant backend."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._handlers: Dict[Tuple[str, str], Handler] = {}

    def on(self, method: str, path: str, handler: Handler) -> None:
        self._handlers[(method, path)] = handler

    def respond(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        *,
        json_body: Any = None,
        text: Optional[str] = None,
    ) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            if json_body is not None:
                return httpx.Response(status_code, json=json_body)
            return httpx.Response(status_code)

        self.on(method, path, _handler)

    def echo(self, method: str, path: str, status_code: int) -> None:
        """Answer with the request body unchanged."""

        def _handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=json.loads(request.content))

        self.on(method, path, _handler)

    def unreachable(self, method: str, path: str) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        self.on(method, path, _handler)

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._handlers.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, text="Not Found")
        return handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now_ms: int = 1_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    return GatewayConfig(
        backend_base_url=BACKEND_URL,
        item_cache_ttl_ms=30000,
        static_dir="",
    )


@pytest.fixture
def client(config, backend, clock):
    """Test client wired to the fake backend."""
    app = create_app(config, transport=backend.transport, clock=clock)
    return TestClient(app)


@pytest.fixture
def service(client):
    return client.app.state.gateway_service
