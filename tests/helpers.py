"""
Test Helper Utilities

Reusable helpers for common test patterns to ensure consistency
and reduce boilerplate across the test suite.
"""

from contextlib import contextmanager
from typing import Any, Callable, Optional

import httpx
from fastapi.testclient import TestClient

from core.config import Settings

TEST_CREDENTIALS = {
    "lightbox_key": "lb-test-key",
    "anthropic_key": "an-test-key",
    "rentcast_key": "rc-test-key",
    "reapi_key": "re-test-key",
    "reapi_secret": "re-test-user",
    "regrid_token": "rg-test-token",
}


def make_settings(**overrides: Any) -> Settings:
    """
    Settings isolated from the process environment and any .env file.

    Every field is passed explicitly (declared default, test credential or
    override), so no environment variable can leak in.

    Usage:
        settings = make_settings(lightbox_key=None)
    """
    values: dict[str, Any] = {
        name: field.get_default(call_default_factory=True) for name, field in Settings.model_fields.items()
    }
    values.update({"_env_file": None, "environment": "test", "log_format": "text", **TEST_CREDENTIALS})
    values.update(overrides)
    return Settings(**values)


class MockUpstream:
    """
    Canned upstream responses behind an httpx.MockTransport.

    Every outbound request is recorded; unknown routes answer 404.

    Usage:
        upstream = MockUpstream()
        upstream.add("GET", "/v1/parcels/us/geometry", json={"parcels": []})
        client = httpx.AsyncClient(transport=upstream.transport)
    """

    def __init__(self):
        self.routes: list[tuple[str, str, Callable[[httpx.Request], httpx.Response]]] = []
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        """Register a response (or a transport error) for ``method`` + raw ``path``"""

        def respond(request: httpx.Request) -> httpx.Response:
            if error is not None:
                raise error
            if content is not None:
                return httpx.Response(status_code, content=content, headers=headers)
            return httpx.Response(status_code, json=json, headers=headers)

        self.routes.append((method.upper(), path, respond))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        raw_path = request.url.raw_path.split(b"?", 1)[0].decode()
        for method, path, respond in self.routes:
            if request.method == method and raw_path == path:
                return respond(request)
        return httpx.Response(404, json={"message": f"no mock for {request.method} {raw_path}"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.raw_path.split(b"?", 1)[0].decode() == path]


@contextmanager
def relay_client(upstream: MockUpstream, **settings_overrides: Any):
    """
    TestClient for the relay app with the lifespan running.

    Usage:
        with relay_client(upstream, lightbox_key=None) as client:
            response = client.get("/health")
    """
    from main import create_app

    app = create_app(settings=make_settings(**settings_overrides), transport=upstream.transport)
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
