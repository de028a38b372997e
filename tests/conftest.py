"""Pytest configuration and shared fixtures."""

import json
from collections.abc import Callable
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from api_pages.config import EndpointConfig
from api_pages.core.middleware import limiter
from api_pages.dependencies import get_content_config, get_http_client
from api_pages.main import app as fastapi_app

CONTENT_API = "http://content.test"


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with empty rate limit counters."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def endpoint_config():
    """EndpointConfig pointing at a fake content API."""
    return EndpointConfig(base_url=CONTENT_API)


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for failure paths."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def content_api():
    """Fake content API built on httpx.MockTransport.

    Maps endpoint paths to either a JSON-serializable body, an
    ``httpx.Response``, or an exception to raise. Unknown paths answer 404.
    Every request that reaches the transport is recorded in ``requests``.
    """

    class FakeContentAPI:
        def __init__(self):
            self.routes: dict[str, object] = {}
            self.requests: list[httpx.Request] = []

        def handler(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            route = self.routes.get(request.url.path)
            if route is None:
                return httpx.Response(404, json={"error": "not found"})
            if isinstance(route, Exception):
                raise route
            if isinstance(route, httpx.Response):
                return route
            return httpx.Response(200, content=json.dumps(route).encode(), headers={"Content-Type": "application/json"})

        def client(self) -> httpx.AsyncClient:
            return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

        def paths(self) -> list[str]:
            return [request.url.path for request in self.requests]

    return FakeContentAPI()


@pytest.fixture
def make_test_client(content_api, endpoint_config) -> Callable[[], TestClient]:
    """Build a TestClient whose content API calls go to ``content_api``."""

    def factory() -> TestClient:
        http_client = content_api.client()
        fastapi_app.dependency_overrides[get_http_client] = lambda: http_client
        fastapi_app.dependency_overrides[get_content_config] = lambda: endpoint_config
        return TestClient(fastapi_app)

    yield factory

    fastapi_app.dependency_overrides.clear()
