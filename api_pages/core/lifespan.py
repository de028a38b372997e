"""Application lifespan: shared HTTP client and content API configuration."""

import time
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI

from api_pages import __version__
from api_pages.config import get_endpoint_config
from api_pages.logging_config import get_logger, log_with_context
from api_pages.middleware.logging_middleware import redact_sensitive_data

logger = get_logger(__name__)


async def log_request(request: httpx.Request) -> None:
    """Event hook logging outbound requests."""
    log_with_context(
        logger,
        "info",
        "HTTP Request",
        method=request.method,
        url=redact_sensitive_data(str(request.url)),
        event_type="http_request",
    )


async def log_response(response: httpx.Response) -> None:
    """Event hook logging upstream responses."""
    log_with_context(
        logger,
        "info",
        "HTTP Response",
        status_code=response.status_code,
        url=redact_sensitive_data(str(response.request.url)),
        event_type="http_response",
    )


def create_http_client() -> httpx.AsyncClient:
    """Create the shared client used for every content API call.

    No timeout is enforced on any phase (connect, read, write, pool); the
    configured content API timeout is not applied either. Pool limits are
    httpx's defaults.
    """
    event_hooks: dict[str, list[Callable[..., Any]]] = {
        "request": [log_request],
        "response": [log_response],
    }
    return httpx.AsyncClient(timeout=None, follow_redirects=True, event_hooks=event_hooks)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage startup and shutdown.

    Exceptions raised while the app is running are logged and re-raised so
    the client is still closed.
    """
    app.state.startup_time = time.time()
    app.state.request_count = 0

    log_with_context(
        logger,
        "info",
        "Starting API pages application",
        version=__version__,
        event_type="app_startup",
    )

    app.state.endpoint_config = get_endpoint_config()
    client = create_http_client()
    app.state.http_client = client
    log_with_context(
        logger,
        "info",
        "HTTP client initialized",
        base_url=app.state.endpoint_config.base_url,
        event_type="http_client_ready",
    )

    try:
        yield
    except Exception as e:
        log_with_context(
            logger,
            "error",
            "Application error during lifespan",
            error=str(e),
            error_type=type(e).__name__,
            event_type="app_error",
        )
        raise
    finally:
        log_with_context(
            logger,
            "info",
            "Shutting down API pages application",
            event_type="app_shutdown",
        )
        await client.aclose()
        app.state.http_client = None
        log_with_context(
            logger,
            "info",
            "HTTP client closed",
            event_type="http_client_cleanup",
        )
