"""FastAPI dependencies for dependency injection."""

import httpx
from fastapi import Request

from api_pages.config import EndpointConfig, get_endpoint_config


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Get the shared HTTP client from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The shared AsyncClient instance.

    Raises:
        RuntimeError: If the HTTP client is not initialized.
    """
    client: httpx.AsyncClient | None = getattr(request.app.state, "http_client", None)

    if client is None:
        raise RuntimeError("HTTP client not initialized. Is the app running inside its lifespan?")

    return client


async def get_content_config(request: Request) -> EndpointConfig:
    """Get the content API configuration stored at startup, or the process default."""
    config: EndpointConfig | None = getattr(request.app.state, "endpoint_config", None)
    return config or get_endpoint_config()
