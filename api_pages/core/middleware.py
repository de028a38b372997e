"""Middleware configuration."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter
from slowapi.util import get_remote_address

from api_pages.config import Settings
from api_pages.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

PAGE_RATE_LIMIT = "60/minute"

# Shared by the page routes; per client IP
limiter = Limiter(key_func=get_remote_address)


def local_origin_regex(settings: Settings) -> str:
    """Origins allowed to call the server: localhost on the configured port."""
    return rf"http://(localhost|127\.0\.0\.1):{settings.api_port}"


def setup_middleware(app: FastAPI, settings: Settings) -> Limiter:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings

    Returns:
        Limiter instance for rate limiting
    """
    origin_regex = local_origin_regex(settings)
    log_with_context(
        logger,
        "info",
        "Configuring CORS middleware",
        pattern=origin_regex,
        event_type="security_config",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=origin_regex,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.state.limiter = limiter

    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        """Count handled requests."""
        app.state.request_count = getattr(app.state, "request_count", 0) + 1
        return await call_next(request)

    return limiter
