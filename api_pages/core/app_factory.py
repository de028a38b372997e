"""Application factory for creating and configuring the FastAPI app."""

from fastapi import FastAPI

from api_pages import __version__
from api_pages.config import get_settings
from api_pages.core.lifespan import lifespan
from api_pages.core.middleware import setup_middleware
from api_pages.middleware.error_handlers import register_error_handlers
from api_pages.routers import health_router, pages_router


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="API Pages",
        description="""
        Server-rendered pages whose markup, styles and metadata come from a
        content API.

        ## Pages
        - `/` - Home page
        - `/about` - About page

        When the content API is unreachable or returns nothing, pages
        render fallback content instead of failing.

        ## Health
        - `/health` - Basic health check
        - `/health/live` - Liveness probe
        - `/health/ready` - Readiness probe
        """,
        version=__version__,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    register_error_handlers(app)

    # Pages (HTML) - no prefix
    app.include_router(pages_router.router, tags=["pages"])
    app.include_router(health_router.router, tags=["health"])

    return app
