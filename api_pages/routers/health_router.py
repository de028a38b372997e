"""Health endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api_pages import __version__
from api_pages.models import DetailedHealthResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    For dependency status, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/live", response_model=HealthResponse)
async def liveness_check():
    """Liveness probe - is the process answering?"""
    return HealthResponse(status="alive", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(request: Request):
    """Readiness probe - can the application serve pages?

    The content API itself is not probed: pages render fallback content
    when it is down, so its availability does not gate readiness.

    **Returns:**
    - 200: HTTP client and content API configuration are in place
    - 503: Application is not ready
    """
    checks = {}

    client = getattr(request.app.state, "http_client", None)
    checks["http_client"] = "ok" if client is not None and not client.is_closed else "failed"

    config = getattr(request.app.state, "endpoint_config", None)
    checks["content_api_config"] = "ok" if config is not None else "missing"

    all_healthy = all(result == "ok" for result in checks.values())

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content=DetailedHealthResponse(
            status="healthy" if all_healthy else "unhealthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
