"""Page routes: home and about, both rendered from content API payloads."""

from typing import Any

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from api_pages.config import ABOUT, HOME, EndpointConfig
from api_pages.core.middleware import PAGE_RATE_LIMIT, limiter
from api_pages.dependencies import get_content_config, get_http_client
from api_pages.models.page import NavigationLink
from api_pages.services import content_service
from api_pages.views.template_renderer import TemplateRenderer

router = APIRouter()

HOME_FALLBACK_METADATA = {
    "title": "Home Page - Server Rendered",
    "description": "This is the home page with server-side rendering",
}
HOME_FALLBACK_TITLE = "Home Page"
HOME_NAVIGATION = [
    NavigationLink(href="/about", title="About Us →", description="Learn more about our company"),
]

ABOUT_FALLBACK_METADATA = {
    "title": "About Us - Server Rendered",
    "description": "Learn more about our company and team",
}
ABOUT_FALLBACK_TITLE = "About Us"


async def generate_home_metadata(client: httpx.AsyncClient, config: EndpointConfig) -> dict[str, Any]:
    """Head metadata for the home page."""
    return await content_service.generate_metadata(
        client, config.endpoint(HOME), dict(HOME_FALLBACK_METADATA), config=config
    )


async def generate_about_metadata(client: httpx.AsyncClient, config: EndpointConfig) -> dict[str, Any]:
    """Head metadata for the about page."""
    return await content_service.generate_metadata(
        client, config.endpoint(ABOUT), dict(ABOUT_FALLBACK_METADATA), config=config
    )


@router.get("/", response_class=HTMLResponse)
@limiter.limit(PAGE_RATE_LIMIT)
async def home(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    config: EndpointConfig = Depends(get_content_config),
):
    """Render the home page."""
    metadata = await generate_home_metadata(client, config)
    server_data = await content_service.fetch_home(client, config=config)
    return TemplateRenderer.render_page(
        request,
        server_data,
        fallback_title=HOME_FALLBACK_TITLE,
        metadata=metadata,
        navigation_links=HOME_NAVIGATION,
    )


@router.get("/about", response_class=HTMLResponse)
@limiter.limit(PAGE_RATE_LIMIT)
async def about(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
    config: EndpointConfig = Depends(get_content_config),
):
    """Render the about page."""
    metadata = await generate_about_metadata(client, config)
    server_data = await content_service.fetch_about(client, config=config)
    return TemplateRenderer.render_page(
        request,
        server_data,
        fallback_title=ABOUT_FALLBACK_TITLE,
        metadata=metadata,
    )
