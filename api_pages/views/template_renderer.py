"""Template rendering for API-driven pages."""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api_pages.logging_config import get_logger, log_with_context
from api_pages.models.page import FetchResult, NavigationLink, RenderInput

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"
templates = Jinja2Templates(directory=TEMPLATES_DIR)

CONTENT_TEMPLATE = "components/api_driven_page.html"
PAGE_TEMPLATE = "page.html"

HEAD_FIELDS = ("title", "description")
SCALAR_TYPES = (str, int, float, bool)


def _content_context(render_input: RenderInput) -> dict[str, Any]:
    """Template context for the API content block.

    The payload's css and html are handed over untouched; the template
    marks them safe, so whatever the API sends ends up in the page.
    """
    content = render_input.server_data.content()
    html = content.html if content.html not in (None, "") else None

    return {
        "has_content": render_input.server_data.has_content,
        "css": content.css if content.css is not None else "",
        "html": html,
        "fallback_title": render_input.fallback_title,
        # accepted for callers, not rendered yet
        "navigation_links": render_input.navigation_links,
    }


def _extra_meta(metadata: dict[str, Any]) -> list[tuple[str, Any]]:
    """Metadata entries other than title/description that fit in a <meta> tag."""
    return [
        (name, value)
        for name, value in metadata.items()
        if name not in HEAD_FIELDS and isinstance(value, SCALAR_TYPES)
    ]


def render_api_content(
    server_data: FetchResult,
    fallback_title: str = "Page",
    navigation_links: list[NavigationLink] | None = None,
) -> str:
    """Render the content block for a fetched payload.

    With a non-empty payload: a <style> block with the API css followed by
    the API html (or a placeholder naming ``fallback_title``). With an empty
    payload: a heading with ``fallback_title`` and a fixed notice.

    Args:
        server_data: Result of the content fetch
        fallback_title: Title shown when the API gave nothing usable
        navigation_links: Related page links (accepted, not rendered)

    Returns:
        HTML fragment
    """
    render_input = RenderInput(
        server_data=server_data,
        fallback_title=fallback_title,
        navigation_links=navigation_links or [],
    )
    return templates.get_template(CONTENT_TEMPLATE).render(_content_context(render_input))


class TemplateRenderer:
    """Renders full HTML pages around API content."""

    @staticmethod
    def render_page(
        request: Request,
        server_data: FetchResult,
        fallback_title: str,
        metadata: dict[str, Any],
        navigation_links: list[NavigationLink] | None = None,
    ) -> HTMLResponse:
        """Render a complete page: head metadata plus the API content block.

        Args:
            request: FastAPI request object
            server_data: Result of the body content fetch
            fallback_title: Title shown when the API gave nothing usable
            metadata: Head metadata from the metadata generator
            navigation_links: Related page links (accepted, not rendered)

        Returns:
            HTMLResponse with the rendered page
        """
        render_input = RenderInput(
            server_data=server_data,
            fallback_title=fallback_title,
            navigation_links=navigation_links or [],
        )

        if not server_data.has_content:
            log_with_context(
                logger,
                "info",
                "Rendering fallback content",
                endpoint=server_data.endpoint_path,
                fallback_title=fallback_title,
                event_type="page_fallback",
            )

        context = _content_context(render_input)
        context["metadata"] = metadata
        context["extra_meta"] = _extra_meta(metadata)

        return templates.TemplateResponse(request, PAGE_TEMPLATE, context)
