"""Content API service: fetch page payloads and derive page metadata.

Every call is fail-soft. Network errors, non-2xx answers and bodies that
are not a JSON object are logged and turned into an empty payload, so a
broken content API never breaks page rendering.
"""

from typing import Any

import httpx

from api_pages.config import ABOUT, HOME, EndpointConfig, build_url, default_fetch_options, get_endpoint_config
from api_pages.exceptions import (
    ContentAPIException,
    ContentAPIPayloadException,
    ContentAPIStatusException,
    ContentAPIUnreachableException,
    ErrorCode,
)
from api_pages.logging_config import get_logger, log_with_context
from api_pages.models.page import FetchResult, utc_now_iso

DEFAULT_TITLE = "Server Rendered Page"

EVENT_TYPES = {
    ErrorCode.CONTENT_API_STATUS: "content_api_error",
    ErrorCode.CONTENT_API_UNREACHABLE: "content_api_network_error",
    ErrorCode.CONTENT_API_INVALID_PAYLOAD: "content_api_parse_error",
    ErrorCode.CONTENT_API_INVALID_URL: "content_api_invalid_url",
}

logger = get_logger(__name__)


async def _request_payload(client: httpx.AsyncClient, url: str, options: dict[str, Any]) -> dict[str, Any]:
    """GET ``url`` and decode the body as a JSON object.

    Raises:
        ContentAPIException: If the URL cannot be sent at all
        ContentAPIUnreachableException: If the request could not be sent or answered
        ContentAPIStatusException: If the API answered with a non-2xx status
        ContentAPIPayloadException: If the body is not a JSON object
    """
    try:
        response = await client.get(url, **options)
    except httpx.InvalidURL as e:
        raise ContentAPIException(
            f"Invalid content API URL {url!r}: {e}",
            code=ErrorCode.CONTENT_API_INVALID_URL,
            details={"url": url},
        ) from e
    except httpx.HTTPError as e:
        raise ContentAPIUnreachableException(
            f"Error fetching content API data from {url}: {e}",
            details={"url": url, "error_type": type(e).__name__},
        ) from e

    if not response.is_success:
        raise ContentAPIStatusException(
            f"Failed to fetch from content API ({url}): {response.status_code} {response.reason_phrase}",
            upstream_status=response.status_code,
            details={"url": url, "reason": response.reason_phrase},
        )

    try:
        data = response.json()
    except ValueError as e:
        raise ContentAPIPayloadException(
            f"Content API returned malformed JSON ({url}): {e}",
            details={"url": url},
        ) from e

    if not isinstance(data, dict):
        raise ContentAPIPayloadException(
            f"Content API returned {type(data).__name__}, expected a JSON object ({url})",
            details={"url": url},
        )

    return data


async def fetch_payload(
    client: httpx.AsyncClient,
    endpoint_path: str,
    override_options: dict[str, Any] | None = None,
    config: EndpointConfig | None = None,
) -> FetchResult:
    """Fetch one page payload from the content API.

    ``override_options`` are httpx request keyword arguments merged over the
    defaults. The merge is shallow: an override ``headers`` entry replaces
    the default headers entirely.

    Args:
        client: Shared HTTP client
        endpoint_path: Path appended to the base URL (e.g. '/api/home')
        override_options: Request options that win over the defaults
        config: Endpoint configuration (defaults to the process-wide one)

    Returns:
        FetchResult whose payload is the decoded JSON object, or empty on any failure
    """
    config = config or get_endpoint_config()
    url = build_url(endpoint_path, config)
    options = {**default_fetch_options(config), **(override_options or {})}

    payload: dict[str, Any] = {}
    try:
        payload = await _request_payload(client, url, options)
    except ContentAPIException as e:
        log_with_context(
            logger,
            "error",
            e.message,
            error_code=e.code.value,
            url=url,
            endpoint=endpoint_path,
            details=e.details,
            event_type=EVENT_TYPES.get(e.code, "content_api_error"),
        )

    return FetchResult(payload=payload, endpoint_path=endpoint_path, fetched_at_iso=utc_now_iso())


async def fetch_home(
    client: httpx.AsyncClient,
    override_options: dict[str, Any] | None = None,
    config: EndpointConfig | None = None,
) -> FetchResult:
    """Fetch the home page payload."""
    config = config or get_endpoint_config()
    return await fetch_payload(client, config.endpoint(HOME), override_options, config)


async def fetch_about(
    client: httpx.AsyncClient,
    override_options: dict[str, Any] | None = None,
    config: EndpointConfig | None = None,
) -> FetchResult:
    """Fetch the about page payload."""
    config = config or get_endpoint_config()
    return await fetch_payload(client, config.endpoint(ABOUT), override_options, config)


def _present(value: Any) -> bool:
    return value is not None and value != ""


async def generate_metadata(
    client: httpx.AsyncClient,
    endpoint_path: str,
    fallback: dict[str, Any] | None = None,
    config: EndpointConfig | None = None,
) -> dict[str, Any]:
    """Build page metadata from the content API, with fallbacks.

    This makes its own request; it shares nothing with the body fetch.

    Title and description resolve as API field, then fallback, then a
    generated default. After that, every fallback key is laid over the
    result (so fallback title/description beat the API values), and the
    API's ``metadata`` object is laid over last and beats everything.

    Args:
        client: Shared HTTP client
        endpoint_path: Endpoint to read metadata from
        fallback: Static metadata used when the API has none
        config: Endpoint configuration

    Returns:
        Metadata mapping, always containing 'title' and 'description'
    """
    fallback = fallback or {}
    result = await fetch_payload(client, endpoint_path, config=config)
    payload = result.payload
    server_time = utc_now_iso()

    title = next(
        (v for v in (payload.get("title"), fallback.get("title")) if _present(v)),
        DEFAULT_TITLE,
    )
    description = next(
        (v for v in (payload.get("description"), fallback.get("description")) if _present(v)),
        f"This page was rendered on the server at {server_time}",
    )

    api_metadata = payload.get("metadata")
    if not isinstance(api_metadata, dict):
        api_metadata = {}

    return {
        "title": title,
        "description": description,
        **fallback,
        **api_metadata,
    }
