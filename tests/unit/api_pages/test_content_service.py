"""Unit tests for the content service fetcher."""

import logging
from datetime import datetime

import httpx
import pytest

from api_pages.exceptions import ConfigurationException
from api_pages.models.page import FetchResult
from api_pages.services import content_service


@pytest.mark.asyncio
async def test_fetch_payload_success(content_api, endpoint_config):
    """Test a 2xx JSON object becomes the payload."""
    content_api.routes["/api/home"] = {"title": "T", "description": "D"}

    async with content_api.client() as client:
        result = await content_service.fetch_payload(client, "/api/home", config=endpoint_config)

    assert isinstance(result, FetchResult)
    assert result.payload == {"title": "T", "description": "D"}
    assert result.endpoint_path == "/api/home"
    assert result.has_content


@pytest.mark.asyncio
async def test_fetch_payload_requests_configured_url(content_api, endpoint_config):
    """Test the request goes to base URL + endpoint path with default headers."""
    content_api.routes["/api/about"] = {}

    async with content_api.client() as client:
        await content_service.fetch_payload(client, "/api/about", config=endpoint_config)

    assert len(content_api.requests) == 1
    request = content_api.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "http://content.test/api/about"
    assert request.headers["Content-Type"] == "application/json"


@pytest.mark.asyncio
async def test_fetch_payload_override_headers_replace_defaults(content_api, endpoint_config):
    """Test overriding headers drops the default headers entirely."""
    content_api.routes["/api/home"] = {}

    async with content_api.client() as client:
        await content_service.fetch_payload(
            client, "/api/home", override_options={"headers": {"X-Trace": "abc"}}, config=endpoint_config
        )

    request = content_api.requests[0]
    assert request.headers["X-Trace"] == "abc"
    assert "Content-Type" not in request.headers


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [301, 400, 404, 500, 503])
async def test_fetch_payload_non_success_status(content_api, endpoint_config, status_code):
    """Test any non-2xx answer gives an empty payload."""
    content_api.routes["/api/home"] = httpx.Response(status_code, json={"title": "ignored"})

    async with content_api.client() as client:
        result = await content_service.fetch_payload(client, "/api/home", config=endpoint_config)

    assert result.payload == {}
    assert result.endpoint_path == "/api/home"
    assert not result.has_content


@pytest.mark.asyncio
async def test_fetch_payload_network_error(content_api, endpoint_config):
    """Test a refused connection gives an empty payload instead of raising."""
    content_api.routes["/api/home"] = httpx.ConnectError("Connection refused")

    async with content_api.client() as client:
        result = await content_service.fetch_payload(client, "/api/home", config=endpoint_config)

    assert result.payload == {}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("Connection refused"),
        httpx.ReadTimeout("Read timed out"),
        httpx.NetworkError("Network down"),
    ],
)
async def test_fetch_payload_network_errors_with_mock_client(mock_http_client, endpoint_config, error):
    """Test httpx errors raised by the client never escape."""
    mock_http_client.get.side_effect = error

    result = await content_service.fetch_payload(mock_http_client, "/api/home", config=endpoint_config)

    assert result.payload == {}
    mock_http_client.get.assert_called_once()
    assert mock_http_client.get.call_args.args[0] == "http://content.test/api/home"


@pytest.mark.asyncio
async def test_fetch_payload_malformed_json(content_api, endpoint_config):
    """Test an unparseable 2xx body gives an empty payload."""
    content_api.routes["/api/home"] = httpx.Response(200, content=b"<html>not json</html>")

    async with content_api.client() as client:
        result = await content_service.fetch_payload(client, "/api/home", config=endpoint_config)

    assert result.payload == {}


@pytest.mark.asyncio
async def test_fetch_payload_json_not_an_object(content_api, endpoint_config):
    """Test a JSON array body gives an empty payload."""
    content_api.routes["/api/home"] = ["not", "an", "object"]

    async with content_api.client() as client:
        result = await content_service.fetch_payload(client, "/api/home", config=endpoint_config)

    assert result.payload == {}


@pytest.mark.asyncio
async def test_fetch_payload_timestamp_is_iso(content_api, endpoint_config):
    """Test the result is stamped with an ISO-8601 time even on failure."""
    async with content_api.client() as client:
        result = await content_service.fetch_payload(client, "/api/missing", config=endpoint_config)

    fetched_at = datetime.fromisoformat(result.fetched_at_iso)
    assert fetched_at.tzinfo is not None


@pytest.mark.asyncio
async def test_fetch_payload_logs_failures(content_api, endpoint_config, caplog):
    """Test failures are logged with the status and endpoint."""
    content_api.routes["/api/home"] = httpx.Response(502)

    with caplog.at_level(logging.ERROR, logger="api_pages.services.content_service"):
        async with content_api.client() as client:
            await content_service.fetch_payload(client, "/api/home", config=endpoint_config)

    records = [r for r in caplog.records if r.name == "api_pages.services.content_service"]
    assert len(records) == 1
    assert "502" in records[0].getMessage()
    assert records[0].endpoint == "/api/home"
    assert records[0].event_type == "content_api_error"


@pytest.mark.asyncio
async def test_fetch_payload_logs_network_errors_as_network(mock_http_client, endpoint_config, caplog):
    """Test network failures are tagged separately from status failures."""
    mock_http_client.get.side_effect = httpx.ConnectError("Connection refused")

    with caplog.at_level(logging.ERROR, logger="api_pages.services.content_service"):
        await content_service.fetch_payload(mock_http_client, "/api/home", config=endpoint_config)

    assert caplog.records[-1].event_type == "content_api_network_error"


@pytest.mark.asyncio
async def test_fetch_home_and_about_use_named_endpoints(content_api, endpoint_config):
    """Test the page helpers bind the home and about endpoints."""
    content_api.routes["/api/home"] = {"html": "<p>home</p>"}
    content_api.routes["/api/about"] = {"html": "<p>about</p>"}

    async with content_api.client() as client:
        home = await content_service.fetch_home(client, config=endpoint_config)
        about = await content_service.fetch_about(client, config=endpoint_config)

    assert home.endpoint_path == "/api/home"
    assert home.payload["html"] == "<p>home</p>"
    assert about.endpoint_path == "/api/about"
    assert about.payload["html"] == "<p>about</p>"
    assert content_api.paths() == ["/api/home", "/api/about"]


@pytest.mark.asyncio
async def test_fetch_home_unknown_endpoint_name(mock_http_client):
    """Test a config without a home endpoint is a configuration error."""
    from api_pages.config import EndpointConfig

    config = EndpointConfig(endpoints={"about": "/api/about"})

    with pytest.raises(ConfigurationException) as exc_info:
        await content_service.fetch_home(mock_http_client, config=config)

    assert "home" in str(exc_info.value)
    mock_http_client.get.assert_not_called()


@pytest.mark.asyncio
async def test_fetch_payload_invalid_url(content_api, endpoint_config, caplog):
    """Test a URL httpx refuses to send gives an empty payload instead of raising."""
    with caplog.at_level(logging.ERROR, logger="api_pages.services.content_service"):
        async with content_api.client() as client:
            result = await content_service.fetch_payload(client, "/api/\x00home", config=endpoint_config)

    assert result.payload == {}
    assert result.endpoint_path == "/api/\x00home"
    assert content_api.requests == []
    assert caplog.records[-1].event_type == "content_api_invalid_url"
