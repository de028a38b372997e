"""Models for content fetched from the upstream API and rendered into pages."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


class FetchResult(BaseModel):
    """Outcome of one content API call.

    ``payload`` is always a mapping. Any fetch or parse failure leaves it
    empty, so callers never have to check for a missing object.
    """

    payload: dict[str, Any] = Field(default_factory=dict, description="Decoded JSON object, empty on failure")
    endpoint_path: str = Field(..., description="Endpoint path the payload was fetched from")
    fetched_at_iso: str = Field(default_factory=utc_now_iso, description="When the fetch completed")

    @property
    def has_content(self) -> bool:
        return len(self.payload) > 0

    def content(self) -> "PageContent":
        """Typed view over the payload's well-known fields."""
        return PageContent.from_payload(self.payload)


class PageContent(BaseModel):
    """Well-known payload fields. Nothing is validated; values are trusted.

    Absent fields are ``None``. Values are passed through as the API sent
    them, whatever their JSON type.
    """

    model_config = ConfigDict(extra="ignore")

    title: Any = None
    description: Any = None
    css: Any = None
    html: Any = None
    metadata: Any = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "PageContent":
        # no validation: payload values are used verbatim
        return cls.model_construct(**{name: payload.get(name) for name in cls.model_fields})


class NavigationLink(BaseModel):
    """A link a page may offer to related pages."""

    href: str
    title: str
    description: str = ""


class RenderInput(BaseModel):
    """Everything the page renderer needs for one request."""

    server_data: FetchResult
    fallback_title: str = "Page"
    navigation_links: list[NavigationLink] = Field(default_factory=list)
