"""Application settings and content API endpoint configuration."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from api_pages.exceptions import ConfigurationException
from api_pages.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_BASE_URL = "http://localhost:3002"
DEFAULT_TIMEOUT_MS = 10000

HOME = "home"
ABOUT = "about"


class EndpointConfig(BaseModel):
    """Read-only description of the upstream content API.

    The model is frozen and nothing mutates its mappings after startup;
    ``default_fetch_options`` hands out a copy of the headers. ``timeout_ms``
    is carried for completeness only: the fetcher never applies it.
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    endpoints: dict[str, str] = Field(default_factory=lambda: {HOME: "/api/home", ABOUT: "/api/about"})
    default_headers: dict[str, str] = Field(default_factory=lambda: {"Content-Type": "application/json"})
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def endpoint(self, name: str) -> str:
        """Return the path registered under a logical endpoint name.

        Raises:
            ConfigurationException: If no endpoint is registered under ``name``
        """
        try:
            return self.endpoints[name]
        except KeyError as e:
            raise ConfigurationException(
                f"Unknown content API endpoint: {name}",
                details={"known_endpoints": sorted(self.endpoints)},
            ) from e


# Compiled-in defaults
API_CONFIG = EndpointConfig()


def build_url(endpoint_path: str, config: EndpointConfig | None = None) -> str:
    """Join the base URL and an endpoint path. The path is used as-is."""
    config = config or API_CONFIG
    return f"{config.base_url}{endpoint_path}"


def default_fetch_options(config: EndpointConfig | None = None) -> dict[str, Any]:
    """Default request options for content API calls."""
    config = config or API_CONFIG
    return {"headers": dict(config.default_headers)}


class Settings(BaseSettings):
    """Server settings, read from the environment or a ``.env`` file."""

    api_host: str = Field(default="127.0.0.1", min_length=1, description="Host the page server binds to")
    api_port: int = Field(default=8000, ge=1, le=65535, description="Port the page server binds to")
    log_level: str = Field(default="INFO", description="Console log level")

    content_api_base_url: str = Field(
        default=DEFAULT_BASE_URL,
        pattern=r"^https?://",
        description="Base URL of the content API (e.g. 'http://localhost:3002')",
    )
    content_api_timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, ge=0, description="Content API timeout (unused)")

    model_config = SettingsConfigDict(
        env_file=Path(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not just whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be a standard logging level, got {v!r}")
        return v

    @field_validator("content_api_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoint paths start with '/', so the base URL must not end with one."""
        return v.rstrip("/")

    def endpoint_config(self) -> EndpointConfig:
        """Build the endpoint configuration described by these settings."""
        return EndpointConfig(base_url=self.content_api_base_url, timeout_ms=self.content_api_timeout_ms)


_settings_instance: Settings | None = None
_endpoint_config_instance: EndpointConfig | None = None


def get_settings() -> Settings:
    """Get the singleton Settings instance.

    Reading the ``.env`` file once per process keeps request handling cheap.
    Use with FastAPI's ``Depends()``.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def get_endpoint_config() -> EndpointConfig:
    """Get the process-wide EndpointConfig, built once from settings."""
    global _endpoint_config_instance
    if _endpoint_config_instance is None:
        _endpoint_config_instance = get_settings().endpoint_config()
        log_with_context(
            logger,
            "info",
            "Content API configured",
            base_url=_endpoint_config_instance.base_url,
            endpoints=dict(_endpoint_config_instance.endpoints),
            event_type="config_content_api",
        )
    return _endpoint_config_instance
