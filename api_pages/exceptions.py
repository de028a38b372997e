"""Custom exceptions for the page server with HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses and log events."""

    PAGES_ERROR = "PAGES_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    # Content API errors
    CONTENT_API_ERROR = "CONTENT_API_ERROR"
    CONTENT_API_STATUS = "CONTENT_API_STATUS"
    CONTENT_API_UNREACHABLE = "CONTENT_API_UNREACHABLE"
    CONTENT_API_INVALID_PAYLOAD = "CONTENT_API_INVALID_PAYLOAD"
    CONTENT_API_INVALID_URL = "CONTENT_API_INVALID_URL"

    CONFIG_ERROR = "CONFIG_ERROR"


class PagesException(Exception):
    """Base exception for page server errors.

    Carries an error code, an HTTP status code and free-form details so the
    app-level handler can build a structured response.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.PAGES_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ContentAPIException(PagesException):
    """Content API request failed."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONTENT_API_ERROR,
        status_code: int = 502,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class ContentAPIStatusException(ContentAPIException):
    """Content API answered with a non-2xx status."""

    def __init__(self, message: str, upstream_status: int, details: dict[str, Any] | None = None):
        self.upstream_status = upstream_status
        super().__init__(
            message,
            code=ErrorCode.CONTENT_API_STATUS,
            details={"upstream_status": upstream_status, **(details or {})},
        )


class ContentAPIUnreachableException(ContentAPIException):
    """Content API could not be reached (DNS, refused connection, timeout)."""

    def __init__(self, message: str = "Content API unreachable", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.CONTENT_API_UNREACHABLE,
            status_code=503,
            details=details,
        )


class ContentAPIPayloadException(ContentAPIException):
    """Content API body was not a JSON object."""

    def __init__(self, message: str = "Content API returned an invalid payload", details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.CONTENT_API_INVALID_PAYLOAD,
            details=details,
        )


class ConfigurationException(PagesException):
    """Configuration errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=ErrorCode.CONFIG_ERROR, details=details)
