"""Redaction of sensitive values before URLs reach the logs."""

import re

# Query parameters whose values never go to the logs
SENSITIVE_PARAMS = [
    "api_key",
    "apikey",
    "token",
    "access_token",
    "refresh_token",
    "password",
    "secret",
    "signature",
]

_SENSITIVE_PATTERN = re.compile(rf"(?i)\b({'|'.join(SENSITIVE_PARAMS)})=([^&\s\"]+)")


def redact_sensitive_data(url: str) -> str:
    """Replace the values of sensitive query parameters in ``url``."""
    return _SENSITIVE_PATTERN.sub(r"\1=***REDACTED***", url)
