from typing import Any


class MelissaError(Exception):
    """Base error for the Melissa Data API client."""


class ConfigurationError(MelissaError):
    """Raised when the client is configured with an unknown service or bad settings."""


class ApiError(MelissaError):
    """Raised when the Melissa API answers with a status outside 2xx.

    `meta` carries the response body (parsed JSON when possible, raw text otherwise)
    so callers can inspect the provider's own error details.
    """

    def __init__(self, status_code: int, url: str, meta: Any = None) -> None:
        super().__init__(f"{status_code} - {url} failed")
        self.status_code = status_code
        self.url = url
        self.meta = meta


class InvalidRequestError(MelissaError):
    """Raised when arguments to a service operation fail validation before any request is sent."""
