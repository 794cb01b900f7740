import logging
import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from melissa_client.errors import ConfigurationError

DEFAULT_TIMEOUT_SECONDS = 180.0


class ClientConfig(BaseModel):
    """Static configuration of a Melissa client.

    Frozen after construction so concurrent calls on one client only ever read it.
    """

    model_config = ConfigDict(frozen=True)

    license_key: str | None = None
    user_id: str | None = None
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    debug: bool = False

    @field_validator("license_key", "user_id", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        value_str = str(value).strip()
        return value_str or None

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from MELISSA_* environment variables."""
        timeout_raw = os.getenv("MELISSA_TIMEOUT", "").strip() or str(DEFAULT_TIMEOUT_SECONDS)
        try:
            timeout_seconds = float(timeout_raw)
        except ValueError as exc:
            raise ConfigurationError("MELISSA_TIMEOUT must be a numeric value.") from exc

        debug_raw = os.getenv("MELISSA_DEBUG", "").strip().lower()

        try:
            return cls(
                license_key=os.getenv("MELISSA_LICENSE_KEY"),
                user_id=os.getenv("MELISSA_USER_ID"),
                timeout_seconds=timeout_seconds,
                debug=debug_raw in ("1", "true", "yes", "on"),
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid Melissa client configuration: {exc}") from exc


class LoggingConfig(BaseModel):
    """Controls the per-call log line emitted by the request dispatcher."""

    model_config = ConfigDict(frozen=True)

    level: int = logging.INFO
    error_level: int = logging.ERROR
    include_query: bool = False
    include_request_body: bool = False
    include_response_body: bool = False
