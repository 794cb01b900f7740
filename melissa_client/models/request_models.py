from enum import Enum
from ipaddress import ip_address
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Service(str, Enum):
    """Melissa web services the client knows how to reach."""

    expressentry = "expressentry"
    iplocator = "iplocator"


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class RequestSpec(BaseModel):
    """Everything needed to dispatch a single call. Built fresh for every request."""

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    service: Service
    endpoint: str
    query_params: dict[str, Any] = Field(default_factory=dict)
    body: Any = None
    token: str | None = None


class IpLocationRequest(BaseModel):
    """Arguments of the IP Locator `doiplocation` operation."""

    ip_address: str = Field(
        description="IP address to geolocate.",
        examples=["8.8.8.8"],
    )
    transmission_reference: str | None = Field(
        default=None,
        description="Opaque value echoed back by the API to match responses to requests.",
    )

    @field_validator("ip_address", mode="before")
    @classmethod
    def _validate_ip(cls, value: Any) -> str:
        """Strip whitespace and require a valid IPv4 or IPv6 literal."""
        value_str = str(value if value is not None else "").strip()
        if not value_str:
            raise ValueError("ip_address must be a non-empty string")
        try:
            ip_address(value_str)
        except ValueError as exc:
            raise ValueError("ip_address must be a valid IPv4 or IPv6 address") from exc
        return value_str

    @field_validator("transmission_reference", mode="before")
    @classmethod
    def _blank_reference_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        value_str = str(value).strip()
        return value_str or None

    def to_query(self) -> dict[str, str]:
        query = {"ip": self.ip_address}
        if self.transmission_reference:
            query["t"] = self.transmission_reference
        return query
