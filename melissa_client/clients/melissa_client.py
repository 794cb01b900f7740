from typing import Any

from pydantic import ValidationError

from melissa_client.clients.base import BaseMelissaClient
from melissa_client.errors import InvalidRequestError
from melissa_client.models.request_models import IpLocationRequest, Service

IP_LOCATION_ENDPOINT = "/iplocation/doiplocation"


class MelissaClient(BaseMelissaClient):
    """Async client for the Melissa Data web services.

    Credentials come from the ClientConfig (license key or user id) unless a
    per-call token is supplied. Results are the API's JSON payload, returned
    unchanged.
    """

    name = "melissa"

    async def ip_location(self, ip_address: str, transmission_reference: str | None = None) -> Any:
        """Geolocate an IP address with the IP Locator service.

        The payload places the address within a city and postal code and reports
        the connection type and speed. `transmission_reference` is echoed back by
        the API so a response can be matched to its request.
        """
        try:
            request = IpLocationRequest(ip_address=ip_address, transmission_reference=transmission_reference)
        except ValidationError as exc:
            raise InvalidRequestError(f"Invalid IP location request: {exc}") from exc
        return await self._get(Service.iplocator, IP_LOCATION_ENDPOINT, request.to_query())
