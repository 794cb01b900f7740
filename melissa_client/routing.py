from melissa_client.errors import ConfigurationError
from melissa_client.models.request_models import Service

SERVICE_HOSTS: dict[Service, str] = {
    Service.expressentry: "expressentry.melissadata.net",
    Service.iplocator: "globalip.melissadata.net/v4",
}


def resolve_host(service: Service | str) -> str:
    """Map a service name to its fixed Melissa hostname.

    Unknown services raise ConfigurationError instead of producing a URL
    like `https://undefined/web/...`.
    """
    try:
        return SERVICE_HOSTS[Service(service)]
    except (KeyError, ValueError) as exc:
        raise ConfigurationError(f"Unknown Melissa service: {service!r}") from exc


def normalize_endpoint(endpoint: str) -> str:
    if not endpoint.startswith("/"):
        return f"/{endpoint}"
    return endpoint


def build_url(service: Service | str, endpoint: str) -> str:
    """Compose the absolute API URL, e.g. `https://globalip.melissadata.net/v4/web/doiplocation`."""
    return f"https://{resolve_host(service)}/web{normalize_endpoint(endpoint)}"
