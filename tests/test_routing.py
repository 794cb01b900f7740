import pytest

from melissa_client.errors import ConfigurationError
from melissa_client.models.request_models import Service
from melissa_client.routing import build_url, resolve_host


@pytest.mark.parametrize(
    ("service", "host"),
    [
        (Service.expressentry, "expressentry.melissadata.net"),
        (Service.iplocator, "globalip.melissadata.net/v4"),
        ("expressentry", "expressentry.melissadata.net"),
        ("iplocator", "globalip.melissadata.net/v4"),
    ],
)
def test_resolve_host_known_services(service: Service | str, host: str) -> None:
    assert resolve_host(service) == host


def test_resolve_host_unknown_service_raises_configuration_error() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_host("geocoder")

    assert "geocoder" in str(exc_info.value)


def test_build_url_prepends_missing_slash() -> None:
    assert build_url("iplocator", "doiplocation") == "https://globalip.melissadata.net/v4/web/doiplocation"


def test_build_url_keeps_existing_slash() -> None:
    """Leading-slash normalization is idempotent."""
    assert build_url("iplocator", "/doiplocation") == build_url("iplocator", "doiplocation")


def test_build_url_nested_endpoint() -> None:
    url = build_url(Service.expressentry, "/ExpressFreeForm")
    assert url == "https://expressentry.melissadata.net/web/ExpressFreeForm"


def test_build_url_unknown_service_never_yields_undefined_host() -> None:
    with pytest.raises(ConfigurationError):
        build_url("nope", "/anything")
