from collections.abc import Mapping
from typing import Any

ID_PARAM = "id"


def select_identity(
    token: str | None = None,
    license_key: str | None = None,
    user_id: str | None = None,
) -> str | None:
    """Pick the identifier sent as `id`: per-call token, then license key, then user id.

    Empty strings count as absent. Returns None when nothing is configured; the
    request still goes out and the API rejects it.
    """
    return token or license_key or user_id or None


def apply_identity(query_params: Mapping[str, Any] | None, identity: str | None) -> dict[str, Any]:
    """Return a copy of the query parameters with `id` set to the selected identity."""
    params = dict(query_params or {})
    params[ID_PARAM] = identity
    return params
