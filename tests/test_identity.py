from melissa_client.identity import apply_identity, select_identity


def test_token_wins_over_everything() -> None:
    assert select_identity(token="T", license_key="L", user_id="U") == "T"


def test_license_key_wins_over_user_id() -> None:
    assert select_identity(license_key="L", user_id="U") == "L"


def test_user_id_used_as_last_resort() -> None:
    assert select_identity(user_id="U") == "U"


def test_no_identity_configured() -> None:
    assert select_identity() is None


def test_empty_strings_are_skipped() -> None:
    assert select_identity(token="", license_key="", user_id="U") == "U"
    assert select_identity(token="", license_key="", user_id="") is None


def test_apply_identity_returns_copy() -> None:
    query = {"ip": "8.8.8.8"}

    params = apply_identity(query, "L")

    assert params == {"ip": "8.8.8.8", "id": "L"}
    assert query == {"ip": "8.8.8.8"}


def test_apply_identity_sets_explicit_none() -> None:
    params = apply_identity(None, None)
    assert "id" in params
    assert params["id"] is None
