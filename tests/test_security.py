from datetime import timedelta

import pytest

from sme_assessment.core import security


@pytest.mark.parametrize(
    "password,fragment",
    [
        ("Sh0rt!", "at least 10 characters"),
        ("nouppercase1!", "uppercase"),
        ("NOLOWERCASE1!", "lowercase"),
        ("NoDigitsHere!", "digit"),
        ("NoSpecial123", "special character"),
    ],
)
def test_weak_passwords(password, fragment):
    ok, reason = security.validate_password_strength(password)
    assert not ok
    assert fragment in reason


def test_strong_password():
    assert security.validate_password_strength("Str0ng!Passw0rd") == (True, None)


def test_password_hash_roundtrip():
    hashed = security.get_password_hash("Str0ng!Passw0rd")

    assert hashed != "Str0ng!Passw0rd"
    assert security.verify_password("Str0ng!Passw0rd", hashed)
    assert not security.verify_password("wrong", hashed)
    assert not security.verify_password("anything", "")


def test_access_token_claims():
    payload = security.decode_token(security.create_access_token(7, role="admin"))

    assert payload["sub"] == "7"
    assert payload["role"] == "admin"
    assert payload["type"] == "access"


def test_refresh_token_type():
    payload = security.decode_token(security.create_refresh_token(7))
    assert payload["type"] == "refresh"


def test_expired_token_is_rejected():
    token = security.create_access_token(7, expires_delta=timedelta(seconds=-1))
    assert security.decode_token(token) is None


def test_garbage_token_is_rejected():
    assert security.decode_token("not.a.jwt") is None
