"""Tests for bearer token helpers."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import JWTError, jwt

from mindwell.core.security import (
    ANONYMOUS_HANDLE,
    Identity,
    create_access_token,
    display_handle,
    verify_access_token,
)
from mindwell.core.settings import settings


def test_round_trip_returns_identity() -> None:
    identity = verify_access_token(create_access_token("uid-1", "sam@example.org"))

    assert identity == Identity(uid="uid-1", email="sam@example.org")
    assert identity.handle == "sam"


def test_token_without_email_is_anonymous() -> None:
    identity = verify_access_token(create_access_token("uid-2"))

    assert identity.email is None
    assert identity.handle == ANONYMOUS_HANDLE


def test_expired_token_is_rejected() -> None:
    token = jwt.encode(
        {"sub": "uid-3", "exp": datetime.now(UTC) - timedelta(minutes=1)},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(JWTError):
        verify_access_token(token)


def test_token_without_subject_is_rejected() -> None:
    token = jwt.encode(
        {"email": "x@example.org", "exp": datetime.now(UTC) + timedelta(minutes=5)},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )

    with pytest.raises(JWTError):
        verify_access_token(token)


def test_token_signed_with_other_key_is_rejected() -> None:
    token = jwt.encode({"sub": "uid-4"}, "another-secret", algorithm=settings.jwt_algorithm)

    with pytest.raises(JWTError):
        verify_access_token(token)


@pytest.mark.parametrize(
    ("email", "handle"),
    [("kim@example.com", "kim"), (None, ANONYMOUS_HANDLE), ("", ANONYMOUS_HANDLE),
     ("@example.com", ANONYMOUS_HANDLE)],
)
def test_display_handle(email: str | None, handle: str) -> None:
    assert display_handle(email) == handle
