"""Bearer token helpers for the identity provider integration."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from mindwell.core.settings import settings

ANONYMOUS_HANDLE = "Anonymous"


@dataclass(frozen=True)
class Identity:
    """Verified caller identity: stable user id plus optional email."""

    uid: str
    email: str | None = None

    @property
    def handle(self) -> str:
        """Return the public display handle derived from the email address."""
        return display_handle(self.email)


def display_handle(email: str | None) -> str:
    """Return the part of an email before ``@``, or ``Anonymous``."""
    if not email:
        return ANONYMOUS_HANDLE
    return email.split("@", 1)[0] or ANONYMOUS_HANDLE


def create_access_token(uid: str, email: str | None = None) -> str:
    """Create a signed access token for ``uid``."""
    to_encode: dict[str, object] = {"sub": uid}
    if email:
        to_encode["email"] = email
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def verify_access_token(token: str) -> Identity:
    """Decode ``token`` and return the identity it carries.

    Raises:
        JWTError: If the token is malformed, expired, or has no subject.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    if not subject:
        raise JWTError("Token has no subject")
    email = payload.get("email")
    return Identity(uid=str(subject), email=str(email) if email else None)
