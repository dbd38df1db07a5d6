"""Caller session as seen by the rest of the application.

A session is either ``Authenticated`` or ``Anonymous``; there is no third
"maybe" state. Endpoints that need a user narrow it with
``notebook.api.dependencies.get_current_user``.
"""

from dataclasses import dataclass

from jose import JWTError, jwt

from notebook.config import get_settings


@dataclass(frozen=True)
class Authenticated:
    """A caller holding a valid token."""

    user_id: str
    email: str
    name: str | None = None


@dataclass(frozen=True)
class Anonymous:
    """A caller without a usable token."""


AuthSession = Authenticated | Anonymous


def session_from_token(token: str | None) -> AuthSession:
    """Build a session from a bearer token without touching the database."""
    if not token:
        return Anonymous()

    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return Anonymous()

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        return Anonymous()

    return Authenticated(user_id=str(user_id), email=email, name=payload.get("name"))
