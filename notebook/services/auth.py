"""Accounts: registration, credential checks and access tokens.

Emails are stored lowercased and looked up without regard to case, so
``Bob@example.com`` and ``bob@example.com`` name the same account.
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import jwt
from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.orm import Session

from notebook.config import get_settings
from notebook.database import commit_or_fail
from notebook.exceptions import ValidationFailed
from notebook.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(user_id: str, email: str, name: str | None = None) -> str:
    """Issue a bearer token carrying the claims a session is built from."""
    claims = {
        "sub": user_id,
        "email": email,
        "exp": datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes),
    }
    if name:
        claims["name"] = name
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Find the account registered under an email, ignoring case."""
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Get the account for a set of credentials, or None if they do not match."""
    user = get_user_by_email(db, email)
    if user is None or not pwd_context.verify(password, user.password_hash):
        return None
    return user


def register_user(db: Session, email: str, password: str, name: str | None = None) -> User:
    """Create an account.

    Raises:
        ValidationFailed: if the email is already registered, including when a
            concurrent registration wins the race to the unique constraint.
    """
    taken = ValidationFailed("Email already registered", field="email")
    if get_user_by_email(db, email) is not None:
        raise taken

    user = User(email=normalize_email(email), password_hash=hash_password(password), name=name)
    db.add(user)
    commit_or_fail(db, "register_user", on_conflict=taken)
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
