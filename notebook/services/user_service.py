"""User lookup and search."""

from collections.abc import Iterable

from sqlalchemy import or_
from sqlalchemy.orm import Session

from notebook.models.user import User
from notebook.schemas.user import UserProfile

SEARCH_LIMIT = 5


def lookup_users_by_ids(db: Session, ids: Iterable[str]) -> list[UserProfile]:
    """Get the public profiles of the given users. Unknown ids are skipped."""
    user_ids = sorted({uid for uid in ids if uid})
    if not user_ids:
        return []

    users = db.query(User).filter(User.id.in_(user_ids)).order_by(User.email).all()
    return [UserProfile.model_validate(user) for user in users]


def search_users(db: Session, query: str | None, limit: int = SEARCH_LIMIT) -> list[UserProfile]:
    """Find users whose name or email contains the query, ignoring case.

    An empty query matches nobody rather than everybody.
    """
    term = (query or "").strip()
    if not term:
        return []

    users = (
        db.query(User)
        .filter(
            or_(
                User.name.icontains(term, autoescape=True),
                User.email.icontains(term, autoescape=True),
            )
        )
        .order_by(User.email)
        .limit(limit)
        .all()
    )
    return [UserProfile.model_validate(user) for user in users]
