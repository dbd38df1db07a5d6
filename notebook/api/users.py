"""User lookup API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from notebook.api.dependencies import get_current_user
from notebook.database import get_db
from notebook.schemas.user import UserProfile
from notebook.services.session import Authenticated
from notebook.services.user_service import lookup_users_by_ids, search_users

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("", response_model=list[UserProfile], response_model_exclude_none=True)
def get_users(
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    ids: str | None = Query(default=None, description="Comma-separated user ids"),
):
    """Get profiles for a set of user ids."""
    if not ids:
        return []
    return lookup_users_by_ids(db, (uid.strip() for uid in ids.split(",")))


@router.get("/search", response_model=list[UserProfile], response_model_exclude_none=True)
def search(
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    q: str | None = Query(default=None, max_length=255),
):
    """Search users by name or email."""
    return search_users(db, q)
