"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from notebook.database import get_db
from notebook.exceptions import Unauthenticated
from notebook.services.list_service import ListService
from notebook.services.places import PlacesClient
from notebook.services.restaurant_service import RestaurantService
from notebook.services.session import Anonymous, Authenticated, AuthSession, session_from_token
from notebook.services.storage import ObjectStorage

security = HTTPBearer(auto_error=False)


def get_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AuthSession:
    """Get the caller's session from the bearer token, if any."""
    return session_from_token(credentials.credentials if credentials else None)


def get_current_user(
    session: Annotated[AuthSession, Depends(get_session)],
) -> Authenticated:
    """Require an authenticated caller.

    Runs before any database access so anonymous requests never reach the store.
    """
    if isinstance(session, Anonymous):
        raise Unauthenticated()
    return session


def get_list_service(
    db: Annotated[Session, Depends(get_db)],
) -> ListService:
    """Get list service with dependencies."""
    return ListService(db)


def get_restaurant_service(
    db: Annotated[Session, Depends(get_db)],
) -> RestaurantService:
    """Get restaurant service with dependencies."""
    return RestaurantService(db)


def get_object_storage() -> ObjectStorage:
    """Get object storage for uploads."""
    return ObjectStorage()


def get_places_client() -> PlacesClient:
    """Get places lookup client."""
    return PlacesClient()
