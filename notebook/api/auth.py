"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from notebook.api.dependencies import get_current_user
from notebook.database import get_db
from notebook.exceptions import NotFoundOrUnauthorized, Unauthenticated
from notebook.models.user import User
from notebook.schemas.auth import AuthResponse, UserLogin, UserRegister
from notebook.schemas.user import UserProfile
from notebook.services.auth import authenticate_user, create_access_token, register_user
from notebook.services.session import Authenticated

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(user.id, user.email, user.name),
        user=UserProfile.model_validate(user),
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    user = register_user(db, user_data.email, user_data.password, user_data.name)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse, response_model_exclude_none=True)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise Unauthenticated("Incorrect email or password")

    return _auth_response(user)


@router.get("/me", response_model=UserProfile, response_model_exclude_none=True)
def get_me(
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get current user information."""
    user = db.query(User).filter(User.id == current_user.user_id).first()
    if user is None:
        raise NotFoundOrUnauthorized("user")
    return user
