"""Pydantic schemas for API requests and responses."""

from notebook.schemas.auth import AuthResponse, UserLogin, UserRegister
from notebook.schemas.list import (
    CollaboratorCreate,
    ListCreate,
    ListDetail,
    ListResponse,
    ListRestaurantResponse,
    ListSummary,
    ListUpdate,
    ReorderItem,
    ReorderRequest,
)
from notebook.schemas.restaurant import (
    RestaurantCreate,
    RestaurantDetail,
    RestaurantResponse,
    VisitCreate,
    VisitPhotosAdd,
    VisitResponse,
    VisitUpdate,
)
from notebook.schemas.user import UserProfile

__all__ = [
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserProfile",
    "ListCreate",
    "ListUpdate",
    "ListResponse",
    "ListSummary",
    "ListDetail",
    "ListRestaurantResponse",
    "CollaboratorCreate",
    "ReorderItem",
    "ReorderRequest",
    "RestaurantCreate",
    "RestaurantResponse",
    "RestaurantDetail",
    "VisitCreate",
    "VisitPhotosAdd",
    "VisitResponse",
    "VisitUpdate",
]
