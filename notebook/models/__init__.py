"""SQLAlchemy models."""

from notebook.models.list import List, ListOwner, ListRestaurant
from notebook.models.restaurant import Restaurant, Visit, VisitParticipant
from notebook.models.user import User

__all__ = [
    "User",
    "List",
    "ListOwner",
    "ListRestaurant",
    "Restaurant",
    "Visit",
    "VisitParticipant",
]
