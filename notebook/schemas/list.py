"""List schemas."""

from collections import Counter
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, model_validator

from notebook.schemas.restaurant import RestaurantResponse
from notebook.schemas.user import UserProfile


class ListCreate(BaseModel):
    """Create a new list, optionally sharing it with registered users by email."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    cover_image: HttpUrl | None = None
    collaborators: list[EmailStr] | None = None


class ListUpdate(BaseModel):
    """Update a list."""

    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    cover_image: HttpUrl | None = None


class CollaboratorCreate(BaseModel):
    """Add a collaborator to a list."""

    email: EmailStr = Field(..., max_length=255)


class ReorderItem(BaseModel):
    """New position for one list entry."""

    id: str = Field(..., min_length=1)
    order: int


class ReorderRequest(BaseModel):
    """A reorder batch."""

    items: list[ReorderItem] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "ReorderRequest":
        """Reject batches that name the same entry twice."""
        counts = Counter(item.id for item in self.items)
        duplicates = sorted(item_id for item_id, count in counts.items() if count > 1)
        if duplicates:
            raise ValueError(f"Duplicate item ids in reorder batch: {', '.join(duplicates)}")
        return self


class ListResponse(BaseModel):
    """List response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    cover_image: str | None = None
    created_at: datetime
    updated_at: datetime


class ListSummary(ListResponse):
    """Dashboard entry for a list."""

    owners: list[UserProfile] = []
    restaurant_count: int = 0


class ListRestaurantResponse(BaseModel):
    """A restaurant's entry within a list."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    list_id: str
    restaurant_id: str
    order: int
    restaurant: RestaurantResponse


class ListDetail(ListResponse):
    """Composed view of a list with its owners and ordered restaurants."""

    owners: list[UserProfile] = []
    restaurants: list[ListRestaurantResponse] = []
