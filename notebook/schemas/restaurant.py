"""Restaurant and visit schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from notebook.schemas.user import UserProfile


class RestaurantCreate(BaseModel):
    """Add a restaurant (found through places lookup) to a list."""

    list_id: str
    place_id: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., max_length=500)
    phone: str | None = Field(None, max_length=50)
    website: HttpUrl | None = None
    photos: list[HttpUrl] | None = None
    price_level: int | None = Field(None, ge=1, le=4)
    rating: float | None = Field(None, ge=0, le=5)
    tags: list[str] | None = None


class RestaurantResponse(BaseModel):
    """Restaurant response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    place_id: str
    name: str
    address: str
    phone: str | None = None
    website: str | None = None
    photos: list[str] = []
    price_level: int | None = None
    rating: float | None = None
    tags: list[str] = []
    created_at: datetime
    updated_at: datetime


class VisitCreate(BaseModel):
    """Record a visit to a restaurant."""

    restaurant_id: str
    date: datetime
    notes: str | None = Field(None, max_length=5000)
    rating: int | None = Field(None, ge=1, le=5)
    photos: list[HttpUrl] | None = None
    participants: list[str]


class VisitUpdate(BaseModel):
    """Change a recorded visit. Fields left out of the request are kept."""

    date: datetime | None = None
    notes: str | None = Field(None, max_length=5000)
    rating: int | None = Field(None, ge=1, le=5)
    participants: list[str] | None = None


class VisitPhotosAdd(BaseModel):
    """Attach uploaded photos to a visit."""

    photos: list[HttpUrl] = Field(..., min_length=1)


class VisitResponse(BaseModel):
    """Visit with its participants."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    date: datetime
    notes: str
    rating: int | None = None
    photos: list[str] = []
    participants: list[UserProfile] = []
    created_at: datetime


class RestaurantDetail(RestaurantResponse):
    """Composed view of a restaurant with its visit history, newest first."""

    visits: list[VisitResponse] = []
