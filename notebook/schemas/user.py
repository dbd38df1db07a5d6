"""User schemas."""

from pydantic import BaseModel, ConfigDict


class UserProfile(BaseModel):
    """Public projection of a user. Never carries credential fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str | None = None
    email: str
    image: str | None = None
