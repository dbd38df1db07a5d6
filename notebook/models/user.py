"""User model."""

from sqlalchemy import Column, String

from notebook.database import Base
from notebook.models.mixins import TimestampMixin, generate_id


class User(Base, TimestampMixin):
    """User model for authentication and list ownership."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    image = Column(String(2048), nullable=True)
