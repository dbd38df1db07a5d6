"""List models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from notebook.database import Base
from notebook.models.mixins import TimestampMixin, generate_id


class List(Base, TimestampMixin):
    """A named collection of restaurants shared by its owners."""

    __tablename__ = "lists"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=False, default="")
    cover_image = Column(String(2048), nullable=True)

    # Relationships
    owners = relationship(
        "ListOwner",
        back_populates="list",
        cascade="all, delete-orphan",
        order_by="ListOwner.added_at",
    )
    restaurants = relationship(
        "ListRestaurant",
        back_populates="list",
        cascade="all, delete-orphan",
        order_by="ListRestaurant.order",
    )


class ListOwner(Base):
    """Ownership relation between a list and a user.

    Owners and collaborators are the same thing: every row grants full edit rights.
    """

    __tablename__ = "list_owners"

    list_id = Column(String(36), ForeignKey("lists.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    added_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    list = relationship("List", back_populates="owners")
    user = relationship("User", backref="list_ownerships")


class ListRestaurant(Base, TimestampMixin):
    """Position of a restaurant within a list."""

    __tablename__ = "list_restaurants"

    id = Column(String(36), primary_key=True, default=generate_id)
    list_id = Column(
        String(36), ForeignKey("lists.id", ondelete="CASCADE"), nullable=False, index=True
    )
    restaurant_id = Column(
        String(36), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    order = Column(Integer, nullable=False, default=0)

    # Relationships
    list = relationship("List", back_populates="restaurants")
    restaurant = relationship("Restaurant", back_populates="list_entries")
