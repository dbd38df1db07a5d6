"""Restaurant and visit models."""

from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from notebook.database import Base
from notebook.models.mixins import TimestampMixin, generate_id


class Restaurant(Base, TimestampMixin):
    """Restaurant model, identified externally by its places id."""

    __tablename__ = "restaurants"

    id = Column(String(36), primary_key=True, default=generate_id)
    place_id = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    address = Column(String(500), nullable=False)
    phone = Column(String(50), nullable=True)
    website = Column(String(2048), nullable=True)
    # Photo URLs: ["https://...", ...]
    photos = Column(JSON, nullable=False, default=list)
    price_level = Column(Integer, nullable=True)  # 1-4
    rating = Column(Float, nullable=True)  # 0-5
    tags = Column(JSON, nullable=False, default=list)

    # Relationships
    list_entries = relationship(
        "ListRestaurant", back_populates="restaurant", cascade="all, delete-orphan"
    )
    visits = relationship(
        "Visit",
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="Visit.date.desc()",
    )


class Visit(Base, TimestampMixin):
    """A dated visit to a restaurant by one or more users."""

    __tablename__ = "visits"

    id = Column(String(36), primary_key=True, default=generate_id)
    restaurant_id = Column(
        String(36), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True
    )
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    notes = Column(String, nullable=False, default="")
    rating = Column(Integer, nullable=True)  # 1-5
    photos = Column(JSON, nullable=False, default=list)

    # Relationships
    restaurant = relationship("Restaurant", back_populates="visits")
    participants = relationship(
        "VisitParticipant", back_populates="visit", cascade="all, delete-orphan"
    )


class VisitParticipant(Base):
    """A user who took part in a visit."""

    __tablename__ = "visit_participants"

    visit_id = Column(String(36), ForeignKey("visits.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True
    )

    # Relationships
    visit = relationship("Visit", back_populates="participants")
    user = relationship("User")
