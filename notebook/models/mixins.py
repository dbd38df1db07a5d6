"""Mixins and helpers for SQLAlchemy models."""

import uuid

from sqlalchemy import Column, DateTime, func


def generate_id() -> str:
    """Generate an opaque string primary key."""
    return str(uuid.uuid4())


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
