"""create notebook tables

Revision ID: 3f9c1a2b7d10
Revises:
Create Date: 2026-10-19 10:12:08.418203

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9c1a2b7d10"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("image", sa.String(length=2048), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "lists",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("cover_image", sa.String(length=2048), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "list_owners",
        sa.Column(
            "list_id",
            sa.String(length=36),
            sa.ForeignKey("lists.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("added_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(op.f("ix_list_owners_user_id"), "list_owners", ["user_id"], unique=False)

    op.create_table(
        "restaurants",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("place_id", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=500), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("website", sa.String(length=2048), nullable=True),
        sa.Column("photos", sa.JSON(), nullable=False),
        sa.Column("price_level", sa.Integer(), nullable=True),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_restaurants_place_id"), "restaurants", ["place_id"], unique=True)

    op.create_table(
        "list_restaurants",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "list_id",
            sa.String(length=36),
            sa.ForeignKey("lists.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "restaurant_id",
            sa.String(length=36),
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index(
        op.f("ix_list_restaurants_list_id"), "list_restaurants", ["list_id"], unique=False
    )
    op.create_index(
        op.f("ix_list_restaurants_restaurant_id"),
        "list_restaurants",
        ["restaurant_id"],
        unique=False,
    )

    op.create_table(
        "visits",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "restaurant_id",
            sa.String(length=36),
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.String(), nullable=False, server_default=""),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("photos", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_visits_restaurant_id"), "visits", ["restaurant_id"], unique=False)
    op.create_index(op.f("ix_visits_date"), "visits", ["date"], unique=False)

    op.create_table(
        "visit_participants",
        sa.Column(
            "visit_id",
            sa.String(length=36),
            sa.ForeignKey("visits.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )
    op.create_index(
        op.f("ix_visit_participants_user_id"), "visit_participants", ["user_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_visit_participants_user_id"), table_name="visit_participants")
    op.drop_table("visit_participants")
    op.drop_index(op.f("ix_visits_date"), table_name="visits")
    op.drop_index(op.f("ix_visits_restaurant_id"), table_name="visits")
    op.drop_table("visits")
    op.drop_index(op.f("ix_list_restaurants_restaurant_id"), table_name="list_restaurants")
    op.drop_index(op.f("ix_list_restaurants_list_id"), table_name="list_restaurants")
    op.drop_table("list_restaurants")
    op.drop_index(op.f("ix_restaurants_place_id"), table_name="restaurants")
    op.drop_table("restaurants")
    op.drop_index(op.f("ix_list_owners_user_id"), table_name="list_owners")
    op.drop_table("list_owners")
    op.drop_table("lists")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_table("users")
