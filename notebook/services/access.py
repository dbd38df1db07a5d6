"""Ownership checks for lists and restaurants.

A list the caller does not own is reported exactly like a list that does not
exist, so callers cannot discover other users' ids.
"""

from sqlalchemy.orm import Session

from notebook.exceptions import NotFoundOrUnauthorized
from notebook.models.list import List, ListOwner, ListRestaurant
from notebook.models.restaurant import Restaurant, Visit


def authorize_list(db: Session, user_id: str, list_id: str) -> List:
    """Get a list the user owns, or raise NotFoundOrUnauthorized."""
    list_obj = (
        db.query(List)
        .filter(
            List.id == list_id,
            List.owners.any(ListOwner.user_id == user_id),
        )
        .first()
    )
    if list_obj is None:
        raise NotFoundOrUnauthorized("list")
    return list_obj


def authorize_restaurant(db: Session, user_id: str, restaurant_id: str) -> Restaurant:
    """Get a restaurant that sits on at least one list the user owns."""
    restaurant = (
        db.query(Restaurant)
        .filter(
            Restaurant.id == restaurant_id,
            Restaurant.list_entries.any(
                ListRestaurant.list.has(List.owners.any(ListOwner.user_id == user_id))
            ),
        )
        .first()
    )
    if restaurant is None:
        raise NotFoundOrUnauthorized("restaurant")
    return restaurant


def authorize_visit(db: Session, user_id: str, visit_id: str) -> Visit:
    """Get a visit to a restaurant that sits on at least one list the user owns."""
    visit = (
        db.query(Visit)
        .filter(
            Visit.id == visit_id,
            Visit.restaurant.has(
                Restaurant.list_entries.any(
                    ListRestaurant.list.has(List.owners.any(ListOwner.user_id == user_id))
                )
            ),
        )
        .first()
    )
    if visit is None:
        raise NotFoundOrUnauthorized("visit")
    return visit
