"""Restaurant service: list membership, visits and the composed restaurant view."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from notebook.database import commit_or_fail
from notebook.exceptions import NotFoundOrUnauthorized, ValidationFailed
from notebook.models.list import ListRestaurant
from notebook.models.restaurant import Restaurant, Visit, VisitParticipant
from notebook.models.user import User
from notebook.schemas.restaurant import (
    RestaurantCreate,
    RestaurantDetail,
    RestaurantResponse,
    VisitCreate,
    VisitPhotosAdd,
    VisitResponse,
    VisitUpdate,
)
from notebook.schemas.user import UserProfile
from notebook.services.access import authorize_list, authorize_restaurant, authorize_visit

logger = logging.getLogger(__name__)


def visit_response(visit: Visit) -> VisitResponse:
    """Build the response for a visit with its participants' profiles."""
    return VisitResponse(
        id=visit.id,
        restaurant_id=visit.restaurant_id,
        date=visit.date,
        notes=visit.notes,
        rating=visit.rating,
        photos=visit.photos or [],
        participants=[UserProfile.model_validate(p.user) for p in visit.participants],
        created_at=visit.created_at,
    )


class RestaurantService:
    """Service for restaurant-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def add_to_list(self, user_id: str, data: RestaurantCreate) -> ListRestaurant:
        """Append a restaurant to the end of a list.

        The restaurant is created on first use of its place id. A restaurant
        already on the list keeps its existing entry and position.
        """
        authorize_list(self.db, user_id, data.list_id)

        restaurant = self.db.query(Restaurant).filter(Restaurant.place_id == data.place_id).first()
        if restaurant is None:
            restaurant = Restaurant(
                place_id=data.place_id,
                name=data.name,
                address=data.address,
                phone=data.phone,
                website=str(data.website) if data.website else None,
                photos=[str(photo) for photo in data.photos or []],
                price_level=data.price_level,
                rating=data.rating,
                tags=sorted(set(data.tags or [])),
            )
            self.db.add(restaurant)
            self.db.flush()
        else:
            existing = (
                self.db.query(ListRestaurant)
                .filter(
                    ListRestaurant.list_id == data.list_id,
                    ListRestaurant.restaurant_id == restaurant.id,
                )
                .first()
            )
            if existing is not None:
                return existing

        highest_order = (
            self.db.query(func.max(ListRestaurant.order))
            .filter(ListRestaurant.list_id == data.list_id)
            .scalar()
        )
        entry = ListRestaurant(
            list_id=data.list_id,
            restaurant_id=restaurant.id,
            order=0 if highest_order is None else highest_order + 1,
        )
        self.db.add(entry)
        commit_or_fail(self.db, "add_to_list")
        self.db.refresh(entry)
        return entry

    def remove_from_list(self, user_id: str, list_id: str, restaurant_id: str) -> None:
        """Take a restaurant off a list. The restaurant and its visits remain."""
        authorize_list(self.db, user_id, list_id)

        entry = (
            self.db.query(ListRestaurant)
            .filter(
                ListRestaurant.list_id == list_id,
                ListRestaurant.restaurant_id == restaurant_id,
            )
            .first()
        )
        if entry is None:
            raise NotFoundOrUnauthorized("restaurant")

        self.db.delete(entry)
        commit_or_fail(self.db, "remove_from_list")

    def _visits(self):
        return self.db.query(Visit).options(
            selectinload(Visit.participants).joinedload(VisitParticipant.user)
        )

    def _check_participants(self, user_ids: list[str]) -> list[str]:
        """Deduplicate participant ids, rejecting any that name no user."""
        participant_ids = list(dict.fromkeys(user_ids))
        if not participant_ids:
            return []

        known = {
            uid for (uid,) in self.db.query(User.id).filter(User.id.in_(participant_ids)).all()
        }
        unknown = [uid for uid in participant_ids if uid not in known]
        if unknown:
            logger.info(f"Rejected {len(unknown)} unknown visit participant(s)")
            raise ValidationFailed(
                "Unknown participants", field="participants", context={"ids": unknown}
            )
        return participant_ids

    def get_restaurant_detail(self, user_id: str, restaurant_id: str) -> RestaurantDetail:
        """Compose a restaurant with its visits, newest first."""
        restaurant = authorize_restaurant(self.db, user_id, restaurant_id)

        return RestaurantDetail(
            **RestaurantResponse.model_validate(restaurant).model_dump(),
            visits=[visit_response(visit) for visit in self.get_visits(user_id, restaurant_id)],
        )

    def get_visits(self, user_id: str, restaurant_id: str) -> list[Visit]:
        """Get a restaurant's visits, newest first."""
        authorize_restaurant(self.db, user_id, restaurant_id)
        return (
            self._visits()
            .filter(Visit.restaurant_id == restaurant_id)
            .order_by(Visit.date.desc())
            .all()
        )

    def get_visit(self, user_id: str, visit_id: str) -> Visit:
        """Get one visit with its participants."""
        authorize_visit(self.db, user_id, visit_id)
        return self._visits().filter(Visit.id == visit_id).one()

    def create_visit(self, user_id: str, data: VisitCreate) -> Visit:
        """Record a visit to a restaurant the user can reach through one of their lists."""
        authorize_restaurant(self.db, user_id, data.restaurant_id)
        participant_ids = self._check_participants(data.participants)

        visit = Visit(
            restaurant_id=data.restaurant_id,
            date=data.date,
            notes=data.notes or "",
            rating=data.rating,
            photos=[str(photo) for photo in data.photos or []],
            participants=[VisitParticipant(user_id=uid) for uid in participant_ids],
        )
        self.db.add(visit)
        commit_or_fail(self.db, "create_visit")
        return self._visits().filter(Visit.id == visit.id).one()

    def update_visit(self, user_id: str, visit_id: str, data: VisitUpdate) -> Visit:
        """Change a visit's date, notes, rating or participants.

        Only fields present in the request change. An explicit null clears the
        notes or the rating.
        """
        visit = authorize_visit(self.db, user_id, visit_id)
        provided = data.model_fields_set

        if "date" in provided and data.date is None:
            raise ValidationFailed("Visit date cannot be removed", field="date")
        if "participants" in provided:
            participant_ids = self._check_participants(data.participants or [])

        if "date" in provided:
            visit.date = data.date
        if "notes" in provided:
            visit.notes = data.notes or ""
        if "rating" in provided:
            visit.rating = data.rating
        if "participants" in provided:
            # Rows are keyed by (visit, user); keep the ones that stay
            current = {p.user_id: p for p in visit.participants}
            visit.participants = [
                current.get(uid) or VisitParticipant(user_id=uid) for uid in participant_ids
            ]

        commit_or_fail(self.db, "update_visit")
        self.db.expire_all()
        return self._visits().filter(Visit.id == visit_id).one()

    def add_visit_photos(self, user_id: str, visit_id: str, data: VisitPhotosAdd) -> Visit:
        """Append photos to a visit, skipping any it already has."""
        visit = authorize_visit(self.db, user_id, visit_id)

        photos = list(visit.photos or [])
        photos.extend(url for url in map(str, data.photos) if url not in photos)
        visit.photos = photos

        commit_or_fail(self.db, "add_visit_photos")
        self.db.expire_all()
        return self._visits().filter(Visit.id == visit_id).one()
