"""List service: creation, sharing, ordering and the composed list view."""

import logging
from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload, selectinload

from notebook.database import commit_or_fail
from notebook.exceptions import NotFoundOrUnauthorized, ValidationFailed
from notebook.models.list import List, ListOwner, ListRestaurant
from notebook.models.user import User
from notebook.schemas.list import (
    ListCreate,
    ListDetail,
    ListResponse,
    ListRestaurantResponse,
    ListSummary,
    ListUpdate,
    ReorderItem,
)
from notebook.schemas.user import UserProfile
from notebook.services.access import authorize_list
from notebook.services.auth import get_user_by_email, normalize_email

logger = logging.getLogger(__name__)


class ListService:
    """Service for list-related operations.

    Every method that touches an existing list runs the ownership check first;
    a caller without a ListOwner row gets the same NotFoundOrUnauthorized as a
    caller asking for a list that does not exist.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_list(self, owner_id: str, list_data: ListCreate) -> List:
        """Create a list owned by its creator plus any registered collaborators.

        Collaborator emails that do not belong to a registered user are dropped.
        """
        new_list = List(
            name=list_data.name,
            description=list_data.description or "",
            cover_image=str(list_data.cover_image) if list_data.cover_image else None,
        )
        new_list.owners.append(ListOwner(user_id=owner_id))

        if list_data.collaborators:
            emails = {normalize_email(email) for email in list_data.collaborators}
            collaborators = (
                self.db.query(User)
                .filter(func.lower(User.email).in_(sorted(emails)), User.id != owner_id)
                .all()
            )
            for collaborator in collaborators:
                new_list.owners.append(ListOwner(user_id=collaborator.id))

            resolved = {normalize_email(c.email) for c in collaborators}
            unresolved = emails - resolved
            if unresolved:
                logger.info(f"Dropped {len(unresolved)} unregistered collaborator email(s)")

        self.db.add(new_list)
        commit_or_fail(self.db, "create_list")
        self.db.refresh(new_list)
        return new_list

    def get_user_lists(self, user_id: str) -> list[ListSummary]:
        """Get every list the user owns, most recently updated first."""
        lists = (
            self.db.query(List)
            .filter(List.owners.any(ListOwner.user_id == user_id))
            .options(selectinload(List.owners).joinedload(ListOwner.user))
            .order_by(List.updated_at.desc())
            .all()
        )

        # Restaurant counts for all lists in one query
        counts = {}
        list_ids = [lst.id for lst in lists]
        if list_ids:
            counts = dict(
                self.db.query(ListRestaurant.list_id, func.count(ListRestaurant.id))
                .filter(ListRestaurant.list_id.in_(list_ids))
                .group_by(ListRestaurant.list_id)
                .all()
            )

        return [
            ListSummary(
                **ListResponse.model_validate(lst).model_dump(),
                owners=[UserProfile.model_validate(owner.user) for owner in lst.owners],
                restaurant_count=counts.get(lst.id, 0),
            )
            for lst in lists
        ]

    def update_list(self, user_id: str, list_id: str, list_data: ListUpdate) -> List:
        """Update a list's name, description or cover image.

        Only fields present in the request change. An explicit null clears the
        cover image or the description; the name cannot be cleared.
        """
        list_obj = authorize_list(self.db, user_id, list_id)
        provided = list_data.model_fields_set

        if "name" in provided:
            if list_data.name is None:
                raise ValidationFailed("List name cannot be removed", field="name")
            list_obj.name = list_data.name
        if "description" in provided:
            list_obj.description = list_data.description or ""
        if "cover_image" in provided:
            list_obj.cover_image = str(list_data.cover_image) if list_data.cover_image else None

        commit_or_fail(self.db, "update_list")
        self.db.refresh(list_obj)
        return list_obj

    def delete_list(self, user_id: str, list_id: str) -> None:
        """Delete a list together with its owners and restaurant entries."""
        list_obj = authorize_list(self.db, user_id, list_id)
        self.db.delete(list_obj)
        commit_or_fail(self.db, "delete_list")

    def add_collaborator(self, user_id: str, list_id: str, email: str) -> User:
        """Grant a registered user owner rights on a list.

        Adding someone who already owns the list is a no-op.
        """
        list_obj = authorize_list(self.db, user_id, list_id)

        collaborator = get_user_by_email(self.db, email)
        if collaborator is None:
            raise NotFoundOrUnauthorized("user")

        if any(owner.user_id == collaborator.id for owner in list_obj.owners):
            return collaborator

        list_obj.owners.append(ListOwner(user_id=collaborator.id))
        commit_or_fail(self.db, "add_collaborator")
        return collaborator

    def remove_collaborator(self, user_id: str, list_id: str, collaborator_id: str) -> None:
        """Revoke a user's ownership of a list. The last owner cannot be removed."""
        list_obj = authorize_list(self.db, user_id, list_id)

        ownership = next(
            (owner for owner in list_obj.owners if owner.user_id == collaborator_id), None
        )
        if ownership is None:
            raise NotFoundOrUnauthorized("collaborator")
        if len(list_obj.owners) == 1:
            raise ValidationFailed("A list must keep at least one owner", field="user_id")

        list_obj.owners.remove(ownership)
        commit_or_fail(self.db, "remove_collaborator")

    def reorder(self, user_id: str, list_id: str, items: Sequence[ReorderItem]) -> None:
        """Apply a batch of new positions to a list's restaurant entries.

        Every id must belong to the authorized list; otherwise nothing is
        written. Entries not named keep their position. The batch is committed
        as one transaction.
        """
        authorize_list(self.db, user_id, list_id)

        new_orders = {item.id: item.order for item in items}
        entries = (
            self.db.query(ListRestaurant)
            .filter(
                ListRestaurant.list_id == list_id,
                ListRestaurant.id.in_(list(new_orders)),
            )
            .all()
        )
        if len(entries) != len(new_orders):
            found = {entry.id for entry in entries}
            logger.warning(
                f"Reorder on list {list_id} named {len(new_orders) - len(found)} foreign entries"
            )
            raise NotFoundOrUnauthorized("list entry")

        for entry in entries:
            entry.order = new_orders[entry.id]

        commit_or_fail(self.db, "reorder")

    def get_list_detail(self, user_id: str, list_id: str) -> ListDetail:
        """Compose a list with its owners and its restaurants in list order."""
        list_obj = authorize_list(self.db, user_id, list_id)

        owners = (
            self.db.query(ListOwner)
            .options(joinedload(ListOwner.user))
            .filter(ListOwner.list_id == list_id)
            .order_by(ListOwner.added_at)
            .all()
        )
        entries = (
            self.db.query(ListRestaurant)
            .options(joinedload(ListRestaurant.restaurant))
            .filter(ListRestaurant.list_id == list_id)
            .order_by(ListRestaurant.order, ListRestaurant.created_at, ListRestaurant.id)
            .all()
        )

        return ListDetail(
            id=list_obj.id,
            name=list_obj.name,
            description=list_obj.description,
            cover_image=list_obj.cover_image,
            created_at=list_obj.created_at,
            updated_at=list_obj.updated_at,
            owners=[UserProfile.model_validate(owner.user) for owner in owners],
            restaurants=[ListRestaurantResponse.model_validate(entry) for entry in entries],
        )
