"""List API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from notebook.api.dependencies import get_current_user, get_list_service
from notebook.schemas.list import (
    CollaboratorCreate,
    ListCreate,
    ListDetail,
    ListResponse,
    ListSummary,
    ListUpdate,
    ReorderRequest,
)
from notebook.services.list_service import ListService
from notebook.services.realtime import ListEventType, publish_list_event
from notebook.services.session import Authenticated

router = APIRouter(prefix="/api/v1/lists", tags=["lists"])


@router.get("", response_model=list[ListSummary], response_model_exclude_none=True)
def get_lists(
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Get all lists the current user owns or collaborates on."""
    return service.get_user_lists(current_user.user_id)


@router.post("", response_model=ListResponse, response_model_exclude_none=True)
def create_list(
    list_data: ListCreate,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Create a new list."""
    return service.create_list(current_user.user_id, list_data)


@router.get("/{list_id}", response_model=ListDetail, response_model_exclude_none=True)
def get_list(
    list_id: str,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Get a list with its owners and restaurants in order."""
    return service.get_list_detail(current_user.user_id, list_id)


@router.patch("/{list_id}", response_model=ListResponse, response_model_exclude_none=True)
def update_list(
    list_id: str,
    list_data: ListUpdate,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Update a list."""
    list_obj = service.update_list(current_user.user_id, list_id, list_data)
    publish_list_event(list_id, ListEventType.LIST_UPDATED, current_user.user_id)
    return list_obj


@router.delete("/{list_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_list(
    list_id: str,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Delete a list along with its restaurant entries and owners."""
    service.delete_list(current_user.user_id, list_id)
    publish_list_event(list_id, ListEventType.LIST_DELETED, current_user.user_id)


@router.patch("/{list_id}/reorder", status_code=status.HTTP_204_NO_CONTENT)
def reorder_list(
    list_id: str,
    body: ReorderRequest,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Move restaurants within a list."""
    service.reorder(current_user.user_id, list_id, body.items)
    publish_list_event(
        list_id,
        ListEventType.RESTAURANTS_REORDERED,
        current_user.user_id,
        {"items": [item.model_dump() for item in body.items]},
    )


@router.post(
    "/{list_id}/collaborators",
    response_model=ListDetail,
    response_model_exclude_none=True,
)
def add_collaborator(
    list_id: str,
    body: CollaboratorCreate,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Share a list with a registered user by email."""
    collaborator = service.add_collaborator(current_user.user_id, list_id, body.email)
    publish_list_event(
        list_id,
        ListEventType.COLLABORATOR_ADDED,
        current_user.user_id,
        {"user_id": collaborator.id},
    )
    return service.get_list_detail(current_user.user_id, list_id)


@router.delete("/{list_id}/collaborators/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_collaborator(
    list_id: str,
    user_id: str,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[ListService, Depends(get_list_service)],
):
    """Remove a user's access to a list."""
    service.remove_collaborator(current_user.user_id, list_id, user_id)
    publish_list_event(
        list_id, ListEventType.COLLABORATOR_REMOVED, current_user.user_id, {"user_id": user_id}
    )
