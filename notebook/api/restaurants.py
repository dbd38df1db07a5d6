"""Restaurant API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from notebook.api.dependencies import get_current_user, get_restaurant_service
from notebook.schemas.compose import to_payload
from notebook.schemas.list import ListRestaurantResponse
from notebook.schemas.restaurant import RestaurantCreate, RestaurantDetail, VisitResponse
from notebook.services.realtime import ListEventType, publish_list_event
from notebook.services.restaurant_service import RestaurantService, visit_response
from notebook.services.session import Authenticated

router = APIRouter(prefix="/api/v1", tags=["restaurants"])


@router.post(
    "/restaurants", response_model=ListRestaurantResponse, response_model_exclude_none=True
)
def add_restaurant(
    data: RestaurantCreate,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[RestaurantService, Depends(get_restaurant_service)],
):
    """Add a restaurant to the end of a list."""
    entry = ListRestaurantResponse.model_validate(service.add_to_list(current_user.user_id, data))
    publish_list_event(
        data.list_id,
        ListEventType.RESTAURANT_ADDED,
        current_user.user_id,
        {"entry": to_payload(entry)},
    )
    return entry


@router.get(
    "/restaurants/{restaurant_id}",
    response_model=RestaurantDetail,
    response_model_exclude_none=True,
)
def get_restaurant(
    restaurant_id: str,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[RestaurantService, Depends(get_restaurant_service)],
):
    """Get a restaurant with its visit history."""
    return service.get_restaurant_detail(current_user.user_id, restaurant_id)


@router.get(
    "/restaurants/{restaurant_id}/visits",
    response_model=list[VisitResponse],
    response_model_exclude_none=True,
)
def get_restaurant_visits(
    restaurant_id: str,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[RestaurantService, Depends(get_restaurant_service)],
):
    """Get a restaurant's visits, newest first."""
    return [visit_response(v) for v in service.get_visits(current_user.user_id, restaurant_id)]


@router.delete(
    "/lists/{list_id}/restaurants/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT
)
def remove_restaurant(
    list_id: str,
    restaurant_id: str,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[RestaurantService, Depends(get_restaurant_service)],
):
    """Take a restaurant off a list."""
    service.remove_from_list(current_user.user_id, list_id, restaurant_id)
    publish_list_event(
        list_id,
        ListEventType.RESTAURANT_REMOVED,
        current_user.user_id,
        {"restaurant_id": restaurant_id},
    )
