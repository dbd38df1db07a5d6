"""Visit API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from notebook.api.dependencies import get_current_user, get_restaurant_service
from notebook.schemas.restaurant import VisitCreate, VisitPhotosAdd, VisitResponse, VisitUpdate
from notebook.services.restaurant_service import RestaurantService, visit_response
from notebook.services.session import Authenticated

router = APIRouter(prefix="/api/v1/visits", tags=["visits"])


@router.post("", response_model=VisitResponse, response_model_exclude_none=True)
def create_visit(
    data: VisitCreate,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[RestaurantService, Depends(get_restaurant_service)],
):
    """Record a visit to a restaurant."""
    visit = service.create_visit(current_user.user_id, data)
    return visit_response(visit)


@router.get("/{visit_id}", response_model=VisitResponse, response_model_exclude_none=True)
def get_visit(
    visit_id: str,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[RestaurantService, Depends(get_restaurant_service)],
):
    """Get a visit with its participants."""
    return visit_response(service.get_visit(current_user.user_id, visit_id))


@router.patch("/{visit_id}", response_model=VisitResponse, response_model_exclude_none=True)
def update_visit(
    visit_id: str,
    data: VisitUpdate,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[RestaurantService, Depends(get_restaurant_service)],
):
    """Edit a visit's date, notes, rating or participants."""
    return visit_response(service.update_visit(current_user.user_id, visit_id, data))


@router.post(
    "/{visit_id}/photos", response_model=VisitResponse, response_model_exclude_none=True
)
def add_visit_photos(
    visit_id: str,
    data: VisitPhotosAdd,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    service: Annotated[RestaurantService, Depends(get_restaurant_service)],
):
    """Attach photos to a visit."""
    return visit_response(service.add_visit_photos(current_user.user_id, visit_id, data))
