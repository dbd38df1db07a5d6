"""Places lookup API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from notebook.api.dependencies import get_current_user, get_places_client
from notebook.services.places import PlacesClient
from notebook.services.session import Authenticated

router = APIRouter(prefix="/api/v1/places", tags=["places"])


@router.get("/search")
async def search_places(
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    client: Annotated[PlacesClient, Depends(get_places_client)],
    q: str | None = Query(default=None, max_length=255),
) -> list[dict[str, Any]]:
    """Search for restaurants to add to a list."""
    if not q or not q.strip():
        return []
    return await client.search_places(q.strip())


@router.get("/photo")
def get_photo_url(
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    client: Annotated[PlacesClient, Depends(get_places_client)],
    reference: str = Query(..., min_length=1),
    max_width: int = Query(default=400, ge=1, le=1600),
) -> dict[str, str]:
    """Get the URL of a place photo."""
    return {"url": client.get_place_photo_url(reference, max_width)}


@router.get("/{place_id}")
async def get_place(
    place_id: str,
    current_user: Annotated[Authenticated, Depends(get_current_user)],
    client: Annotated[PlacesClient, Depends(get_places_client)],
) -> dict[str, Any]:
    """Get details for a place."""
    return await client.get_place_details(place_id)
