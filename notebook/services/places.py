"""Google Places lookup used when adding restaurants to a list."""

import logging
from typing import Any

import httpx

from notebook.config import get_settings
from notebook.exceptions import InternalFailure

logger = logging.getLogger(__name__)

DETAIL_FIELDS = (
    "name,formatted_address,formatted_phone_number,website,photos,price_level,rating,url"
)


class PlacesClient:
    """Thin proxy over the Places web service. Holds no local state."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = get_settings()
        self.api_key = api_key if api_key is not None else self.settings.google_places_api_key
        self.base_url = (base_url or self.settings.google_places_base_url).rstrip("/")
        self.timeout = 10.0
        self._transport = transport

    async def _get(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise InternalFailure("Places lookup is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.base_url}/{endpoint}/json",
                    params={**params, "key": self.api_key},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling Places {endpoint}: {e}")
            raise InternalFailure(context={"endpoint": endpoint}) from e

        status = data.get("status", "OK")
        if status not in ("OK", "ZERO_RESULTS"):
            logger.error(f"Places {endpoint} returned {status}: {data.get('error_message')}")
            raise InternalFailure(context={"endpoint": endpoint, "status": status})
        return data

    async def search_places(self, query: str) -> list[dict[str, Any]]:
        """Text search for places matching the query."""
        data = await self._get("textsearch", {"query": query})
        return data.get("results", [])

    async def get_place_details(self, place_id: str) -> dict[str, Any]:
        """Get details for a single place."""
        data = await self._get("details", {"place_id": place_id, "fields": DETAIL_FIELDS})
        return data.get("result", {})

    def get_place_photo_url(self, photo_reference: str, max_width: int = 400) -> str:
        """Build the URL of a place photo. No request is made."""
        if not self.api_key:
            raise InternalFailure("Places lookup is not configured")
        query = httpx.QueryParams(
            {"maxwidth": max_width, "photoreference": photo_reference, "key": self.api_key}
        )
        return f"{self.base_url}/photo?{query}"
