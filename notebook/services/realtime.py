"""Fan-out of list changes to collaborators over Redis pub/sub.

Mutating endpoints publish one event per change on the list's channel; the
websocket endpoint subscribes to that channel on behalf of every connected
owner. Each event names the user who caused it so clients can skip echoes of
their own edits.
"""

import json
import logging
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import redis
import redis.asyncio as aioredis

from notebook.config import get_settings

if TYPE_CHECKING:
    from redis.asyncio.client import PubSub

logger = logging.getLogger(__name__)
settings = get_settings()


class ListEventType(StrEnum):
    """Event types for list updates."""

    LIST_UPDATED = "list_updated"
    LIST_DELETED = "list_deleted"
    COLLABORATOR_ADDED = "collaborator_added"
    COLLABORATOR_REMOVED = "collaborator_removed"
    RESTAURANT_ADDED = "restaurant_added"
    RESTAURANT_REMOVED = "restaurant_removed"
    RESTAURANTS_REORDERED = "restaurants_reordered"


def list_channel(list_id: str) -> str:
    """Name of the pub/sub channel for a list."""
    return f"list:{list_id}"


def build_list_event(
    list_id: str,
    event_type: ListEventType,
    actor_id: str | None = None,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the JSON-ready event envelope sent to subscribers."""
    return {
        "type": str(event_type),
        "list_id": list_id,
        "actor_id": actor_id,
        "timestamp": datetime.now(UTC).isoformat(),
        "data": data or {},
    }


_publisher: redis.Redis | None = None


def get_publisher() -> redis.Redis:
    """Get the process-wide Redis client used for publishing."""
    global _publisher
    if _publisher is None:
        _publisher = redis.from_url(settings.redis_url)
    return _publisher


def publish_list_event(
    list_id: str,
    event_type: ListEventType,
    actor_id: str | None = None,
    data: dict[str, Any] | None = None,
) -> None:
    """Publish a change to everyone watching a list.

    Redis being unavailable never fails the request that made the change.
    """
    event = build_list_event(list_id, event_type, actor_id, data)
    try:
        get_publisher().publish(list_channel(list_id), json.dumps(event))
        logger.debug(f"Published {event_type} for list {list_id}")
    except redis.RedisError as e:
        logger.error(f"Failed to publish {event_type} for list {list_id}: {e}")


class ListSubscription:
    """Async subscription to a single list's channel."""

    def __init__(self, list_id: str) -> None:
        self.list_id = list_id
        self._redis: aioredis.Redis | None = None
        self._pubsub: PubSub | None = None

    async def _get_redis(self) -> aioredis.Redis:
        if self._redis is None:
            self._redis = aioredis.from_url(settings.redis_url)
        return self._redis

    async def events(self) -> AsyncIterator[dict[str, Any]]:
        """Yield decoded events as they are published."""
        channel = list_channel(self.list_id)
        redis_conn = await self._get_redis()
        self._pubsub = redis_conn.pubsub()
        await self._pubsub.subscribe(channel)

        try:
            async for message in self._pubsub.listen():
                if message["type"] != "message":
                    continue
                try:
                    yield json.loads(message["data"])
                except json.JSONDecodeError:
                    logger.warning(f"Dropping malformed event on {channel}: {message['data']!r}")
        finally:
            await self._pubsub.unsubscribe(channel)

    async def close(self) -> None:
        """Release the pub/sub connection."""
        if self._pubsub is not None:
            await self._pubsub.aclose()
            self._pubsub = None
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
