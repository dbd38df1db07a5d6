"""WebSocket endpoint for real-time list collaboration."""

import asyncio
import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from notebook.database import get_sessionmaker
from notebook.exceptions import NotFoundOrUnauthorized
from notebook.services.access import authorize_list
from notebook.services.realtime import ListSubscription
from notebook.services.session import Anonymous, session_from_token

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/ws", tags=["websocket"])

PING_INTERVAL_SECONDS = 30
ACCESS_DENIED = 4003


def _owns_list(user_id: str, list_id: str) -> bool:
    db = get_sessionmaker()()
    try:
        authorize_list(db, user_id, list_id)
    except NotFoundOrUnauthorized:
        return False
    finally:
        db.close()
    return True


@router.websocket("/lists/{list_id}")
async def websocket_list_sync(
    websocket: WebSocket,
    list_id: str,
    token: str = Query(...),
) -> None:
    """Stream changes to a list to one of its owners.

    Authentication is via the token query parameter since browsers cannot set
    headers on WebSocket requests. Closes with 4001 for a bad token and 4003
    when the caller does not own the list. Ownership is checked again before
    each event is forwarded, so a removed collaborator or a deleted list ends
    the stream with 4003.
    """
    session = session_from_token(token)
    if isinstance(session, Anonymous):
        await websocket.close(code=4001, reason="Invalid token")
        return

    if not _owns_list(session.user_id, list_id):
        await websocket.close(code=ACCESS_DENIED, reason="Access denied")
        return

    await websocket.accept()
    logger.info(f"WebSocket connected: user={session.user_id}, list={list_id}")
    subscription = ListSubscription(list_id)

    async def forward_events() -> None:
        async for event in subscription.events():
            if not await asyncio.to_thread(_owns_list, session.user_id, list_id):
                logger.info(f"WebSocket access revoked: user={session.user_id}, list={list_id}")
                await websocket.close(code=ACCESS_DENIED, reason="Access revoked")
                return
            await websocket.send_json(event)

    async def send_pings() -> None:
        while True:
            await asyncio.sleep(PING_INTERVAL_SECONDS)
            await websocket.send_json({"type": "ping"})

    async def receive_client() -> None:
        # Only pongs are expected from the client; a disconnect ends the session.
        while True:
            await websocket.receive_json()

    tasks = [
        asyncio.create_task(forward_events()),
        asyncio.create_task(send_pings()),
        asyncio.create_task(receive_client()),
    ]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            error = task.exception()
            if error is not None and not isinstance(error, WebSocketDisconnect):
                logger.error(f"WebSocket error on list {list_id}: {error}")
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await subscription.close()
        logger.info(f"WebSocket disconnected: user={session.user_id}, list={list_id}")
