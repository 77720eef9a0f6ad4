"""Module: notifications."""

import asyncio
import logging
from concurrent.futures import Future
from functools import partial

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from pawconnect.api.v1.routes.deps import get_notifier
from pawconnect.services.notifications import NotificationHub

logger = logging.getLogger(__name__)

router = APIRouter()


def report_send_failure(user_id: int, future: Future) -> None:
    """Done-callback for a scheduled websocket send; logs the error a failed send would otherwise drop."""
    if future.cancelled():
        logger.warning("Notification to user %s cancelled", user_id)
        return
    exc = future.exception()
    if exc is not None:
        logger.warning("Notification to user %s dropped: %s", user_id, exc)


# Endpoint: per-user channel; events are pushed, client messages are ignored.
@router.websocket("/ws/{user_id}")
async def notifications_ws(
    websocket: WebSocket,
    user_id: int,
    notifier: NotificationHub = Depends(get_notifier),
):
    await websocket.accept()
    loop = asyncio.get_running_loop()

    # notify() runs in the sync endpoints' worker threads.
    def channel(payload: dict) -> None:
        future = asyncio.run_coroutine_threadsafe(websocket.send_json(payload), loop)
        future.add_done_callback(partial(report_send_failure, user_id))

    notifier.connect(user_id, channel)
    try:
        await websocket.send_json({"type": "connected", "message": "WebSocket connection established."})
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Notification channel closed for user %s", user_id)
    finally:
        notifier.disconnect(user_id, channel)
