"""Module: notifications."""

import logging
import threading
from typing import Any, Callable

logger = logging.getLogger(__name__)

Channel = Callable[[dict[str, Any]], None]


class NotificationHub:
    """
    Fire-and-forget delivery of small JSON payloads to connected users.

    A channel is any callable taking the payload; the websocket route registers
    one per open connection. notify() never raises and silently does nothing
    when the user has no channel.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._channels: dict[int, list[Channel]] = {}

    def connect(self, user_id: int, channel: Channel) -> None:
        with self._lock:
            self._channels.setdefault(user_id, []).append(channel)

    def disconnect(self, user_id: int, channel: Channel) -> None:
        with self._lock:
            channels = self._channels.get(user_id, [])
            if channel in channels:
                channels.remove(channel)
            if not channels:
                self._channels.pop(user_id, None)

    def is_connected(self, user_id: int) -> bool:
        return bool(self._channels.get(user_id))

    def notify(self, user_id: int, payload: dict[str, Any]) -> None:
        with self._lock:
            channels = list(self._channels.get(user_id, []))

        for channel in channels:
            try:
                channel(payload)
            except Exception as exc:
                logger.warning("Notification to user %s dropped: %s", user_id, exc)

    def notify_user(self, recipient_id: int | None, sender_id: int, event_type: str, **data: Any) -> None:
        # No notifications for your own actions (liking your own post, etc.).
        if recipient_id is None or recipient_id == sender_id:
            return
        self.notify(recipient_id, {"type": event_type, "sender_id": sender_id, **data})


# Process-wide hub shared by the API routes.
notifications = NotificationHub()
