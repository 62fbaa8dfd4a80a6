"""Fire-and-forget user notifications."""

from __future__ import annotations

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)

MEETING_INVITED = "meeting.invited"
MEETING_CANCELLED = "meeting.cancelled"
MESSAGE_NEW = "message.new"


class NotificationChannel(Protocol):
    async def send(self, user_id: str, message: dict) -> bool:
        ...


class NotificationService:
    """Pushes events to users over a channel. Delivery problems never reach the caller."""

    def __init__(self, channel: NotificationChannel) -> None:
        self._channel = channel

    async def notify(self, user_id: str, event: str, payload: dict[str, Any]) -> bool:
        try:
            delivered = await self._channel.send(user_id, {"type": event, "data": payload})
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("Notification %s for user %s failed: %s", event, user_id, exc)
            return False
        if not delivered:
            logger.debug("Notification %s for user %s not delivered (offline)", event, user_id)
        return delivered
