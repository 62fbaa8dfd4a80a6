"""Connection manager for signed-in users' notification sockets."""

import asyncio
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict

from fastapi import WebSocket

from skillbridge.core.config import get_settings

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ConnectionManager:
    """Keeps one socket per user and drops it when heartbeats stop arriving."""

    def __init__(self, timeout: int = 300, check_interval: int = 30) -> None:
        self.connections: Dict[str, WebSocket] = {}
        self.heartbeat_tasks: Dict[str, asyncio.Task] = {}
        self.last_heartbeat: Dict[str, datetime] = {}
        self.timeout = timedelta(seconds=timeout)
        self.check_interval = check_interval

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        previous = self.connections.get(user_id)
        if previous is not None and previous is not websocket:
            try:
                await previous.close(code=1000, reason="Replaced by a newer connection")
            except RuntimeError:
                logger.debug("Previous socket for %s was already closed", user_id)
        self.connections[user_id] = websocket
        self.last_heartbeat[user_id] = _now()
        self._start_heartbeat_monitor(user_id)
        logger.info("User %s connected", user_id)

    async def disconnect(self, user_id: str, websocket: WebSocket | None = None) -> None:
        current = self.connections.get(user_id)
        if websocket is not None and current is not websocket:
            return
        self.connections.pop(user_id, None)
        self.last_heartbeat.pop(user_id, None)
        task = self.heartbeat_tasks.pop(user_id, None)
        if task and task is not asyncio.current_task():
            task.cancel()
        logger.info("User %s disconnected", user_id)

    async def send(self, user_id: str, message: dict) -> bool:
        websocket = self.connections.get(user_id)
        if websocket is None:
            logger.debug("User %s is not connected", user_id)
            return False
        try:
            await websocket.send_text(json.dumps(message, default=str))
            return True
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Failed to push message to user %s: %s", user_id, exc)
            await self.disconnect(user_id)
            return False

    def is_online(self, user_id: str) -> bool:
        return user_id in self.connections

    def get_online_count(self) -> int:
        return len(self.connections)

    def update_heartbeat(self, user_id: str) -> None:
        self.last_heartbeat[user_id] = _now()

    def _start_heartbeat_monitor(self, user_id: str) -> None:
        task = self.heartbeat_tasks.get(user_id)
        if task:
            task.cancel()
        self.heartbeat_tasks[user_id] = asyncio.create_task(self._heartbeat_monitor(user_id))

    async def _heartbeat_monitor(self, user_id: str) -> None:
        try:
            while True:
                await asyncio.sleep(self.check_interval)
                last = self.last_heartbeat.get(user_id)
                if last and _now() - last > self.timeout:
                    logger.warning("Heartbeat timeout for user %s, dropping socket", user_id)
                    websocket = self.connections.get(user_id)
                    await self.disconnect(user_id)
                    if websocket is not None:
                        try:
                            await websocket.close(code=1001, reason="Heartbeat timeout")
                        except RuntimeError:
                            logger.debug("Socket for %s already closed", user_id)
                    break
        except asyncio.CancelledError:
            logger.debug("Heartbeat monitor for user %s cancelled", user_id)


_settings = get_settings()
manager = ConnectionManager(timeout=_settings.ws_timeout, check_interval=_settings.ws_heartbeat_interval)
