"""Notification push channel."""
import json
import logging

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect

from skillbridge.core.security import decode_access_token
from skillbridge.interfaces.ws.manager import manager

logger = logging.getLogger(__name__)

router = APIRouter()

MESSAGE_HEARTBEAT = "heartbeat"
MESSAGE_HEARTBEAT_ACK = "heartbeat_ack"


@router.websocket("/ws")
async def notification_socket(websocket: WebSocket, token: str = Query(...)):
    try:
        user_id = decode_access_token(token).user_id
    except HTTPException as exc:
        logger.warning("WebSocket token rejected: %s", exc.detail)
        await websocket.close(code=1008, reason="Invalid token")
        return

    await manager.connect(user_id, websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            manager.update_heartbeat(user_id)
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("Ignoring non-JSON frame from %s", user_id)
                continue
            if isinstance(message, dict) and message.get("type") == MESSAGE_HEARTBEAT:
                await websocket.send_text(json.dumps({"type": MESSAGE_HEARTBEAT_ACK}))
    except WebSocketDisconnect:
        logger.info("User %s closed the notification socket", user_id)
    finally:
        await manager.disconnect(user_id, websocket)
