"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .services import (
    get_conversation_service,
    get_feedback_service,
    get_meeting_service,
    get_notification_service,
    get_user_service,
    get_wallet_service,
)

__all__ = [
    "get_conversation_service",
    "get_db_session",
    "get_feedback_service",
    "get_meeting_service",
    "get_notification_service",
    "get_user_service",
    "get_wallet_service",
]
