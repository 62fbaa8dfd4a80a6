"""Service providers bound to the request's database session."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.interfaces.ws.manager import manager
from skillbridge.modules.conversations import ConversationService
from skillbridge.modules.feedback import FeedbackService
from skillbridge.modules.meetings import MeetingService
from skillbridge.modules.notifications import NotificationService
from skillbridge.modules.users import UserService
from skillbridge.modules.wallets import WalletService

from .database import get_db_session


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService.with_session(db)


def get_wallet_service(db: AsyncSession = Depends(get_db_session)) -> WalletService:
    return WalletService.with_session(db)


def get_meeting_service(db: AsyncSession = Depends(get_db_session)) -> MeetingService:
    return MeetingService.with_session(db)


def get_conversation_service(db: AsyncSession = Depends(get_db_session)) -> ConversationService:
    return ConversationService.with_session(db)


def get_feedback_service(db: AsyncSession = Depends(get_db_session)) -> FeedbackService:
    return FeedbackService.with_session(db)


def get_notification_service() -> NotificationService:
    return NotificationService(manager)


__all__ = [
    "get_conversation_service",
    "get_feedback_service",
    "get_meeting_service",
    "get_notification_service",
    "get_user_service",
    "get_wallet_service",
]
