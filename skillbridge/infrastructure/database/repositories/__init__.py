"""SQLAlchemy-backed repository implementations."""

from .conversation_repository import SqlConversationRepository
from .feedback_repository import SqlFeedbackRepository
from .meeting_repository import SqlMeetingRepository
from .reputation_repository import SqlReputationRepository
from .user_repository import SqlUserRepository
from .wallet_repository import SqlWalletRepository

__all__ = [
    "SqlConversationRepository",
    "SqlFeedbackRepository",
    "SqlMeetingRepository",
    "SqlReputationRepository",
    "SqlUserRepository",
    "SqlWalletRepository",
]
