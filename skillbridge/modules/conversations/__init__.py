"""1:1 chat between users."""

from .exceptions import ConversationNotFoundError
from .models import ChatMessage, ChatParticipant, Conversation, MessagePage
from .service import ConversationService

__all__ = [
    "ChatMessage",
    "ChatParticipant",
    "Conversation",
    "ConversationNotFoundError",
    "ConversationService",
    "MessagePage",
]
