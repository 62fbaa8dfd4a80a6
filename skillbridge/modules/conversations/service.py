"""1:1 conversations: open, list, page through messages, mark read, send."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.config import Settings, get_settings
from skillbridge.db.models import ChatMessage as ChatMessageModel, Conversation as ConversationModel
from skillbridge.infrastructure.database.repositories.conversation_repository import SqlConversationRepository
from skillbridge.modules.common.clock import as_utc, utcnow
from skillbridge.modules.common.exceptions import NotAllowedError, ValidationError
from skillbridge.modules.users import UserService

from .exceptions import ConversationNotFoundError
from .models import ChatMessage, ChatParticipant, Conversation, MessagePage
from .repository import ConversationRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConversationService:
    """Chat threads between exactly two users.

    A pair of users shares one conversation whichever of them opens it.
    Only the two participants may read or write it.
    """

    repository: ConversationRepository
    users: UserService
    settings: Settings = field(default_factory=get_settings)

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings | None = None) -> "ConversationService":
        return cls(
            repository=SqlConversationRepository(session),
            users=UserService.with_session(session),
            settings=settings or get_settings(),
        )

    async def open(self, user_id: str, other_user_id: str) -> Conversation:
        """Return the conversation between the two users, creating it on first contact."""
        if not other_user_id:
            raise ValidationError("otherUserId is required")
        if other_user_id == user_id:
            raise ValidationError("cannot start a conversation with yourself")
        other = await self.users.require(other_user_id)

        first, second = sorted((user_id, other.id))
        model, created = await self.repository.get_or_create_pair(first, second)
        if created:
            logger.info("Conversation %s opened between %s and %s", model.id, user_id, other.id)
        return (await self._summarize(user_id, [model]))[0]

    async def list_for(self, user_id: str) -> list[Conversation]:
        """Conversations of ``user_id``, most recently active first, with unread counts."""
        models = await self.repository.list_for(user_id)
        return await self._summarize(user_id, models)

    async def require_participant(self, user_id: str, conversation_id: str) -> Conversation:
        model = await self.repository.get(conversation_id)
        if model is None:
            raise ConversationNotFoundError("Conversation not found")
        conversation = self._to_domain(model)
        if not conversation.is_participant(user_id):
            raise NotAllowedError("Not allowed")
        return conversation

    async def list_messages(
        self,
        user_id: str,
        conversation_id: str,
        limit: Optional[int] = None,
        before_id: Optional[int] = None,
    ) -> MessagePage:
        conversation = await self.require_participant(user_id, conversation_id)
        cfg = self.settings.chat
        page_size = cfg.default_page_size if limit is None else limit
        if page_size <= 0:
            raise ValidationError("limit must be positive")
        page_size = min(page_size, cfg.max_page_size)

        rows, has_more = await self.repository.list_messages(conversation.id, page_size, before_id)
        return MessagePage(
            messages=[self._message_to_domain(row, conversation) for row in rows],
            has_more=has_more,
        )

    async def mark_read(self, user_id: str, conversation_id: str) -> int:
        """Mark every message the other participant sent as read. Returns how many changed."""
        conversation = await self.require_participant(user_id, conversation_id)
        updated = await self.repository.mark_read(conversation.id, user_id, utcnow())
        if updated:
            logger.debug("%s read %d message(s) in %s", user_id, updated, conversation.id)
        return updated

    async def send(self, user_id: str, conversation_id: str, text: str) -> ChatMessage:
        body = (text or "").strip()
        if not body:
            raise ValidationError("text is required")
        max_length = self.settings.chat.max_message_length
        if len(body) > max_length:
            raise ValidationError(f"text must be at most {max_length} characters")

        conversation = await self.require_participant(user_id, conversation_id)
        model = await self.repository.add_message(conversation.id, user_id, body)
        logger.info("Message %s sent by %s in %s", model.id, user_id, conversation.id)
        return self._message_to_domain(model, conversation)

    async def _summarize(self, user_id: str, models) -> list[Conversation]:
        ids = [model.id for model in models]
        last_messages = await self.repository.last_messages(ids)
        unread = await self.repository.unread_counts(user_id, ids)

        conversations = []
        for model in models:
            conversation = self._to_domain(model)
            other = await self.users.get_by_id(conversation.other_participant(user_id))
            if other is not None:
                conversation.other_user = ChatParticipant(id=other.id, name=other.name, avatar_url=other.avatar_url)
            last = last_messages.get(model.id)
            if last is not None:
                conversation.last_message = self._message_to_domain(last, conversation)
            conversation.unread_count = unread.get(model.id, 0)
            conversations.append(conversation)
        return conversations

    @staticmethod
    def _to_domain(model: ConversationModel) -> Conversation:
        return Conversation(
            id=model.id,
            participants=(model.user_a_id, model.user_b_id),
            updated_at=as_utc(model.updated_at) if model.updated_at is not None else None,
        )

    @staticmethod
    def _message_to_domain(model: ChatMessageModel, conversation: Conversation) -> ChatMessage:
        return ChatMessage(
            id=model.id,
            conversation_id=model.conversation_id,
            sender_id=model.sender_id,
            recipient_id=conversation.other_participant(model.sender_id),
            text=model.text,
            read=model.read_at is not None,
            created_at=model.created_at,
        )
