"""Repository protocol for conversations."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from skillbridge.db.models import ChatMessage as ChatMessageModel, Conversation as ConversationModel


class ConversationRepository(Protocol):
    async def get(self, conversation_id: str) -> ConversationModel | None:
        ...

    async def get_or_create_pair(self, user_a_id: str, user_b_id: str) -> tuple[ConversationModel, bool]:
        ...

    async def list_for(self, user_id: str) -> Sequence[ConversationModel]:
        ...

    async def last_messages(self, conversation_ids: Sequence[str]) -> dict[str, ChatMessageModel]:
        ...

    async def unread_counts(self, user_id: str, conversation_ids: Sequence[str]) -> dict[str, int]:
        ...

    async def list_messages(
        self,
        conversation_id: str,
        limit: int,
        before_id: int | None = None,
    ) -> tuple[Sequence[ChatMessageModel], bool]:
        ...

    async def add_message(self, conversation_id: str, sender_id: str, text: str) -> ChatMessageModel:
        ...

    async def mark_read(self, conversation_id: str, reader_id: str, read_at: datetime) -> int:
        ...
