"""SQLAlchemy implementation for chat conversations and messages."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import desc, func, insert, or_, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.db.models import ChatMessage, Conversation, generate_uuid, utcnow


class SqlConversationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, conversation_id: str) -> Conversation | None:
        stmt = (
            select(Conversation)
            .where(Conversation.id == conversation_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_pair(self, user_a_id: str, user_b_id: str) -> Conversation | None:
        stmt = select(Conversation).where(
            Conversation.user_a_id == user_a_id,
            Conversation.user_b_id == user_b_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_or_create_pair(self, user_a_id: str, user_b_id: str) -> tuple[Conversation, bool]:
        """Insert the conversation for an ordered pair unless it already exists.

        Returns the conversation and whether this call created it.
        """
        values = {"id": generate_uuid(), "user_a_id": user_a_id, "user_b_id": user_b_id}
        pair = [Conversation.user_a_id, Conversation.user_b_id]
        dialect = self.session.bind.dialect.name if self.session.bind is not None else ""
        if dialect == "sqlite":
            stmt = sqlite.insert(Conversation).values(**values).on_conflict_do_nothing(index_elements=pair)
        elif dialect == "postgresql":
            stmt = postgresql.insert(Conversation).values(**values).on_conflict_do_nothing(index_elements=pair)
        else:
            existing = await self.find_pair(user_a_id, user_b_id)
            if existing is not None:
                return existing, False
            stmt = insert(Conversation).values(**values)
        result = await self.session.execute(stmt.returning(Conversation.id))
        created = result.scalar_one_or_none() is not None

        conversation = await self.find_pair(user_a_id, user_b_id)
        if conversation is None:
            raise RuntimeError(f"conversation for {user_a_id}/{user_b_id} could not be created")
        return conversation, created

    async def list_for(self, user_id: str) -> Sequence[Conversation]:
        stmt = (
            select(Conversation)
            .where(or_(Conversation.user_a_id == user_id, Conversation.user_b_id == user_id))
            .order_by(desc(Conversation.updated_at), Conversation.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def last_messages(self, conversation_ids: Sequence[str]) -> dict[str, ChatMessage]:
        if not conversation_ids:
            return {}
        latest = (
            select(func.max(ChatMessage.id))
            .where(ChatMessage.conversation_id.in_(conversation_ids))
            .group_by(ChatMessage.conversation_id)
        )
        stmt = select(ChatMessage).where(ChatMessage.id.in_(latest)).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return {message.conversation_id: message for message in result.scalars().all()}

    async def unread_counts(self, user_id: str, conversation_ids: Sequence[str]) -> dict[str, int]:
        if not conversation_ids:
            return {}
        stmt = (
            select(ChatMessage.conversation_id, func.count(ChatMessage.id))
            .where(
                ChatMessage.conversation_id.in_(conversation_ids),
                ChatMessage.sender_id != user_id,
                ChatMessage.read_at.is_(None),
            )
            .group_by(ChatMessage.conversation_id)
        )
        result = await self.session.execute(stmt)
        return {conversation_id: count for conversation_id, count in result.all()}

    async def list_messages(
        self,
        conversation_id: str,
        limit: int,
        before_id: int | None = None,
    ) -> tuple[Sequence[ChatMessage], bool]:
        """Newest ``limit`` messages older than ``before_id``, returned oldest first."""
        stmt = select(ChatMessage).where(ChatMessage.conversation_id == conversation_id)
        if before_id is not None:
            stmt = stmt.where(ChatMessage.id < before_id)
        stmt = stmt.order_by(desc(ChatMessage.id)).limit(limit + 1).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        rows = list(result.scalars().all())
        has_more = len(rows) > limit
        return list(reversed(rows[:limit])), has_more

    async def add_message(self, conversation_id: str, sender_id: str, text: str) -> ChatMessage:
        message = ChatMessage(conversation_id=conversation_id, sender_id=sender_id, text=text)
        self.session.add(message)
        await self.session.flush()
        stmt = (
            update(Conversation)
            .where(Conversation.id == conversation_id)
            .values(updated_at=message.created_at or utcnow())
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        return message

    async def mark_read(self, conversation_id: str, reader_id: str, read_at: datetime) -> int:
        stmt = (
            update(ChatMessage)
            .where(
                ChatMessage.conversation_id == conversation_id,
                ChatMessage.sender_id != reader_id,
                ChatMessage.read_at.is_(None),
            )
            .values(read_at=read_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
