"""SQLAlchemy implementation for feedback."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.db.models import Feedback


class SqlFeedbackRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find(self, from_user_id: str, to_user_id: str, meeting_id: str) -> Feedback | None:
        stmt = select(Feedback).where(
            Feedback.from_user_id == from_user_id,
            Feedback.to_user_id == to_user_id,
            Feedback.meeting_id == meeting_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create(
        self,
        *,
        from_user_id: str,
        to_user_id: str,
        meeting_id: str | None,
        skill: str,
        rating: int,
        comment: str,
    ) -> Feedback:
        feedback = Feedback(
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            meeting_id=meeting_id,
            skill=skill,
            rating=rating,
            comment=comment,
        )
        self.session.add(feedback)
        await self.session.flush()
        return feedback

    async def list_received(self, user_id: str, limit: int) -> Sequence[Feedback]:
        stmt = (
            select(Feedback)
            .where(Feedback.to_user_id == user_id)
            .order_by(desc(Feedback.created_at))
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_given(self, user_id: str, limit: int) -> Sequence[Feedback]:
        stmt = (
            select(Feedback)
            .where(Feedback.from_user_id == user_id)
            .order_by(desc(Feedback.created_at))
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def meeting_ids_given_by(self, user_id: str) -> set[str]:
        stmt = select(Feedback.meeting_id).where(
            Feedback.from_user_id == user_id,
            Feedback.meeting_id.is_not(None),
        )
        result = await self.session.execute(stmt)
        return set(result.scalars().all())
