"""SQLAlchemy implementation for sessions."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import asc, delete, desc, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.db.models import CreditTransaction, Feedback, Meeting


def _involving(user_id: str):
    return or_(Meeting.creator_id == user_id, Meeting.partner_id == user_id)


class SqlMeetingRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_meeting(
        self,
        *,
        meeting_id: str,
        creator_id: str,
        partner_id: str,
        title: str,
        starts_at: datetime,
        duration_minutes: int,
        session_type: str,
        skill: str | None,
        conversation_id: str | None,
        provider: str,
        room_name: str,
        join_url: str,
    ) -> Meeting:
        meeting = Meeting(
            id=meeting_id,
            creator_id=creator_id,
            partner_id=partner_id,
            title=title,
            starts_at=starts_at,
            duration_minutes=duration_minutes,
            session_type=session_type,
            skill=skill,
            conversation_id=conversation_id,
            provider=provider,
            room_name=room_name,
            join_url=join_url,
            status="scheduled",
        )
        self.session.add(meeting)
        await self.session.flush()
        return meeting

    async def get_meeting(self, meeting_id: str) -> Meeting | None:
        stmt = select(Meeting).where(Meeting.id == meeting_id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_scheduled_for(self, user_id: str) -> Sequence[Meeting]:
        stmt = (
            select(Meeting)
            .where(_involving(user_id), Meeting.status == "scheduled")
            .order_by(asc(Meeting.starts_at))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_for(
        self,
        user_id: str,
        *,
        status: str | None,
        limit: int,
        newest_first: bool,
    ) -> Sequence[Meeting]:
        stmt = select(Meeting).where(_involving(user_id))
        if status and status != "all":
            stmt = stmt.where(Meeting.status == status)
        order = desc(Meeting.starts_at) if newest_first else asc(Meeting.starts_at)
        stmt = stmt.order_by(order).limit(limit).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def transition(self, meeting_id: str, *, from_status: str, to_status: str) -> bool:
        """Move a session between states only if it is still in ``from_status``."""
        stmt = (
            update(Meeting)
            .where(Meeting.id == meeting_id, Meeting.status == from_status)
            .values(status=to_status)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def set_rating(self, meeting_id: str, rating: int) -> bool:
        stmt = (
            update(Meeting)
            .where(Meeting.id == meeting_id, Meeting.status == "completed", Meeting.rating.is_(None))
            .values(rating=rating)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete_meeting(self, meeting_id: str) -> None:
        # ledger entries and feedback outlive the session; only their reference is cleared
        for model in (CreditTransaction, Feedback):
            await self.session.execute(
                update(model)
                .where(model.meeting_id == meeting_id)
                .values(meeting_id=None)
                .execution_options(synchronize_session=False)
            )
        await self.session.execute(
            delete(Meeting).where(Meeting.id == meeting_id).execution_options(synchronize_session=False)
        )
