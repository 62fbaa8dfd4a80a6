"""Repository protocol for sessions."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from skillbridge.db.models import Meeting as MeetingModel


class MeetingRepository(Protocol):
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
    ) -> MeetingModel:
        ...

    async def get_meeting(self, meeting_id: str) -> MeetingModel | None:
        ...

    async def list_scheduled_for(self, user_id: str) -> Sequence[MeetingModel]:
        ...

    async def list_for(
        self,
        user_id: str,
        *,
        status: str | None,
        limit: int,
        newest_first: bool,
    ) -> Sequence[MeetingModel]:
        ...

    async def transition(self, meeting_id: str, *, from_status: str, to_status: str) -> bool:
        ...

    async def set_rating(self, meeting_id: str, rating: int) -> bool:
        ...

    async def delete_meeting(self, meeting_id: str) -> None:
        ...
