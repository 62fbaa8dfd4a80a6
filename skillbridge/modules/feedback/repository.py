"""Repository protocol for feedback."""

from __future__ import annotations

from typing import Protocol, Sequence

from skillbridge.db.models import Feedback as FeedbackModel


class FeedbackRepository(Protocol):
    async def find(self, from_user_id: str, to_user_id: str, meeting_id: str) -> FeedbackModel | None:
        ...

    async def create(
        self,
        *,
        from_user_id: str,
        to_user_id: str,
        meeting_id: str | None,
        skill: str,
        rating: int,
        comment: str,
    ) -> FeedbackModel:
        ...

    async def list_received(self, user_id: str, limit: int) -> Sequence[FeedbackModel]:
        ...

    async def list_given(self, user_id: str, limit: int) -> Sequence[FeedbackModel]:
        ...

    async def meeting_ids_given_by(self, user_id: str) -> set[str]:
        ...
