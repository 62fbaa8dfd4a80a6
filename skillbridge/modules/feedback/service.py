"""Feedback submission and listing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.config import Settings, get_settings
from skillbridge.db.models import Feedback as FeedbackModel
from skillbridge.infrastructure.database.repositories.feedback_repository import SqlFeedbackRepository
from skillbridge.modules.common.clock import as_utc, utcnow
from skillbridge.modules.common.exceptions import ValidationError
from skillbridge.modules.meetings import STATUS_COMPLETED, MeetingService
from skillbridge.modules.reputation import ReputationService
from skillbridge.modules.users import UserService

from .exceptions import DuplicateFeedbackError
from .models import FeedbackInput, FeedbackRecord, PendingFeedback
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)

FEEDBACK_LIST_LIMIT = 100


@dataclass(slots=True)
class FeedbackService:
    repository: FeedbackRepository
    users: UserService
    meetings: MeetingService
    reputation: ReputationService
    settings: Settings = field(default_factory=get_settings)

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings | None = None) -> "FeedbackService":
        settings = settings or get_settings()
        return cls(
            repository=SqlFeedbackRepository(session),
            users=UserService.with_session(session),
            meetings=MeetingService.with_session(session, settings),
            reputation=ReputationService.with_session(session),
            settings=settings,
        )

    async def submit(self, payload: FeedbackInput) -> FeedbackRecord:
        """Record one rating of ``ratee`` by ``rater`` and refresh the ratee's stats."""
        if not payload.ratee_id:
            raise ValidationError("toUserId is required")
        skill = (payload.skill or "").strip()
        if not skill:
            raise ValidationError("skill is required")
        bounds = self.settings.ratings
        rating = payload.rating
        if isinstance(rating, bool) or not isinstance(rating, int) or not bounds.min_rating <= rating <= bounds.max_rating:
            raise ValidationError(f"rating must be between {bounds.min_rating} and {bounds.max_rating}")

        await self.users.require(payload.ratee_id)

        if payload.meeting_id:
            meeting = await self.meetings.get(payload.rater_id, payload.meeting_id)
            if not meeting.is_participant(payload.ratee_id):
                raise ValidationError("User is not a participant in this meeting")
            existing = await self.repository.find(payload.rater_id, payload.ratee_id, payload.meeting_id)
            if existing is not None:
                raise DuplicateFeedbackError("Feedback already submitted for this meeting")

        try:
            model = await self.repository.create(
                from_user_id=payload.rater_id,
                to_user_id=payload.ratee_id,
                meeting_id=payload.meeting_id or None,
                skill=skill,
                rating=rating,
                comment=(payload.comment or "").strip(),
            )
        except IntegrityError as exc:
            raise DuplicateFeedbackError("Feedback already submitted for this meeting") from exc

        await self.reputation.recompute_for_feedback(payload.ratee_id)
        logger.info("Feedback %s from %s to %s (rating=%s)", model.id, payload.rater_id, payload.ratee_id, rating)
        return self._to_domain(model)

    async def list_received(self, user_id: str) -> list[FeedbackRecord]:
        rows = await self.repository.list_received(user_id, FEEDBACK_LIST_LIMIT)
        return [self._to_domain(row) for row in rows]

    async def list_given(self, user_id: str) -> list[FeedbackRecord]:
        rows = await self.repository.list_given(user_id, FEEDBACK_LIST_LIMIT)
        return [self._to_domain(row) for row in rows]

    async def list_pending(self, user_id: str, now: datetime | None = None) -> list[PendingFeedback]:
        """Completed sessions of ``user_id`` that they have not left feedback for yet."""
        await self.meetings.sweep_expired(user_id, now)
        current = as_utc(now or utcnow())
        rated = await self.repository.meeting_ids_given_by(user_id)
        history = await self.meetings.list_history(user_id, status=STATUS_COMPLETED)
        return [
            PendingFeedback(
                meeting_id=meeting.id,
                other_user_id=meeting.other_participant(user_id),
                title=meeting.title,
                skill=meeting.skill,
                starts_at=meeting.starts_at,
            )
            for meeting in history
            if meeting.id not in rated and meeting.starts_at < current
        ]

    @staticmethod
    def _to_domain(model: FeedbackModel) -> FeedbackRecord:
        return FeedbackRecord(
            id=model.id,
            from_user_id=model.from_user_id,
            to_user_id=model.to_user_id,
            skill=model.skill,
            rating=model.rating,
            comment=model.comment or "",
            meeting_id=model.meeting_id,
            created_at=model.created_at,
        )
