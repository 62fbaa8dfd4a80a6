"""Session lifecycle: scheduling, expiry sweep, cancellation, rating, deletion."""

from __future__ import annotations

import dataclasses
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.config import Settings, get_settings
from skillbridge.db.models import Meeting as MeetingModel, generate_uuid
from skillbridge.infrastructure.database.repositories.meeting_repository import SqlMeetingRepository
from skillbridge.modules.common.clock import as_utc, utcnow
from skillbridge.modules.common.exceptions import InvalidStateError, NotAllowedError, ValidationError
from skillbridge.modules.conversations import ConversationService
from skillbridge.modules.reputation import ReputationService
from skillbridge.modules.users import UserService
from skillbridge.modules.wallets import InsufficientCreditsError, WalletService

from .exceptions import MeetingNotFoundError
from .models import (
    SESSION_TYPES,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_SCHEDULED,
    Meeting,
    MeetingScheduleInput,
    ScheduleResult,
)
from .repository import MeetingRepository

logger = logging.getLogger(__name__)

_ROOM_NAME_INVALID = re.compile(r"[^a-zA-Z0-9\-_]")


def make_room_name(prefix: str, conversation_id: str | None, starts_at: datetime) -> str:
    timestamp = int(as_utc(starts_at).timestamp() * 1000)
    return _ROOM_NAME_INVALID.sub("", f"{prefix}-{conversation_id or 'general'}-{timestamp}")


def parse_starts_at(value: datetime | str | None) -> datetime:
    if isinstance(value, datetime):
        return as_utc(value)
    if not value or not isinstance(value, str):
        raise ValidationError("startsAt is required")
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValidationError(f"startsAt is not a valid date: {value}") from exc
    return as_utc(parsed)


@dataclass(slots=True)
class MeetingService:
    """Owns meeting records and their state machine.

    ``scheduled -> completed`` happens lazily through :meth:`sweep_expired`,
    ``scheduled -> cancelled`` through :meth:`cancel`. Terminal states are final.
    """

    repository: MeetingRepository
    users: UserService
    wallets: WalletService
    reputation: ReputationService
    conversations: ConversationService
    settings: Settings = field(default_factory=get_settings)

    @classmethod
    def with_session(cls, session: AsyncSession, settings: Settings | None = None) -> "MeetingService":
        settings = settings or get_settings()
        return cls(
            repository=SqlMeetingRepository(session),
            users=UserService.with_session(session),
            wallets=WalletService.with_session(session, settings),
            reputation=ReputationService.with_session(session),
            conversations=ConversationService.with_session(session, settings),
            settings=settings,
        )

    async def schedule(self, payload: MeetingScheduleInput) -> ScheduleResult:
        """Create a scheduled session and move the session credits for its creator.

        A teaching creator earns the per-session amount, a learning creator
        spends it. Both writes go through the caller's transaction; when the
        spend is refused the freshly inserted meeting is removed again before
        :class:`InsufficientCreditsError` propagates, so neither half survives
        alone.
        """
        title = (payload.title or "").strip()
        if not title:
            raise ValidationError("title is required")
        if payload.session_type not in SESSION_TYPES:
            raise ValidationError('sessionType must be "teaching" or "learning"')
        if not payload.participant_id:
            raise ValidationError("otherUserId is required")
        if payload.participant_id == payload.creator_id:
            raise ValidationError("cannot schedule a session with yourself")
        starts_at = parse_starts_at(payload.starts_at)
        duration = (
            self.settings.default_session_duration if payload.duration_minutes is None else payload.duration_minutes
        )
        if duration <= 0:
            raise ValidationError("duration must be a positive number of minutes")

        await self.users.require(payload.creator_id)
        partner = await self.users.require(payload.participant_id)
        if payload.conversation_id:
            conversation = await self.conversations.require_participant(payload.creator_id, payload.conversation_id)
            if not conversation.is_participant(partner.id):
                raise ValidationError("otherUserId is not part of this conversation")

        meetings_cfg = self.settings.meetings
        room_name = make_room_name(meetings_cfg.room_prefix, payload.conversation_id, starts_at)
        skill = payload.skill.strip() if payload.skill and payload.skill.strip() else None
        model = await self.repository.create_meeting(
            meeting_id=generate_uuid(),
            creator_id=payload.creator_id,
            partner_id=partner.id,
            title=title,
            starts_at=starts_at,
            duration_minutes=duration,
            session_type=payload.session_type,
            skill=skill,
            conversation_id=payload.conversation_id,
            provider=meetings_cfg.provider,
            room_name=room_name,
            join_url=f"{meetings_cfg.provider_base_url.rstrip('/')}/{room_name}",
        )

        cost = self.settings.session_cost
        try:
            if payload.session_type == "teaching":
                entry = await self.wallets.earn(
                    payload.creator_id,
                    cost,
                    f"Teaching session with {partner.name}",
                    meeting_id=model.id,
                    counterparty_id=partner.id,
                    kind="teaching",
                )
            else:
                entry = await self.wallets.spend(
                    payload.creator_id,
                    cost,
                    f"Learning session with {partner.name}",
                    meeting_id=model.id,
                    counterparty_id=partner.id,
                    kind="learning",
                )
        except InsufficientCreditsError:
            await self.repository.delete_meeting(model.id)
            raise

        meeting = self._to_domain(model)
        logger.info(
            "Scheduled %s session %s between %s and %s at %s",
            meeting.session_type,
            meeting.id,
            meeting.creator_id,
            meeting.partner_id,
            meeting.starts_at.isoformat(),
        )
        return ScheduleResult(meeting=meeting, transaction_id=entry.transaction.id, balance=entry.balance)

    async def sweep_expired(self, user_id: str, now: datetime | None = None) -> list[Meeting]:
        """Complete every scheduled session of ``user_id`` that has already ended.

        Safe to run concurrently: the transition is conditional on the row
        still being scheduled, and session counts move only for the caller
        that won it.
        """
        current = as_utc(now or utcnow())
        completed: list[Meeting] = []
        for model in await self.repository.list_scheduled_for(user_id):
            meeting = self._to_domain(model)
            if meeting.ends_at >= current:
                continue
            won = await self.repository.transition(
                meeting.id, from_status=STATUS_SCHEDULED, to_status=STATUS_COMPLETED
            )
            if not won:
                continue
            await self.reputation.increment_session_count(meeting.teacher_id, meeting.skill)
            await self.reputation.increment_learned_count(meeting.learner_id)
            completed.append(dataclasses.replace(meeting, status=STATUS_COMPLETED))

        if completed:
            logger.info("Sweep for %s completed %d session(s)", user_id, len(completed))
        return completed

    async def list_upcoming(self, user_id: str, now: datetime | None = None, limit: int = 200) -> list[Meeting]:
        await self.sweep_expired(user_id, now)
        models = await self.repository.list_for(user_id, status=STATUS_SCHEDULED, limit=limit, newest_first=False)
        return [self._to_domain(model) for model in models]

    async def list_history(self, user_id: str, status: Optional[str] = None, limit: int = 50) -> list[Meeting]:
        models = await self.repository.list_for(user_id, status=status or None, limit=limit, newest_first=True)
        return [self._to_domain(model) for model in models]

    async def get(self, user_id: str, meeting_id: str) -> Meeting:
        meeting = await self._require(meeting_id)
        if not meeting.is_participant(user_id):
            raise NotAllowedError("Not allowed")
        return meeting

    async def cancel(self, user_id: str, meeting_id: str) -> Meeting:
        """Cancel a scheduled session. Spent credits are not refunded."""
        meeting = await self._require(meeting_id)
        if not meeting.is_participant(user_id):
            raise NotAllowedError("Not allowed")
        if meeting.status != STATUS_SCHEDULED:
            raise InvalidStateError("Can only cancel scheduled meetings")
        won = await self.repository.transition(meeting_id, from_status=STATUS_SCHEDULED, to_status=STATUS_CANCELLED)
        if not won:
            raise InvalidStateError("Can only cancel scheduled meetings")
        logger.info("Session %s cancelled by %s", meeting_id, user_id)
        return dataclasses.replace(meeting, status=STATUS_CANCELLED)

    async def rate(self, user_id: str, meeting_id: str, rating: int) -> Meeting:
        bounds = self.settings.ratings
        if isinstance(rating, bool) or not isinstance(rating, int) or not bounds.min_rating <= rating <= bounds.max_rating:
            raise ValidationError(f"Rating must be between {bounds.min_rating} and {bounds.max_rating}")

        meeting = await self._require(meeting_id)
        if not meeting.is_participant(user_id):
            raise NotAllowedError("Not allowed")
        if meeting.status != STATUS_COMPLETED:
            raise InvalidStateError("Can only rate completed meetings")
        if meeting.rating is not None:
            raise InvalidStateError("Meeting already rated")
        if user_id != meeting.learner_id:
            raise NotAllowedError("Only the learner can rate the session")

        if not await self.repository.set_rating(meeting_id, rating):
            raise InvalidStateError("Meeting already rated")
        await self.reputation.apply_session_rating(meeting.teacher_id, meeting.skill, rating)
        logger.info("Session %s rated %s by %s", meeting_id, rating, user_id)
        return dataclasses.replace(meeting, rating=rating)

    async def delete(self, user_id: str, meeting_id: str) -> None:
        """Hard-delete a session. Only its creator may do this, whatever its status."""
        meeting = await self._require(meeting_id)
        if meeting.creator_id != user_id:
            raise NotAllowedError("Only the creator can delete the meeting")
        await self.repository.delete_meeting(meeting_id)
        logger.info("Session %s deleted by %s (status was %s)", meeting_id, user_id, meeting.status)

    async def _require(self, meeting_id: str) -> Meeting:
        model = await self.repository.get_meeting(meeting_id)
        if model is None:
            raise MeetingNotFoundError("Meeting not found")
        return self._to_domain(model)

    @staticmethod
    def _to_domain(model: MeetingModel) -> Meeting:
        return Meeting(
            id=model.id,
            creator_id=model.creator_id,
            partner_id=model.partner_id,
            title=model.title,
            starts_at=as_utc(model.starts_at),
            duration_minutes=model.duration_minutes,
            session_type=model.session_type,
            status=model.status,
            room_name=model.room_name,
            join_url=model.join_url,
            provider=model.provider,
            skill=model.skill,
            rating=model.rating,
            conversation_id=model.conversation_id,
            created_at=model.created_at,
        )
