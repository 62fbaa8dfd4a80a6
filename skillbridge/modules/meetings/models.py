"""Domain models for scheduled sessions (meetings)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from skillbridge.modules.common.clock import as_utc

SESSION_TYPES = frozenset({"teaching", "learning"})

STATUS_SCHEDULED = "scheduled"
STATUS_COMPLETED = "completed"
STATUS_CANCELLED = "cancelled"


@dataclass(slots=True)
class Meeting:
    id: str
    creator_id: str
    partner_id: str
    title: str
    starts_at: datetime
    duration_minutes: int
    session_type: str
    status: str
    room_name: str
    join_url: str
    provider: str = "jitsi"
    skill: Optional[str] = None
    rating: Optional[int] = None
    conversation_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def participants(self) -> tuple[str, str]:
        return (self.creator_id, self.partner_id)

    @property
    def learner_id(self) -> str:
        """The participant who learns: the partner when the creator teaches, else the creator."""
        return self.partner_id if self.session_type == "teaching" else self.creator_id

    @property
    def teacher_id(self) -> str:
        return self.creator_id if self.session_type == "teaching" else self.partner_id

    @property
    def ends_at(self) -> datetime:
        return as_utc(self.starts_at) + timedelta(minutes=self.duration_minutes)

    def is_participant(self, user_id: str) -> bool:
        return user_id in self.participants

    def other_participant(self, user_id: str) -> str:
        return self.partner_id if user_id == self.creator_id else self.creator_id


@dataclass(slots=True)
class MeetingScheduleInput:
    creator_id: str
    participant_id: str
    title: str
    starts_at: datetime | str
    session_type: str
    duration_minutes: Optional[int] = None
    skill: Optional[str] = None
    conversation_id: Optional[str] = None


@dataclass(slots=True)
class ScheduleResult:
    meeting: Meeting
    transaction_id: int
    balance: int
