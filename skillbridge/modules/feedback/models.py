"""Domain models for feedback."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class FeedbackRecord:
    id: str
    from_user_id: str
    to_user_id: str
    skill: str
    rating: int
    comment: str
    meeting_id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(slots=True)
class FeedbackInput:
    rater_id: str
    ratee_id: str
    skill: str
    rating: int
    comment: Optional[str] = None
    meeting_id: Optional[str] = None


@dataclass(slots=True)
class PendingFeedback:
    meeting_id: str
    other_user_id: str
    title: str
    skill: Optional[str]
    starts_at: datetime
