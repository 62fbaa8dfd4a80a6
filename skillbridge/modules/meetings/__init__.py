"""Session lifecycle manager."""

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
from .service import MeetingService, make_room_name, parse_starts_at

__all__ = [
    "SESSION_TYPES",
    "STATUS_CANCELLED",
    "STATUS_COMPLETED",
    "STATUS_SCHEDULED",
    "Meeting",
    "MeetingNotFoundError",
    "MeetingScheduleInput",
    "MeetingService",
    "ScheduleResult",
    "make_room_name",
    "parse_starts_at",
]
