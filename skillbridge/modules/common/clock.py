"""Timezone helpers; everything is stored and compared in UTC."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes for values that were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_month(now: datetime | None = None) -> datetime:
    current = as_utc(now or utcnow())
    return current.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
