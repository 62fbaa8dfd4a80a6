"""Domain models for user profiles."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class TeachingSkill:
    id: str
    name: str
    sessions: int = 0
    rating: float = 0.0


@dataclass(slots=True)
class Certification:
    id: str
    name: str
    issuer: Optional[str] = None
    year: Optional[str] = None
    file_url: Optional[str] = None
    file_public_id: Optional[str] = None
    file_name: Optional[str] = None
    file_mime_type: Optional[str] = None


@dataclass(slots=True)
class UserStats:
    sessions_taught: int = 0
    sessions_learned: int = 0
    avg_rating: float = 0.0


@dataclass(slots=True)
class User:
    id: str
    name: str
    email: str
    role: str
    password_hash: Optional[str] = field(default=None, repr=False)
    bio: str = ""
    location: str = ""
    languages: list[str] = field(default_factory=list)
    timezone: str = ""
    avatar_url: str = ""
    avatar_public_id: str = ""
    skills_teaching: list[TeachingSkill] = field(default_factory=list)
    skills_learning: list[str] = field(default_factory=list)
    certifications: list[Certification] = field(default_factory=list)
    stats: UserStats = field(default_factory=UserStats)
    created_at: Optional[datetime] = None

    def find_teaching_skill(self, name: str) -> TeachingSkill | None:
        wanted = name.strip().lower()
        for skill in self.skills_teaching:
            if skill.name.strip().lower() == wanted:
                return skill
        return None

    def has_learning_goal(self, name: str) -> bool:
        wanted = name.strip().lower()
        return any(goal.strip().lower() == wanted for goal in self.skills_learning)


@dataclass(slots=True)
class UserCreateInput:
    name: str
    email: str
    password: str
    role: str = "user"


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class ProfileUpdateInput:
    """Mutable profile fields. Derived statistics are deliberately absent."""

    name: Optional[str] | object = UNSET
    bio: Optional[str] | object = UNSET
    location: Optional[str] | object = UNSET
    languages: Optional[list[str]] | object = UNSET
    timezone: Optional[str] | object = UNSET


@dataclass(slots=True)
class CertificationInput:
    name: str
    issuer: Optional[str] = None
    year: Optional[str] = None
    file_url: Optional[str] = None
    file_public_id: Optional[str] = None
    file_name: Optional[str] = None
    file_mime_type: Optional[str] = None
