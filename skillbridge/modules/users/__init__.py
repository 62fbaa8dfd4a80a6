"""User directory and profile store."""

from .exceptions import DuplicateSkillError, ProfileItemNotFoundError, UserAlreadyExistsError, UserNotFoundError
from .models import (
    UNSET,
    Certification,
    CertificationInput,
    ProfileUpdateInput,
    TeachingSkill,
    User,
    UserCreateInput,
    UserStats,
)
from .service import UserService

__all__ = [
    "UNSET",
    "Certification",
    "CertificationInput",
    "DuplicateSkillError",
    "ProfileItemNotFoundError",
    "ProfileUpdateInput",
    "TeachingSkill",
    "User",
    "UserAlreadyExistsError",
    "UserCreateInput",
    "UserNotFoundError",
    "UserService",
    "UserStats",
]
