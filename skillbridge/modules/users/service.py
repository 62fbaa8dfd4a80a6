"""Directory / profile store use cases."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.core.crypto import hash_password, verify_password
from skillbridge.modules.common.exceptions import ValidationError

from .exceptions import (
    DuplicateSkillError,
    ProfileItemNotFoundError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .models import UNSET, CertificationInput, ProfileUpdateInput, User, UserCreateInput
from .repository import UserRepository

logger = logging.getLogger(__name__)

_PROFILE_FIELDS = ("name", "bio", "location", "languages", "timezone")


class UserService:
    """Encapsulates profile reads and the user-editable parts of a profile.

    The per-skill session counts and ratings and the aggregate stats live on
    the same rows but are only written by the reputation module.
    """

    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "UserService":
        # imported late; the repository module imports this package's models
        from skillbridge.infrastructure.database.repositories.user_repository import SqlUserRepository

        return cls(SqlUserRepository(session))

    async def get_by_id(self, user_id: str) -> User | None:
        return await self._repository.get_by_id(user_id)

    async def require(self, user_id: str) -> User:
        user = await self._repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        return user

    async def list_users(self, exclude_id: str | None = None, limit: int = 100) -> Sequence[User]:
        return await self._repository.list_users(exclude_id=exclude_id, limit=limit)

    async def register(self, payload: UserCreateInput) -> User:
        name = payload.name.strip()
        email = payload.email.strip().lower()
        if not name:
            raise ValidationError("name is required")
        if not email:
            raise ValidationError("email is required")
        if await self._repository.get_by_email(email) is not None:
            raise UserAlreadyExistsError(f"Email already registered: {email}")

        user = await self._repository.create_user(
            name=name,
            email=email,
            password_hash=hash_password(payload.password),
            role=payload.role,
        )
        logger.info("Registered user %s", user.id)
        return user

    async def authenticate(self, email: str, password: str) -> User | None:
        user = await self._repository.get_by_email(email.strip().lower())
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    async def update_profile(self, user_id: str, payload: ProfileUpdateInput) -> User:
        await self.require(user_id)
        values: dict[str, Any] = {}
        for name in _PROFILE_FIELDS:
            value = getattr(payload, name)
            if value is UNSET or value is None:
                continue
            if name == "languages":
                value = [item.strip() for item in value if item and item.strip()]
            elif isinstance(value, str):
                value = value.strip()
            values[name] = value
        if "name" in values and not values["name"]:
            raise ValidationError("name cannot be empty")
        if not values:
            return await self.require(user_id)
        return await self._repository.update_profile(user_id, values)

    async def set_avatar(self, user_id: str, url: str, public_id: str = "") -> User:
        await self.require(user_id)
        return await self._repository.update_profile(
            user_id, {"avatar_url": url.strip(), "avatar_public_id": public_id.strip()}
        )

    async def clear_avatar(self, user_id: str) -> User:
        await self.require(user_id)
        return await self._repository.update_profile(user_id, {"avatar_url": "", "avatar_public_id": ""})

    async def add_teaching_skill(self, user_id: str, name: str) -> User:
        skill_name = name.strip()
        if not skill_name:
            raise ValidationError("Skill name is required")
        user = await self.require(user_id)
        if user.find_teaching_skill(skill_name) is not None:
            raise DuplicateSkillError(f"Skill already exists: {skill_name}")
        return await self._repository.add_teaching_skill(user_id, skill_name)

    async def remove_teaching_skill(self, user_id: str, skill_id: str) -> User:
        await self.require(user_id)
        if not await self._repository.remove_teaching_skill(user_id, skill_id):
            raise ProfileItemNotFoundError(f"Skill not found: {skill_id}")
        return await self.require(user_id)

    async def add_learning_goal(self, user_id: str, name: str) -> User:
        goal = name.strip()
        if not goal:
            raise ValidationError("Skill name is required")
        user = await self.require(user_id)
        if user.has_learning_goal(goal):
            raise DuplicateSkillError(f"Skill already in learning list: {goal}")
        return await self._repository.add_learning_goal(user_id, goal)

    async def remove_learning_goal(self, user_id: str, name: str) -> User:
        await self.require(user_id)
        if not await self._repository.remove_learning_goal(user_id, name.strip()):
            raise ProfileItemNotFoundError(f"Skill not in learning list: {name}")
        return await self.require(user_id)

    async def add_certification(self, user_id: str, payload: CertificationInput) -> User:
        if not payload.name or not payload.name.strip():
            raise ValidationError("Certification name is required")
        await self.require(user_id)
        payload.name = payload.name.strip()
        return await self._repository.add_certification(user_id, payload)

    async def remove_certification(self, user_id: str, certification_id: str) -> User:
        await self.require(user_id)
        if not await self._repository.remove_certification(user_id, certification_id):
            raise ProfileItemNotFoundError(f"Certification not found: {certification_id}")
        return await self.require(user_id)
