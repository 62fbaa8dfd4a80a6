"""Repository protocol for user profiles."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import CertificationInput, User


class UserRepository(Protocol):
    """Abstract repository interface for profile persistence."""

    async def get_by_id(self, user_id: str) -> User | None:
        ...

    async def get_by_email(self, email: str) -> User | None:
        ...

    async def list_users(self, exclude_id: str | None = None, limit: int = 100) -> Sequence[User]:
        ...

    async def create_user(self, *, name: str, email: str, password_hash: str, role: str) -> User:
        ...

    async def update_profile(self, user_id: str, values: dict[str, Any]) -> User:
        ...

    async def add_teaching_skill(self, user_id: str, name: str) -> User:
        ...

    async def remove_teaching_skill(self, user_id: str, skill_id: str) -> bool:
        ...

    async def add_learning_goal(self, user_id: str, name: str) -> User:
        ...

    async def remove_learning_goal(self, user_id: str, name: str) -> bool:
        ...

    async def add_certification(self, user_id: str, payload: CertificationInput) -> User:
        ...

    async def remove_certification(self, user_id: str, certification_id: str) -> bool:
        ...
