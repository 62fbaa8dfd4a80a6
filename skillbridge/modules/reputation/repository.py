"""Repository protocol for derived profile statistics."""

from __future__ import annotations

from typing import Protocol


class ReputationRepository(Protocol):
    async def recompute_feedback_stats(self, user_id: str) -> None:
        ...

    async def fold_skill_rating(self, teacher_id: str, skill_name: str, rating: int) -> bool:
        ...

    async def recompute_overall_from_skills(self, user_id: str) -> None:
        ...

    async def increment_skill_sessions(self, teacher_id: str, skill_name: str) -> bool:
        ...

    async def increment_sessions_taught(self, teacher_id: str) -> None:
        ...

    async def increment_sessions_learned(self, learner_id: str) -> None:
        ...
