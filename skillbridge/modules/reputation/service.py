"""Reputation aggregation over teaching skills and received feedback."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.infrastructure.database.repositories.reputation_repository import SqlReputationRepository

from .repository import ReputationRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReputationService:
    """Keeps the derived statistics on a profile in step with the facts behind them.

    Each operation is a read-modify-write on one profile. The repository
    performs every one as a single UPDATE computed from the stored columns,
    so concurrent calls for the same user are serialized by the database's
    row locks instead of racing in Python. Averages are stored unrounded and
    rounded to one decimal place when read.
    """

    repository: ReputationRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "ReputationService":
        return cls(SqlReputationRepository(session))

    async def recompute_for_feedback(self, rated_user_id: str) -> None:
        await self.repository.recompute_feedback_stats(rated_user_id)
        logger.debug("Recomputed feedback stats for %s", rated_user_id)

    async def apply_session_rating(self, teacher_id: str, skill_name: str | None, rating: int) -> bool:
        """Fold ``rating`` into the teacher's running average for ``skill_name``.

        The skill's session count must already include the rated session.
        Returns ``False`` when the teacher no longer lists the skill.
        """
        if not skill_name or not skill_name.strip():
            return False
        matched = await self.repository.fold_skill_rating(teacher_id, skill_name.strip(), rating)
        if not matched:
            logger.info("Teacher %s has no skill %r; rating %s not folded", teacher_id, skill_name, rating)
            return False
        await self.repository.recompute_overall_from_skills(teacher_id)
        return True

    async def increment_session_count(self, teacher_id: str, skill_name: str | None) -> None:
        if skill_name and skill_name.strip():
            await self.repository.increment_skill_sessions(teacher_id, skill_name.strip())
        await self.repository.increment_sessions_taught(teacher_id)

    async def increment_learned_count(self, learner_id: str) -> None:
        await self.repository.increment_sessions_learned(learner_id)
