"""SQLAlchemy implementation for derived profile statistics.

Every method is a single UPDATE whose new values are computed by the
database from the stored columns, so each recompute is atomic. Skill names
are matched in Python with the same case folding the profile store uses,
then the row is updated by id.
"""

from __future__ import annotations

from sqlalchemy import Float, case, cast, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from skillbridge.db.models import Feedback, TeachingSkill, User


class SqlReputationRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _find_skill_id(self, teacher_id: str, skill_name: str) -> str | None:
        wanted = skill_name.strip().lower()
        stmt = select(TeachingSkill.id, TeachingSkill.name).where(TeachingSkill.user_id == teacher_id)
        result = await self.session.execute(stmt)
        for skill_id, name in result.all():
            if name.strip().lower() == wanted:
                return skill_id
        return None

    async def recompute_feedback_stats(self, user_id: str) -> None:
        avg_rating = (
            select(func.avg(Feedback.rating))
            .where(Feedback.to_user_id == user_id)
            .scalar_subquery()
        )
        sessions = (
            select(func.count(func.distinct(Feedback.meeting_id)))
            .where(Feedback.to_user_id == user_id, Feedback.meeting_id.is_not(None))
            .scalar_subquery()
        )
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(avg_rating=func.coalesce(avg_rating, 0.0), sessions_taught=sessions)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def fold_skill_rating(self, teacher_id: str, skill_name: str, rating: int) -> bool:
        skill_id = await self._find_skill_id(teacher_id, skill_name)
        if skill_id is None:
            return False
        # a skill added after its sessions completed has a count of 0; treat it as 1
        count = case((TeachingSkill.sessions > 0, TeachingSkill.sessions), else_=1)
        new_rating = (cast(TeachingSkill.rating, Float) * (count - 1) + rating) / count
        stmt = (
            update(TeachingSkill)
            .where(TeachingSkill.id == skill_id)
            .values(rating=new_rating)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def recompute_overall_from_skills(self, user_id: str) -> None:
        avg_rating = (
            select(func.avg(TeachingSkill.rating))
            .where(TeachingSkill.user_id == user_id, TeachingSkill.rating > 0)
            .scalar_subquery()
        )
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(avg_rating=func.coalesce(avg_rating, User.avg_rating))
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def increment_skill_sessions(self, teacher_id: str, skill_name: str) -> bool:
        skill_id = await self._find_skill_id(teacher_id, skill_name)
        if skill_id is None:
            return False
        stmt = (
            update(TeachingSkill)
            .where(TeachingSkill.id == skill_id)
            .values(sessions=TeachingSkill.sessions + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def increment_sessions_taught(self, teacher_id: str) -> None:
        stmt = (
            update(User)
            .where(User.id == teacher_id)
            .values(sessions_taught=User.sessions_taught + 1)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    async def increment_sessions_learned(self, learner_id: str) -> None:
        stmt = (
            update(User)
            .where(User.id == learner_id)
            .values(sessions_learned=User.sessions_learned + 1)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
