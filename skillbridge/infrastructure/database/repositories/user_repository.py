"""SQLAlchemy implementation of the user profile repository."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from skillbridge.db.models import (
    Certification as CertificationModel,
    LearningGoal as LearningGoalModel,
    TeachingSkill as TeachingSkillModel,
    User as UserModel,
)
from skillbridge.modules.users.exceptions import UserNotFoundError
from skillbridge.modules.users.models import (
    Certification,
    CertificationInput,
    TeachingSkill,
    User,
    UserStats,
)
from skillbridge.modules.users.repository import UserRepository


class SqlUserRepository(UserRepository):
    """User repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _select_user(self):
        return select(UserModel).options(
            selectinload(UserModel.skills_teaching),
            selectinload(UserModel.skills_learning),
            selectinload(UserModel.certifications),
        )

    async def _load(self, user_id: str) -> UserModel | None:
        stmt = self._select_user().where(UserModel.id == user_id).execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> User | None:
        return self._to_domain(await self._load(user_id))

    async def get_by_email(self, email: str) -> User | None:
        stmt = self._select_user().where(UserModel.email == email)
        result = await self._session.execute(stmt)
        return self._to_domain(result.scalar_one_or_none())

    async def list_users(self, exclude_id: str | None = None, limit: int = 100) -> Sequence[User]:
        stmt = self._select_user().order_by(UserModel.created_at.desc()).limit(limit)
        if exclude_id is not None:
            stmt = stmt.where(UserModel.id != exclude_id)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create_user(self, *, name: str, email: str, password_hash: str, role: str) -> User:
        model = UserModel(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            languages=[],
        )
        self._session.add(model)
        await self._session.flush()
        return await self._reload(model.id)

    async def update_profile(self, user_id: str, values: dict[str, Any]) -> User:
        stmt = update(UserModel).where(UserModel.id == user_id).values(**values)
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise UserNotFoundError(user_id)
        return await self._reload(user_id)

    async def add_teaching_skill(self, user_id: str, name: str) -> User:
        self._session.add(TeachingSkillModel(user_id=user_id, name=name))
        await self._session.flush()
        return await self._reload(user_id)

    async def remove_teaching_skill(self, user_id: str, skill_id: str) -> bool:
        stmt = delete(TeachingSkillModel).where(
            TeachingSkillModel.id == skill_id,
            TeachingSkillModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def add_learning_goal(self, user_id: str, name: str) -> User:
        self._session.add(LearningGoalModel(user_id=user_id, name=name))
        await self._session.flush()
        return await self._reload(user_id)

    async def remove_learning_goal(self, user_id: str, name: str) -> bool:
        wanted = name.strip().lower()
        stmt = select(LearningGoalModel.id, LearningGoalModel.name).where(LearningGoalModel.user_id == user_id)
        result = await self._session.execute(stmt)
        goal_ids = [goal_id for goal_id, goal in result.all() if goal.strip().lower() == wanted]
        if not goal_ids:
            return False
        await self._session.execute(delete(LearningGoalModel).where(LearningGoalModel.id.in_(goal_ids)))
        return True

    async def add_certification(self, user_id: str, payload: CertificationInput) -> User:
        self._session.add(
            CertificationModel(
                user_id=user_id,
                name=payload.name,
                issuer=payload.issuer,
                year=payload.year,
                file_url=payload.file_url,
                file_public_id=payload.file_public_id,
                file_name=payload.file_name,
                file_mime_type=payload.file_mime_type,
            )
        )
        await self._session.flush()
        return await self._reload(user_id)

    async def remove_certification(self, user_id: str, certification_id: str) -> bool:
        stmt = delete(CertificationModel).where(
            CertificationModel.id == certification_id,
            CertificationModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def _reload(self, user_id: str) -> User:
        user = self._to_domain(await self._load(user_id))
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    @staticmethod
    def _to_domain(model: UserModel | None) -> User | None:
        if model is None:
            return None
        return User(
            id=str(model.id),
            name=model.name,
            email=model.email,
            role=model.role or "user",
            password_hash=model.password_hash,
            bio=model.bio or "",
            location=model.location or "",
            languages=list(model.languages or []),
            timezone=model.timezone or "",
            avatar_url=model.avatar_url or "",
            avatar_public_id=model.avatar_public_id or "",
            skills_teaching=[
                TeachingSkill(
                    id=skill.id,
                    name=skill.name,
                    sessions=skill.sessions or 0,
                    rating=round(skill.rating or 0.0, 1),
                )
                for skill in model.skills_teaching
            ],
            skills_learning=[goal.name for goal in model.skills_learning],
            certifications=[
                Certification(
                    id=cert.id,
                    name=cert.name,
                    issuer=cert.issuer,
                    year=cert.year,
                    file_url=cert.file_url,
                    file_public_id=cert.file_public_id,
                    file_name=cert.file_name,
                    file_mime_type=cert.file_mime_type,
                )
                for cert in model.certifications
            ],
            stats=UserStats(
                sessions_taught=model.sessions_taught or 0,
                sessions_learned=model.sessions_learned or 0,
                avg_rating=round(model.avg_rating or 0.0, 1),
            ),
            created_at=model.created_at,
        )
