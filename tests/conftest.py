from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import skillbridge.db.models  # noqa: F401
from skillbridge.infrastructure.database import Base
from skillbridge.interfaces.http.deps import get_db_session
from skillbridge.main import app
from skillbridge.modules.meetings import MeetingScheduleInput, MeetingService
from skillbridge.modules.users import UserCreateInput, UserService


@pytest_asyncio.fixture
async def engine(tmp_path):
    db_path = tmp_path / "skillbridge.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def make_user(session):
    counter = {"n": 0}

    async def _make_user(name: str | None = None, password: str = "secret123"):
        counter["n"] += 1
        name = name or f"User {counter['n']}"
        email = f"{name.lower().replace(' ', '.')}.{counter['n']}@example.com"
        return await UserService.with_session(session).register(
            UserCreateInput(name=name, email=email, password=password)
        )

    return _make_user


@pytest.fixture
def schedule(session):
    """Schedule a session through the service; ``hours_from_now`` may be negative."""

    async def _schedule(creator, partner, session_type="learning", skill=None, hours_from_now=24.0, **extra):
        starts_at = datetime.now(timezone.utc) + timedelta(hours=hours_from_now)
        return await MeetingService.with_session(session).schedule(
            MeetingScheduleInput(
                creator_id=creator.id,
                participant_id=partner.id,
                title=extra.pop("title", "Guitar basics"),
                starts_at=starts_at,
                session_type=session_type,
                skill=skill,
                **extra,
            )
        )

    return _schedule


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db_session():
        async with session_maker() as db:
            try:
                yield db
                await db.commit()
            except Exception:
                await db.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.pop(get_db_session, None)


@pytest.fixture
def register(client):
    """Register through the API and return the new user's id and auth headers."""

    async def _register(name: str, email: str, password: str = "secret123") -> dict:
        response = await client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        body = response.json()
        return {"id": body["user"]["id"], "headers": {"Authorization": f"Bearer {body['accessToken']}"}}

    return _register
