import os

# Settings are read at import time, so the test environment goes first
os.environ.setdefault("ENV", "local")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_FILE"] = ""

from contextlib import asynccontextmanager

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.db import Base, get_db
from app.models import User
from app.services.auth.passwords import hash_password
from app.services.guest_pool import GuestPoolService, get_guest_pool_service

HOUR_MS = 60 * 60 * 1000


class FakeClock:
    """Settable wall clock in seconds."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    @property
    def now_ms(self) -> int:
        return int(self.now * 1000)


@pytest.fixture
async def engine(tmp_path):
    # File-backed so every session gets its own connection
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        connect_args={"timeout": 15},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
def session_factory(session_maker):
    @asynccontextmanager
    async def factory():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return factory


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
async def guest_pool(session_factory, clock):
    service = GuestPoolService(session_factory=session_factory, clock=clock)
    yield service
    await service.wait_for_background_tasks()


@pytest.fixture
async def client(session_maker, guest_pool):
    from main import app

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_guest_pool_service] = lambda: guest_pool

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def create_user(session_factory):
    """Insert an account directly, bypassing registration."""

    async def _create(email: str, username: str | None = None, password: str = "secret123") -> User:
        async with session_factory() as session:
            user = User(
                email=email,
                username=username,
                password_hash=await hash_password(password),
            )
            session.add(user)
            await session.flush()
            await session.refresh(user)
        return user

    return _create


@pytest.fixture
async def auth_headers(client):
    """Register a fresh account and return its bearer header."""

    async def _headers(email: str = "alice@example.com", username: str = "alice") -> dict:
        response = await client.post(
            "/api/auth/register",
            json={"email": email, "username": username, "password": "secret123"},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _headers
