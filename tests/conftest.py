# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Test settings must be in place before quill is imported anywhere
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key-for-quill-tests-only"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from datetime import timedelta  # noqa: E402
from uuid import uuid4  # noqa: E402

from httpx import ASGITransport, AsyncClient  # noqa: E402
from pytest import fixture  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from quill.db import get_session  # noqa: E402
from quill.main import app  # noqa: E402
from quill.managers.token_manager import create_access_token  # noqa: E402
from quill.models import PostDB, UserDB  # noqa: E402, F401

type RegisterUser = Callable[..., Awaitable[dict[str, str]]]

LONG_CONTENT = (
    "This body is comfortably longer than fifty characters so that it passes "
    "the minimum content length check."
)
DEFAULT_PASSWORD = "correct horse battery staple"


@fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test, shared by every connection."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@fixture
async def session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for repository and service tests."""
    async with session_maker() as db_session:
        yield db_session


@fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client wired to the per-test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with session_maker() as db_session:
            try:
                yield db_session
                await db_session.commit()
            except Exception:
                await db_session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@fixture
def register_user(client: AsyncClient) -> RegisterUser:
    """Register an account through the API and return its auth response."""

    async def _register(
        username: str = "alice",
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
    ) -> dict[str, str]:
        response = await client.post(
            "/api/auth/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _register


@fixture
async def alice_headers(register_user: RegisterUser) -> dict[str, str]:
    data = await register_user("alice")
    return {"Authorization": f"Bearer {data['token']}"}


@fixture
async def bob_headers(register_user: RegisterUser) -> dict[str, str]:
    data = await register_user("bob")
    return {"Authorization": f"Bearer {data['token']}"}


@fixture
def expired_token() -> str:
    return create_access_token(
        user_id=uuid4(),
        username="alice",
        expires_delta=timedelta(seconds=-1),
    )


@fixture
def post_payload() -> dict[str, str]:
    return {
        "title": "Hello World",
        "content": LONG_CONTENT,
        "imageURL": "https://example.com/cover.jpg",
    }


@fixture
def default_password() -> str:
    return DEFAULT_PASSWORD


@fixture
def long_content() -> str:
    return LONG_CONTENT
