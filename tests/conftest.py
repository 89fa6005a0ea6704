"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any, Callable
from uuid import uuid4

# Disable rate limiting and point the app at SQLite in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.password_hasher import BcryptPasswordHasher
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, UserModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed test user ID for consistency
TEST_USER_ID = uuid4()
TEST_USER_AVATAR = "https://www.gravatar.com/avatar/test?s=200&r=pg&d=mm"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(
    engine: AsyncEngine,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """UoW factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture
def test_user() -> TokenUser:
    """Create a test user with fixed ID."""
    return TokenUser(
        id=TEST_USER_ID,
        email="test@example.com",
        name="Test User",
    )


@pytest.fixture
async def test_account(
    session_factory: async_sessionmaker[AsyncSession], test_user: TokenUser
) -> TokenUser:
    """Store the test user's account row."""
    async with session_factory() as session:
        session.add(
            UserModel(
                id=test_user.id,
                name=test_user.name,
                email=test_user.email,
                password_hash="not-a-bcrypt-hash",
                avatar=TEST_USER_AVATAR,
            )
        )
        await session.commit()
    return test_user


@pytest.fixture
def other_user() -> TokenUser:
    """A second account for cross-user checks."""
    return TokenUser(id=uuid4(), email="other@example.com", name="Other User")


@pytest.fixture
async def other_headers(
    session_factory: async_sessionmaker[AsyncSession],
    other_user: TokenUser,
    auth_provider: JWTAuthProvider,
) -> dict[str, str]:
    """Store the second account and return its authorization headers."""
    async with session_factory() as session:
        session.add(
            UserModel(
                id=other_user.id,
                name=other_user.name,
                email=other_user.email,
                password_hash="not-a-bcrypt-hash",
            )
        )
        await session.commit()
    return {"Authorization": f"Bearer {auth_provider.create_token(other_user)}"}


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    """Cheap bcrypt cost for fast tests."""
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth, no database overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def app(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
    password_hasher: BcryptPasswordHasher,
) -> FastAPI:
    """
    Create an app whose services use the test database.

    Tokens are signed and checked with the test auth provider, so a token
    issued by ``/api/v1/users`` is accepted by protected routes.
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_post_service,
        get_profile_service,
        get_user_service,
    )
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from domain.services.user_service import UserService
    from main import create_app

    app = create_app()

    def override_get_auth_provider() -> JWTAuthProvider:
        return auth_provider

    def override_get_user_service() -> UserService:
        return UserService(uow_factory, auth_provider, password_hasher)

    def override_get_profile_service() -> ProfileService:
        return ProfileService(uow_factory)

    def override_get_post_service() -> PostService:
        return PostService(uow_factory)

    app.dependency_overrides[get_auth_provider] = override_get_auth_provider
    app.dependency_overrides[get_user_service] = override_get_user_service
    app.dependency_overrides[get_profile_service] = override_get_profile_service
    app.dependency_overrides[get_post_service] = override_get_post_service
    return app


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Client for the test app without credentials."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    app: FastAPI,
    test_account: TokenUser,
    auth_headers: dict[str, str],
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated test client.

    This client:
    - Uses an in-memory SQLite database
    - Has the test user's account row stored
    - Sends a valid bearer token for the test user
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as c:
        yield c

    app.dependency_overrides.clear()
