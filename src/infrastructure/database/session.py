"""Database engine and session factory.

The engine is created once per process from ``settings.async_database_url``.
PostgreSQL (asyncpg) is the deployment target; SQLite (aiosqlite) URLs are
accepted for local runs.
"""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.config import settings


def engine_options(url: str) -> dict[str, Any]:
    """Keyword arguments for ``create_async_engine`` suited to the backend."""
    options: dict[str, Any] = {"echo": settings.debug, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        # An in-memory database lives as long as its one connection
        if ":memory:" in url:
            options["poolclass"] = StaticPool
    else:
        options["pool_size"] = settings.database_pool_size
        options["max_overflow"] = settings.database_max_overflow
    return options


engine = create_async_engine(
    settings.async_database_url,
    **engine_options(settings.async_database_url),
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session for request-scoped raw queries (health checks)."""
    async with async_session_factory() as session:
        yield session
