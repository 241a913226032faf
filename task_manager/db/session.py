"""
Async engine and session factory.

PostgreSQL (asyncpg) in deployment, SQLite (aiosqlite) for local runs and
tests. Sessions are opened per request by ``get_db``; routers commit
explicitly after a successful mutation.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from task_manager.core.config import settings


def engine_options(database_url: str) -> Dict[str, Any]:
    """Engine keyword arguments for the given backend."""
    options: Dict[str, Any] = {"echo": settings.DEBUG}
    if make_url(database_url).get_backend_name() == "sqlite":
        # one file, many short-lived connections: wait on the write lock
        options["connect_args"] = {"timeout": 30}
    else:
        options["pool_pre_ping"] = True
    return options


engine = create_async_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# expire_on_commit=False: responses are built from instances after commit
async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request, rolled back on error."""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_async_session_context() -> AsyncGenerator[AsyncSession, None]:
    """Session for scripts: commits when the block exits cleanly."""
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
