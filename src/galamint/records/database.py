"""Async engine and per-request sessions for the record store."""

from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from galamint.config import get_settings
from galamint.records.models import Base

_engine: Optional[AsyncEngine] = None
_sessions: Optional[async_sessionmaker[AsyncSession]] = None


def async_url(database_url: str) -> str:
    """Point plain ``sqlite:///`` URLs at the aiosqlite driver."""
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url


def get_engine() -> AsyncEngine:
    global _engine, _sessions
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(
            async_url(settings.database_url),
            echo=settings.debug and not settings.is_production,
        )
        _sessions = async_sessionmaker(_engine, expire_on_commit=False, autoflush=False)
    return _engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed on success."""
    get_engine()
    async with _sessions() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def ping_db() -> None:
    """Run ``SELECT 1``; raises if the database does not answer."""
    async with get_engine().connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_db() -> None:
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    global _engine, _sessions
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _sessions = None
