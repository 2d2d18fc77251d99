"""
PitchScore – Async SQLAlchemy engine, session, and declarative base.
"""

from __future__ import annotations

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from pitchscore.config import Settings


# ── Declarative base ──
class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


# ── Engine ──
def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine (and its connection pool) for the configured store."""
    engine_kwargs = {
        "echo": settings.DEBUG,
        "future": True,
    }

    # If using PostgreSQL behind PgBouncer (transaction mode), disable prepared
    # statement caching because PgBouncer does not support it properly.
    if "postgresql+asyncpg" in settings.DATABASE_URL:
        engine_kwargs["connect_args"] = {"statement_cache_size": 0}

    return create_async_engine(settings.DATABASE_URL, **engine_kwargs)


# ── Session factory ──
def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create every table registered on ``Base.metadata``."""
    import pitchscore.models  # noqa: F401  (registers the mappers)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ── Dependency for FastAPI routes ──
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield an async database session, auto-closed on exit."""
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.sessionmaker
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
