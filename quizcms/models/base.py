from collections.abc import AsyncGenerator
from datetime import datetime

from sqlalchemy import JSON, DateTime, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from quizcms.core.config import settings

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None
_production_engine: AsyncEngine | None = None
_production_session_maker: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Content database engine singleton"""
    global _engine
    if _engine is None:
        _engine = create_async_engine(settings.database_url, echo=settings.db_echo, pool_pre_ping=True)
    return _engine


def get_async_session_maker() -> async_sessionmaker[AsyncSession]:
    """Content database session maker singleton"""
    global _session_maker
    if _session_maker is None:
        _session_maker = async_sessionmaker(get_engine(), expire_on_commit=False, autoflush=False)
    return _session_maker


def get_production_engine() -> AsyncEngine:
    """Production store engine singleton (shares the content engine when both URLs match)"""
    global _production_engine
    if _production_engine is None:
        if settings.production_url == settings.database_url:
            _production_engine = get_engine()
        else:
            _production_engine = create_async_engine(
                settings.production_url, echo=settings.db_echo, pool_pre_ping=True
            )
    return _production_engine


def get_production_session_maker() -> async_sessionmaker[AsyncSession]:
    """Production store session maker singleton"""
    global _production_session_maker
    if _production_session_maker is None:
        _production_session_maker = async_sessionmaker(
            get_production_engine(), expire_on_commit=False, autoflush=False
        )
    return _production_session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: content database session"""
    async with get_async_session_maker()() as session:
        yield session


async def get_production_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: production store session"""
    async with get_production_session_maker()() as session:
        yield session
