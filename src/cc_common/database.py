"""Async engine, session factory and the request-scoped session dependency.

One engine per process. Pool sizing comes from settings; pre-ping discards
connections the server closed while idle.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from config.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by the users and cash_cards models."""


engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
)

# Rows are mapped to frozen dataclasses right after each statement, so
# nothing reads ORM attributes after commit.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; the service layer owns commit/rollback."""
    async with async_session_factory() as session:
        yield session
