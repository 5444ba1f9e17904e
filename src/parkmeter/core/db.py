"""Database engine, session factory and the request-scoped session dependency."""

import os
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

DEFAULT_DATABASE_URL = "postgresql+asyncpg://parkmeter:dev_password_change_in_prod@db:5432/parkmeter_dev"

_ASYNC_DRIVER_PREFIXES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


def normalize_database_url(url: str | None) -> str:
    """
    Return a URL with an async driver.

    Hosting providers hand out plain postgres:// URLs; an empty value means
    the local development database.
    """
    if not url:
        return DEFAULT_DATABASE_URL

    for prefix, async_prefix in _ASYNC_DRIVER_PREFIXES.items():
        if url.startswith(prefix):
            return async_prefix + url[len(prefix):]
    return url


DATABASE_URL = normalize_database_url(os.getenv("DATABASE_URL"))

engine = create_async_engine(DATABASE_URL, pool_pre_ping=True)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for the parking tables."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed unless the handler raised."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
