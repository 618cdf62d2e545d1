from collections.abc import AsyncGenerator
from typing import Any

from loguru import logger
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import settings


def _url_for_log(url: str) -> str:
    """Hide credentials: keep only host/db part."""
    return url.split("@")[1] if "@" in url else url[:30]


def create_engine(url: str, **kwargs: Any) -> AsyncEngine:
    if not url:
        raise ValueError("DATABASE_URL environment variable is not set")
    logger.debug("[Database] Connecting to: ...@{}", _url_for_log(url))
    kwargs.setdefault("echo", settings.debug)
    return create_async_engine(url, future=True, **kwargs)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions keep loaded attributes after commit (records are read after the request commits)."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


engine = create_engine(settings.database_url)
async_session = create_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database session."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
