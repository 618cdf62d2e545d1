from src.core.database.session import (
    async_session,
    create_engine,
    create_session_factory,
    engine,
    get_db,
)
from src.core.database.base import Base, BaseModel, BigIntPK, CreatedAtMixin

__all__ = [
    "async_session",
    "create_engine",
    "create_session_factory",
    "engine",
    "get_db",
    "Base",
    "BaseModel",
    "BigIntPK",
    "CreatedAtMixin",
]
