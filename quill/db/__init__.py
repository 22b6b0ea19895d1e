"""Database engine, sessions and lifecycle helpers."""

from quill.db.database import (
    async_session_maker,
    close_db,
    engine,
    engine_options,
    get_session,
    init_db,
    transaction,
)

__all__ = [
    "async_session_maker",
    "close_db",
    "engine",
    "engine_options",
    "get_session",
    "init_db",
    "transaction",
]
