"""Database access: models, engine and session helpers."""

from .connection import async_session_maker, close_db, engine, get_db, get_db_context, init_db
from .models import Base

__all__ = [
    "Base",
    "async_session_maker",
    "close_db",
    "engine",
    "get_db",
    "get_db_context",
    "init_db",
]
