# backend/homelist/db/__init__.py
from .db_connection import SessionLocal, get_async_db, get_session_factory, close_db
from .orm_registry import Base, import_all_models

__all__ = [
    "Base",
    "SessionLocal",
    "close_db",
    "get_async_db",
    "get_session_factory",
    "import_all_models",
]
