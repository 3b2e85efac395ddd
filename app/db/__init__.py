"""
Database package
"""
from app.db.base import Base, TimestampMixin
from app.db.session import engine, SessionLocal, get_db, init_db

__all__ = [
    "Base",
    "TimestampMixin",
    "engine",
    "SessionLocal",
    "get_db",
    "init_db",
]
