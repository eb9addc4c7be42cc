"""Relational store access: engine lifecycle, sessions and ORM models."""

from user_admin.db.models import Base, User
from user_admin.db.session import close_database, get_engine, get_session, init_database

__all__ = [
    "Base",
    "User",
    "close_database",
    "get_engine",
    "get_session",
    "init_database",
]
