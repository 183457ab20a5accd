"""
Database Module

Engine, session factory and unit-of-work helpers built from settings.

Usage:
======
    from surisql.db import session_scope

    with session_scope() as session:
        repo = ItemRepository(session)
        repo.save(item)
"""

from surisql.db.session import (
    get_db,
    init_db,
    close_db,
    session_scope,
    SessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "session_scope",
    "SessionLocal",
    "engine",
]
