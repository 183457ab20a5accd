"""
Repositories Package

Repository bases forwarding CRUD operations to a SQLAlchemy Session.

Repository Pattern:
===================
    EntityRepositorySupport[Item]     ← one repository per entity
    GenericEntityRepositorySupport    ← entity type passed per call
            │
            └── both extend SessionSupport (save, remove, refresh, ...)

Usage:
======
    from surisql.repositories import EntityRepositorySupport

    class ItemRepository(EntityRepositorySupport[Item]):
        def __init__(self, session: Session) -> None:
            super().__init__(Item, session)
"""

from surisql.repositories.support import SessionSupport
from surisql.repositories.base import EntityRepositorySupport
from surisql.repositories.generic import GenericEntityRepositorySupport

__all__ = [
    "SessionSupport",
    "EntityRepositorySupport",
    "GenericEntityRepositorySupport",
]
