"""
surisql

Query string builder and repository support classes for SQLAlchemy sessions.

Package Structure:
==================
    surisql/
    ├── config/        ← Settings loaded from the environment
    ├── core/          ← Logging, exceptions
    ├── criteria/      ← QueryBuilder, named queries
    ├── db/            ← Engine and session lifecycle helpers
    ├── models/        ← Declarative base
    ├── repositories/  ← Repository bases
    └── utils/         ← Mapping inspection helpers

Usage:
======
    from surisql import EntityRepositorySupport, QueryBuilder
"""

from surisql.criteria import QueryBuilder, named_query, named_queries
from surisql.repositories import (
    SessionSupport,
    EntityRepositorySupport,
    GenericEntityRepositorySupport,
)

__all__ = [
    "QueryBuilder",
    "named_query",
    "named_queries",
    "SessionSupport",
    "EntityRepositorySupport",
    "GenericEntityRepositorySupport",
]
