"""
Criteria Package

Textual query construction.

Contents:
=========
- query_builder: QueryBuilder, the fluent clause assembler
- named_queries: Registry of query text stored under names

Usage:
======
    from surisql.criteria import QueryBuilder, named_query
"""

from surisql.criteria.query_builder import QueryBuilder
from surisql.criteria.named_queries import (
    NamedQueryRegistry,
    named_queries,
    named_query,
)

__all__ = [
    "QueryBuilder",
    "NamedQueryRegistry",
    "named_queries",
    "named_query",
]
