"""
Named Queries

Registry of query text stored under a string key, so repositories can run
a query by name instead of repeating the SQL at every call site.

Usage:
======
    from surisql.criteria import named_query

    @named_query(
        "Item.findByCategory",
        "select * from items where category = :category order by name",
    )
    class Item(Base):
        ...

    repo.find_by_named_query("Item.findByCategory", {"category": "tools"})
"""

from typing import Callable, TypeVar

from surisql.core.exceptions import NamedQueryConflictError, NamedQueryNotFoundError


T = TypeVar("T")


class NamedQueryRegistry:
    """Maps query names to query text."""

    def __init__(self) -> None:
        self._queries: dict[str, str] = {}

    def register(self, name: str, query: str) -> None:
        """
        Register query text under a name.

        Registering the same text twice is allowed so that modules can be
        re-imported; different text under a taken name is not.

        Raises:
            NamedQueryConflictError: If name is taken by different text
        """
        existing = self._queries.get(name)
        if existing is not None and existing != query:
            raise NamedQueryConflictError(name)
        self._queries[name] = query

    def get(self, name: str) -> str:
        """
        Raises:
            NamedQueryNotFoundError: If nothing is registered under name
        """
        try:
            return self._queries[name]
        except KeyError:
            raise NamedQueryNotFoundError(name) from None

    def unregister(self, name: str) -> None:
        self._queries.pop(name, None)

    def __contains__(self, name: object) -> bool:
        return name in self._queries

    def __len__(self) -> int:
        return len(self._queries)


named_queries = NamedQueryRegistry()


def named_query(name: str, query: str) -> Callable[[T], T]:
    """
    Class decorator registering a named query on the default registry.

    The decorated class is returned unchanged; the decorator only keeps the
    query next to the entity it returns.
    """

    def decorator(cls: T) -> T:
        named_queries.register(name, query)
        return cls

    return decorator
