"""
Generic Entity Repository Support

Repository base for code that works with many entity types through one
object, such as services spanning several tables. Finders take the mapped
class as their first argument.

Usage:
======
    repo = GenericEntityRepositorySupport(session)

    item = repo.find_by(Item, 42)
    page = repo.find_all(Category, start=20, max_results=10)
    repo.save_all([item, category])
"""

from typing import Any, Optional, Type, TypeVar

from surisql.core.logging import log_context
from surisql.repositories.support import SessionSupport
from surisql.utils.entity import get_entity_name


E = TypeVar("E")


class GenericEntityRepositorySupport(SessionSupport):
    """Repository base whose finders take the entity type per call."""

    def find_by(self, entity_type: Type[E], primary_key: Any) -> Optional[E]:
        return self.session.get(entity_type, primary_key)

    def find_by_and_check_version(
        self,
        entity_type: Type[E],
        primary_key: Any,
        version: Any,
        version_type: Optional[type] = int,
        attribute: Optional[str] = None,
    ) -> Optional[E]:
        """
        Get an entity by primary key and verify it is still at version.

        The version attribute defaults to the one mapped as version_id_col
        on entity_type. A missing entity returns None without any check.
        """
        entity = self.find_by(entity_type, primary_key)
        if entity is not None:
            self.check_version(entity, version, version_type, attribute)
        return entity

    def find_all(self, entity_type: Type[E], start: int = 0, max_results: int = 0) -> list[E]:
        table_name = get_entity_name(entity_type)
        query = self.select("*").from_(table_name)
        if start > 0:
            query.first_result(start)
        if max_results > 0:
            query.max_results(max_results)
        with log_context(entity=table_name):
            return query.get_result_list(entity_type)

    def find_by_named_query(
        self,
        entity_type: Type[E],
        name: str,
        params: Optional[dict[str, Any]] = None,
    ) -> list[E]:
        return list(self._execute_named_query(entity_type, name, params).all())

    def find_any_by_named_query(
        self,
        entity_type: Type[E],
        name: str,
        params: Optional[dict[str, Any]] = None,
    ) -> Optional[E]:
        result = self.find_by_named_query(entity_type, name, params)
        if result:
            return result[0]
        return None

    def find_unique_by_named_query(
        self,
        entity_type: Type[E],
        name: str,
        params: Optional[dict[str, Any]] = None,
    ) -> E:
        return self._execute_named_query(entity_type, name, params).one()
