"""
Entity Repository Support

Typed repository base: one subclass per entity, the entity class passed
explicitly to the constructor.

What This Provides:
===================
- find_by(key)                       → Entity by primary key, or None
- find_by_and_check_version()        → find_by() plus optimistic version check
- find_all(start, max_results)       → All rows of the entity's table
- find_by_named_query()              → All matches of a named query
- find_any_by_named_query()          → First match or None
- find_unique_by_named_query()       → Exactly one match
- plus everything in SessionSupport (save, remove, refresh, detach, ...)

Generic Type Pattern:
=====================
    class ItemRepository(EntityRepositorySupport[Item]):
        def __init__(self, session: Session) -> None:
            super().__init__(Item, session)

        def find_by_category(self, category: str) -> list[Item]:
            return (
                self.select("*")
                .from_("items")
                .where("category = :category")
                .with_param("category", category)
                .get_result_list(Item)
            )

    repo = ItemRepository(session)
    item = repo.find_by(42)  # Item, not Any
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from surisql.core.logging import log_context
from surisql.criteria.named_queries import NamedQueryRegistry
from surisql.repositories.support import SessionSupport
from surisql.utils.entity import get_entity_name


ModelType = TypeVar("ModelType")


class EntityRepositorySupport(SessionSupport, Generic[ModelType]):
    """
    Repository base bound to a single mapped class.

    Attributes:
        model: The mapped class this repository manages
        session: The database session
        version_attribute: Attribute compared by find_by_and_check_version()
    """

    def __init__(
        self,
        model: Type[ModelType],
        session: Session,
        version_attribute: Optional[str] = None,
        registry: Optional[NamedQueryRegistry] = None,
    ) -> None:
        """
        Initialize the repository.

        Args:
            model: Mapped class (e.g., Item)
            session: Database session for the current unit of work
            version_attribute: Version attribute name; defaults to the
                attribute mapped as version_id_col
            registry: Named query registry, defaults to the module-level one
        """
        super().__init__(session, registry)
        self.model = model
        self.version_attribute = version_attribute or self._version_attribute_for(model)

    # ═══════════════════════════════════════════════════════════════════════════
    # READ OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    def find_by(self, primary_key: Any) -> Optional[ModelType]:
        """
        Get a single entity by primary key.

        Returns:
            The entity if found, None otherwise
        """
        return self.session.get(self.model, primary_key)

    def find_by_and_check_version(
        self,
        primary_key: Any,
        version: Any,
        version_type: Optional[type] = int,
    ) -> Optional[ModelType]:
        """
        Get an entity by primary key and verify it is still at version.

        A missing entity returns None without any version check.

        Raises:
            OptimisticLockError: If the stored version differs from version
            VersionAccessError: If the version attribute cannot be read
        """
        entity = self.find_by(primary_key)
        if entity is not None:
            self.check_version(entity, version, version_type)
        return entity

    def check_version(
        self,
        entity: Any,
        version: Any,
        version_type: Optional[type] = int,
        attribute: Optional[str] = None,
    ) -> None:
        super().check_version(entity, version, version_type, attribute or self.version_attribute)

    def find_all(self, start: int = 0, max_results: int = 0) -> list[ModelType]:
        """
        List every entity of the table.

        Args:
            start: Rows to skip; ignored unless positive
            max_results: Maximum rows; ignored unless positive

        SQL Generated:
            select * from items
        """
        table_name = get_entity_name(self.model)
        query = self.select("*").from_(table_name)
        if start > 0:
            query.first_result(start)
        if max_results > 0:
            query.max_results(max_results)
        with log_context(entity=table_name):
            return query.get_result_list(self.model)

    def find_by_named_query(
        self,
        name: str,
        params: Optional[dict[str, Any]] = None,
    ) -> list[ModelType]:
        return list(self._execute_named_query(self.model, name, params).all())

    def find_any_by_named_query(
        self,
        name: str,
        params: Optional[dict[str, Any]] = None,
    ) -> Optional[ModelType]:
        result = self.find_by_named_query(name, params)
        if result:
            return result[0]
        return None

    def find_unique_by_named_query(
        self,
        name: str,
        params: Optional[dict[str, Any]] = None,
    ) -> ModelType:
        """
        Raises:
            sqlalchemy.exc.NoResultFound: If the query matched nothing
            sqlalchemy.exc.MultipleResultsFound: If it matched several rows
        """
        return self._execute_named_query(self.model, name, params).one()
