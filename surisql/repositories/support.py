"""
Session Support

Operations shared by the typed and the generic repository bases. Every
method forwards to the Session; nothing here opens, commits or closes it.

What This Provides:
===================
- query() / select()      → New QueryBuilder bound to the session
- save() / save_all()     → Insert new entities, merge existing ones
- remove() / remove_all() → Delete, re-attaching detached entities first
- refresh() / refreshed() → Reload state from the database
- detach() / detached()   → Stop tracking without deleting
- contains()              → Is the entity tracked by this session?
- flush()                 → Write pending changes now
- check_version()         → Optimistic version comparison

Batch Operations:
=================
The *_all() variants are plain loops. A failure halfway leaves the earlier
elements applied to the session; the surrounding transaction decides
whether they are committed.

Lifecycle Mapping:
==================
    save (new)      → session.add()
    save (existing) → session.merge()
    remove          → session.delete()
    refresh         → session.refresh()
    detach          → session.expunge()
"""

from collections.abc import Iterable
from typing import Any, Optional, TypeVar

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from surisql.core.exceptions import OptimisticLockError, VersionAccessError
from surisql.core.logging import get_logger, log_context
from surisql.criteria.named_queries import NamedQueryRegistry, named_queries
from surisql.criteria.query_builder import QueryBuilder
from surisql.utils.entity import get_entity_name, get_version_attribute, is_new


logger = get_logger(__name__)

E = TypeVar("E")
C = TypeVar("C", bound=Iterable[Any])


class SessionSupport:
    """
    Base for repositories working through a Session.

    Attributes:
        session: The session every operation is forwarded to
        named_queries: Registry named-query finders look names up in
    """

    def __init__(
        self,
        session: Session,
        registry: Optional[NamedQueryRegistry] = None,
    ) -> None:
        """
        Args:
            session: Database session for the current unit of work
            registry: Named query registry, defaults to the module-level one
        """
        self.session = session
        self.named_queries = registry if registry is not None else named_queries

    # ═══════════════════════════════════════════════════════════════════════════
    # QUERY BUILDING
    # ═══════════════════════════════════════════════════════════════════════════

    def query(self) -> QueryBuilder:
        return QueryBuilder(self.session)

    def select(self, *fragments: Any) -> QueryBuilder:
        return self.query().select(*fragments)

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    def save(self, entity: E) -> E:
        """
        Insert a new entity or merge an existing one.

        Returns:
            The entity itself when it was new, otherwise the persistent
            instance returned by merge (which may be a different object)
        """
        if is_new(entity):
            self.session.add(entity)
            return entity
        return self.session.merge(entity)

    def save_all(self, entities: Iterable[E]) -> list[E]:
        return [self.save(entity) for entity in entities]

    def remove(self, entity: Any) -> None:
        """Delete an entity, merging it into the session first if it is detached."""
        self.session.delete(entity if self.contains(entity) else self.session.merge(entity))

    def remove_all(self, entities: Iterable[Any]) -> None:
        for entity in entities:
            self.remove(entity)

    def flush(self) -> None:
        self.session.flush()

    # ═══════════════════════════════════════════════════════════════════════════
    # STATE OPERATIONS
    # ═══════════════════════════════════════════════════════════════════════════

    def refresh(self, entity: Any) -> None:
        """Reload entity state from the database, discarding unsaved changes."""
        self.session.refresh(entity)

    def refreshed(self, entity: E) -> E:
        self.refresh(entity)
        return entity

    def refresh_all(self, entities: Iterable[Any]) -> None:
        for entity in entities:
            self.refresh(entity)

    def refreshed_all(self, entities: C) -> C:
        self.refresh_all(entities)
        return entities

    def contains(self, entity: Any) -> bool:
        """
        Raises:
            sqlalchemy.orm.exc.UnmappedInstanceError: If entity is not mapped
        """
        return entity in self.session

    def detach(self, entity: Any) -> None:
        """Stop tracking the entity. Later changes to it are not persisted."""
        self.session.expunge(entity)

    def detached(self, entity: E) -> E:
        self.detach(entity)
        return entity

    def detach_all(self, entities: Iterable[Any]) -> None:
        for entity in entities:
            self.detach(entity)

    def detached_all(self, entities: C) -> C:
        self.detach_all(entities)
        return entities

    # ═══════════════════════════════════════════════════════════════════════════
    # OPTIMISTIC LOCKING
    # ═══════════════════════════════════════════════════════════════════════════

    def check_version(
        self,
        entity: Any,
        version: Any,
        version_type: Optional[type] = int,
        attribute: Optional[str] = None,
    ) -> None:
        """
        Compare the entity's version with the version the caller last saw.

        Args:
            entity: Entity to check; None is accepted and never conflicts
            version: Expected version value
            version_type: Type the stored version must have, None to skip
            attribute: Version attribute, defaults to the mapped version column

        Raises:
            OptimisticLockError: If the stored version differs
            VersionAccessError: If the version cannot be located or read
        """
        if entity is None:
            return

        entity_type = type(entity)
        if attribute is None:
            attribute = self._version_attribute_for(entity_type)
        if attribute is None:
            raise VersionAccessError(entity_type, "no version attribute is configured")

        try:
            persisted = getattr(entity, attribute)
        except (AttributeError, SQLAlchemyError) as e:
            raise VersionAccessError(entity_type, str(e)) from e

        if version_type is not None and persisted is not None and not isinstance(persisted, version_type):
            raise VersionAccessError(
                entity_type,
                f"'{attribute}' holds {type(persisted).__name__}, expected {version_type.__name__}",
            )

        if persisted != version:
            logger.warning(
                "Optimistic lock conflict",
                entity=entity_type.__name__,
                expected_version=version,
                actual_version=persisted,
            )
            raise OptimisticLockError(entity, expected=version, actual=persisted)

    def _version_attribute_for(self, entity_type: type) -> Optional[str]:
        try:
            return get_version_attribute(entity_type)
        except SQLAlchemyError as e:
            raise VersionAccessError(entity_type, str(e)) from e

    # ═══════════════════════════════════════════════════════════════════════════
    # NAMED QUERIES
    # ═══════════════════════════════════════════════════════════════════════════

    def _execute_named_query(
        self,
        entity_type: type,
        name: str,
        params: Optional[dict[str, Any]],
    ) -> Any:
        statement = select(entity_type).from_statement(text(self.named_queries.get(name)))
        with log_context(entity=get_entity_name(entity_type)):
            logger.debug("Executing named query", named_query=name)
            return self.session.execute(statement, params or {}).scalars()
