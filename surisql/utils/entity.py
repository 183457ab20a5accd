"""
Entity Utilities

Small helpers over SQLAlchemy's inspection API used by the repositories.

Contents:
=========
- is_mapped()             → Is this class ORM mapped?
- is_new()                → Should save() insert (True) or merge (False)?
- get_entity_name()       → Table name used in textual queries
- get_version_attribute() → Attribute key of the mapper's version_id_col
"""

from typing import Any, Optional

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapper


def is_mapped(entity_type: Any) -> bool:
    """Return True if entity_type is an ORM mapped class."""
    if not isinstance(entity_type, type):
        return False
    return isinstance(sa_inspect(entity_type, raiseerr=False), Mapper)


def is_new(entity: Any) -> bool:
    """
    Decide whether an entity has never been stored.

    An entity is new when it carries no identity key (it was never loaded or
    flushed) and none of its primary key attributes are set.

    Args:
        entity: Mapped instance

    Returns:
        True for insert semantics, False for merge semantics

    Raises:
        sqlalchemy.exc.NoInspectionAvailable: If entity is not mapped
    """
    state = sa_inspect(entity)
    if state.key is not None:
        return False
    return all(value is None for value in state.mapper.primary_key_from_instance(entity))


def get_entity_name(entity_type: type) -> str:
    """
    Name an entity type the way textual queries refer to it.

    Example:
        get_entity_name(Item)  # "items" or "inventory.items"
    """
    return sa_inspect(entity_type).local_table.fullname


def get_version_attribute(entity_type: type) -> Optional[str]:
    """
    Resolve the attribute holding the optimistic-lock version.

    Returns:
        Attribute key of the mapper's version_id_col, or None if the
        mapping declares no version column
    """
    mapper = sa_inspect(entity_type)
    if mapper.version_id_col is None:
        return None
    return mapper.get_property_by_column(mapper.version_id_col).key
