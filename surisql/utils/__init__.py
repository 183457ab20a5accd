"""
Utilities Package

Contents:
=========
- entity: Mapping inspection helpers (identity probe, names, version column)

Usage:
======
    from surisql.utils import is_new, get_entity_name
"""

from surisql.utils.entity import (
    is_mapped,
    is_new,
    get_entity_name,
    get_version_attribute,
)

__all__ = [
    "is_mapped",
    "is_new",
    "get_entity_name",
    "get_version_attribute",
]
