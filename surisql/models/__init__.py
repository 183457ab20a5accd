"""
Models Package

Declarative base shared by applications using surisql.

Usage:
======
    from surisql.models import Base
"""

from surisql.models.base import Base

__all__ = [
    "Base",
]
