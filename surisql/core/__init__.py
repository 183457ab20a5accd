"""
Core Module

Provides core functionality shared across the library:
- Structured logging
- Custom exceptions

Usage:
======
    from surisql.core.logging import logger, get_logger
    from surisql.core.exceptions import SurisqlException, OptimisticLockError

    logger.info("Repository ready", entity="Item")
"""

from surisql.core.logging import (
    logger,
    get_logger,
    log_context,
)
from surisql.core.exceptions import (
    SurisqlException,
    ConflictError,
    OptimisticLockError,
    ConfigurationError,
    VersionAccessError,
    NamedQueryNotFoundError,
    NamedQueryConflictError,
    QueryBuilderFrozenError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    # Exceptions
    "SurisqlException",
    "ConflictError",
    "OptimisticLockError",
    "ConfigurationError",
    "VersionAccessError",
    "NamedQueryNotFoundError",
    "NamedQueryConflictError",
    "QueryBuilderFrozenError",
]
