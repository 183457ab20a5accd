"""
Custom Exceptions

Library-specific exceptions with HTTP status codes and error codes, so that
applications can map them straight onto API responses.

Exception Hierarchy:
====================
    SurisqlException (base, 500)
       │
       ├── ConflictError (409)             ← Concurrent modification
       │      └── OptimisticLockError      ← Version stamp mismatch
       ├── ConfigurationError (500)        ← Mapping / setup mistakes
       │      ├── VersionAccessError       ← Version attribute unreadable
       │      ├── NamedQueryNotFoundError  ← Unknown named query
       │      └── NamedQueryConflictError  ← Name registered twice
       └── QueryBuilderFrozenError (500)   ← Builder mutated after execution

Errors raised by SQLAlchemy itself (malformed SQL, constraint violations,
NoResultFound, MultipleResultsFound) are never wrapped and reach the caller
unchanged.

Usage:
======
    from surisql.core.exceptions import OptimisticLockError

    try:
        item = repo.find_by_and_check_version(item_id, form.version)
    except OptimisticLockError as e:
        return e.to_dict()
"""

from typing import Any, Optional


class SurisqlException(Exception):
    """
    Base exception for all surisql errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (default 500)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dictionary with error details for JSON response
        """
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }


# ═══════════════════════════════════════════════════════════════════════════════
# CONFLICT ERRORS (409)
# ═══════════════════════════════════════════════════════════════════════════════


class ConflictError(SurisqlException):
    """
    Resource conflict error (409 Conflict).

    Raised when an operation conflicts with the stored state of a resource.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            error_code="CONFLICT",
            details=details,
        )


class OptimisticLockError(ConflictError):
    """
    Optimistic lock conflict.

    The version stored on the entity differs from the version the caller
    last saw. The caller decides whether to reload, merge or give up.

    Attributes:
        entity: The entity whose version did not match

    Example:
        raise OptimisticLockError(item, expected=3, actual=4)
        # Message: "Item was modified concurrently (expected version 3, found 4)"
    """

    def __init__(self, entity: Any, expected: Any = None, actual: Any = None) -> None:
        self.entity = entity
        super().__init__(
            message=(
                f"{type(entity).__name__} was modified concurrently "
                f"(expected version {expected}, found {actual})"
            ),
            details={
                "entity": type(entity).__name__,
                "expected_version": expected,
                "actual_version": actual,
            },
        )
        self.error_code = "OPTIMISTIC_LOCK"


# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURATION ERRORS (500)
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigurationError(SurisqlException):
    """
    Configuration error (500).

    Raised for mapping or setup mistakes. These are not business errors and
    should abort the current operation.
    """

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )


class VersionAccessError(ConfigurationError):
    """Version attribute missing, unreadable or of the wrong type."""

    def __init__(self, entity_type: type, reason: str) -> None:
        super().__init__(
            message=f"Cannot read version of {entity_type.__name__}: {reason}",
            details={"entity": entity_type.__name__},
        )


class NamedQueryNotFoundError(ConfigurationError):
    """Named query not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"Named query '{name}' is not registered",
            details={"name": name},
        )


class NamedQueryConflictError(ConfigurationError):
    """Named query registered twice with different text."""

    def __init__(self, name: str) -> None:
        super().__init__(
            message=f"Named query '{name}' is already registered with different text",
            details={"name": name},
        )


# ═══════════════════════════════════════════════════════════════════════════════
# QUERY BUILDER ERRORS
# ═══════════════════════════════════════════════════════════════════════════════


class QueryBuilderFrozenError(SurisqlException):
    """
    Query builder mutated after it was executed.

    A builder renders one query. Once executed it can be executed again
    or rendered, but not changed.
    """

    def __init__(self, query: str) -> None:
        super().__init__(
            message="Query builder was already executed and can no longer be modified",
            error_code="QUERY_FROZEN",
            details={"query": query},
        )
