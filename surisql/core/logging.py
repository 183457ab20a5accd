"""
Logging Configuration

structlog setup shared by every surisql module.

Events Emitted:
===============
    debug    "Executing query"         query, first_result, max_results[, params]
    debug    "Executing named query"   named_query
    warning  "Optimistic lock conflict" entity, expected_version, actual_version
    info     "Initializing database connection" / "Database connection closed"

Repository finders bind the entity they work on with log_context(), so the
query events above also carry entity=<table name>.

Rendering:
==========
Development (APP_ENV=development):
    2024-01-15 10:30:00 [debug    ] Executing query   entity=items query='select * from items'

Anything else (JSON):
    {"timestamp": "...", "level": "debug", "event": "Executing query", "entity": "items", ...}

Usage:
======
    from surisql.core.logging import get_logger, log_context

    logger = get_logger(__name__)

    with log_context(entity="items"):
        logger.debug("Executing query", query=str(builder))  # carries entity
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from structlog.typing import Processor

from surisql.config.settings import settings


def setup_logging() -> None:
    """
    Route structlog through the standard library logger at LOG_LEVEL.

    Called once when this module is imported.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


@contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """
    Bind key-value pairs to every event logged inside the block.

    Bindings are restored on exit, including when the block raises, so
    nested blocks only add to their parent for their own duration.

    Example:
        with log_context(entity="items"):
            repo.find_all()  # "Executing query" carries entity="items"
    """
    with structlog.contextvars.bound_contextvars(**kwargs):
        yield


setup_logging()

logger = get_logger("surisql")
