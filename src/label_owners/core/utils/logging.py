"""
Logging setup and structured operation logging.

Configures the standard library root logger and structlog from
``LoggingConfig``, and provides a context manager that logs an
operation's start, completion and failure with timing.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

import structlog

from label_owners.core.config.logging_config import LoggingConfig

logger = logging.getLogger(__name__)


def configure_logging(logging_config: LoggingConfig) -> None:
    """
    Configure stdlib logging and route structlog through it.

    Args:
        logging_config: Level, format and optional file destination.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logging_config.file_path:
        handlers.append(logging.FileHandler(logging_config.file_path))

    logging.basicConfig(
        level=logging_config.level.upper(),
        format=logging_config.format,
        handlers=handlers,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@asynccontextmanager
async def log_operation(
    operation: str,
    subject_ids: dict[str, str] | None = None,
    **context: Any,
) -> Any:  # AsyncGenerator[None, None]
    """
    Context manager for structured operation logging.

    Logs operation start, completion, and errors with timing information.

    Args:
        operation: Name of the operation being performed
        subject_ids: Dictionary of subject identifiers (e.g., {"repo": "owner/repo", "issue": "12"})
        **context: Additional context to include in logs

    Example:
        async with log_operation("assign_code_owners", repo=repo, issue=number):
            result = await assign(...)
    """
    start_time = time.time()
    log_context = {
        "operation": operation,
        **(subject_ids or {}),
        **context,
    }

    logger.info(f"Starting {operation}", extra=log_context)

    try:
        yield
    except Exception as e:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.error(
            f"{operation} failed after {latency_ms}ms",
            extra={**log_context, "error": str(e), "latency_ms": latency_ms},
            exc_info=True,
        )
        raise
    else:
        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"{operation} completed in {latency_ms}ms",
            extra={**log_context, "latency_ms": latency_ms},
        )
