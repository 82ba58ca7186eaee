"""Structured logging configuration."""

import logging
import sys
import time
from typing import Any
from contextlib import contextmanager

import structlog
from structlog.stdlib import LoggerFactory

from .config import settings


def configure_logging() -> None:
    """Configure structured logging for the application."""

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if settings.environment == "production"
            else structlog.dev.ConsoleRenderer(colors=True),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.log_level == "DEBUG" else logging.WARNING
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return structlog.get_logger(name)


class PerformanceLogger:
    """Logger for tracking request handling time."""

    def __init__(self, logger_name: str = "performance"):
        self.logger = get_logger(logger_name)

    @contextmanager
    def log_operation_time(
        self,
        operation: str,
        **context: Any
    ):
        """Context manager to log operation execution time.

        Errors flagged as ``expected`` (not found, conflicts, bad input) are
        logged at info level; everything else is logged as a failure.

        Args:
            operation: Name of the operation being timed
            **context: Additional context for logging
        """
        start_time = time.perf_counter()

        try:
            yield

            self.logger.info(
                "Operation completed",
                operation=operation,
                duration_seconds=round(time.perf_counter() - start_time, 3),
                **context
            )

        except Exception as e:
            duration = round(time.perf_counter() - start_time, 3)

            if getattr(e, "expected", False):
                self.logger.info(
                    "Operation rejected",
                    operation=operation,
                    duration_seconds=duration,
                    reason=str(e),
                    error_type=type(e).__name__,
                    **context
                )
            else:
                self.logger.error(
                    "Operation failed",
                    operation=operation,
                    duration_seconds=duration,
                    error=str(e),
                    error_type=type(e).__name__,
                    **context
                )
            raise


# Global logger instances
performance_logger = PerformanceLogger()
