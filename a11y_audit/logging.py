"""Structured logging configuration for a11y-audit."""

import logging
import sys
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

from .config import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    """Configure structured logging for a11y-audit."""
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=(level or settings.log_level).upper(),
        force=True,
    )

    # Configure structlog
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_audit_event(
    logger: structlog.stdlib.BoundLogger,
    audit_id: str,
    phase: str,
    url_count: Optional[int] = None,
    **kwargs: Any,
) -> None:
    """Log an audit pipeline event with audit context."""
    log_data: Dict[str, Any] = {
        "audit_id": audit_id,
        "phase": phase,
    }

    if url_count is not None:
        log_data["url_count"] = url_count

    log_data.update(kwargs)

    logger.info(f"audit.{phase}", **log_data)


def log_scan_event(
    logger: structlog.stdlib.BoundLogger,
    url: str,
    status: str,
    duration_ms: Optional[int] = None,
    **kwargs: Any,
) -> None:
    """Log the outcome of a single page scan."""
    log_data: Dict[str, Any] = {
        "url": url,
        "status": status,
    }

    if duration_ms is not None:
        log_data["duration_ms"] = duration_ms

    log_data.update(kwargs)

    if status == "failed":
        logger.warning(f"scan.{status}", **log_data)
    else:
        logger.info(f"scan.{status}", **log_data)


# Initialize logging on module import
setup_logging()
