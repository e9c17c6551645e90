"""
Structured logging for the sales core.

Sale events carry money amounts and customer contact numbers. Amounts are
rendered as exact decimal strings and contact numbers are masked down to
their last four digits before any renderer sees them.
"""

import logging
import sys
from decimal import Decimal
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from billwise.config.settings import get_settings

CONTACT_KEYS = frozenset({"contact_number", "customer_contact_number"})


def add_service_context(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp every event with the service name and deployment environment."""
    settings = get_settings()
    event_dict.setdefault("service", settings.app_name)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def mask_contact_numbers(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    for key in event_dict.keys() & CONTACT_KEYS:
        value = event_dict[key]
        if isinstance(value, str) and len(value) > 4:
            event_dict[key] = "*" * (len(value) - 4) + value[-4:]
    return event_dict


def render_decimals(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    # JSONRenderer would otherwise fall back to repr() for Decimal
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = str(value)
    return event_dict


def _renderer(log_format: str, environment: str) -> list[Processor]:
    if log_format == "auto":
        log_format = "console" if environment == "development" else "json"
    if log_format == "console":
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging(level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Overrides the configured log level (used by the migration CLI).
    """
    settings = get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_service_context,
        mask_contact_numbers,
        render_decimals,
        *_renderer(settings.log_format, settings.environment),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level or settings.log_level),
        force=True,
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
