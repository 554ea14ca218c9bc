"""
Local Structured Logging

Every mutation of the store is logged as a structured event
(`property_added`, `expense_deleted`, ...) so that a user's session can be
reconstructed from the console output when something looks wrong.

Call `configure_logging()` once at startup. Modules obtain their logger with
`structlog.get_logger(__name__)`.
"""

import logging
import sys
from typing import Optional

import structlog

from src.config import get_settings


def resolve_log_level(level: Optional[str] = None) -> str:
    """Explicit level first, then DEBUG in debug mode, then `log_level`."""
    if level:
        return level.upper()
    app = get_settings().app
    return "DEBUG" if app.debug_mode else app.log_level


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        level: Minimum level name. Defaults to the app settings
               (see `resolve_log_level`).
    """
    level_name = resolve_log_level(level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level_name, logging.INFO),
    )

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
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
