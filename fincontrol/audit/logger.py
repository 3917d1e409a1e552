"""
Structured Logging

Every store mutation and every recovered failure is logged as a
structured event (snake_case event name plus key/value context).

The logger:
- Is configured once, at bootstrap, from AppSettings
- Never raises into the caller
- Renders JSON lines by default, console output for local debugging
"""

import logging
import sys
from typing import Optional

import structlog

from fincontrol.config import AppSettings


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Configure structlog on top of the standard library logging module.

    Safe to call more than once; the last call wins. Existing root
    handlers are kept.
    """
    settings = settings or AppSettings()
    level = getattr(logging, settings.log_level)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )
    # basicConfig is a no-op once handlers exist; the level must still apply
    logging.getLogger().setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_logs
        else structlog.dev.ConsoleRenderer()
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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None, **initial_context):
    """Return a structlog logger, optionally bound to initial context."""
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
