"""
Structured logging configuration using structlog.

This module sets up structlog for JSON or console logging with context binding.

Library loggers hand their rendered events to the standard library logger of
the same name. The ``tweet_entities`` logger carries a NullHandler, so nothing
is written anywhere until the host application (or ``setup_logging``)
configures logging.
"""

import logging
import sys

import structlog

from .config import Settings, settings as default_settings


LIBRARY_LOGGER_NAME = "tweet_entities"

logging.getLogger(LIBRARY_LOGGER_NAME).addHandler(logging.NullHandler())


def setup_logging(config: Settings = default_settings) -> None:
    """
    Configure structlog for structured logging.

    Sets up processors for:
    - Level filtering against the standard library logger
    - Context variable merging
    - Log level addition
    - Exception info rendering
    - Timestamp addition
    - JSON or console rendering based on settings

    Rendered lines go to stderr through a handler on the ``tweet_entities``
    logger, so command output on stdout stays machine readable.

    Args:
        config: Settings to read the log level and renderer from
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if config.log_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    library_logger.handlers = [handler]
    library_logger.setLevel(config.log_level.upper())
    library_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a logger instance with the given name.

    The logger writes through the standard library logger ``name``; processors
    come from the current structlog configuration.

    Args:
        name: Logger name (usually __name__)

    Returns:
        structlog stdlib BoundLogger instance
    """
    return structlog.wrap_logger(
        logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger
    )
