"""
Logging Configuration for the Sales Insights Dashboard

structlog events are rendered by a stdlib ProcessorFormatter, so the API,
uvicorn, the dataset client and the CLI all write through one stderr
handler in one format (JSON for services, console for interactive use).
"""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.processors import JSONRenderer, TimeStamper
from structlog.stdlib import add_log_level, ProcessorFormatter

from src.config.settings import get_settings

# Loggers owned by uvicorn; routed to our handler instead of their own
SERVER_LOGGERS = ["uvicorn", "uvicorn.error", "uvicorn.access"]

# Per-request chatter from the dataset client's HTTP stack
NOISY_LOGGERS = ["httpx", "httpcore"]


def _shared_processors() -> List:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str):
    if log_format == "json":
        return JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure structured logging.

    Safe to call more than once; the root handler is replaced each time.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
        log_format: Override renderer ("json" or "console")
    """
    settings = get_settings()
    level = (log_level or settings.monitoring.log_level).upper()
    fmt = log_format or settings.monitoring.log_format
    numeric_level = getattr(logging, level, logging.INFO)

    shared_processors = _shared_processors()

    structlog.configure(
        processors=shared_processors + [ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stderr keeps CLI stdout clean for JSON output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(ProcessorFormatter(processor=_renderer(fmt), foreign_pre_chain=shared_processors))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(numeric_level)

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = [handler]
        server_logger.setLevel(numeric_level)
        server_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    structlog.get_logger(__name__).debug(
        "Logging configured",
        level=level,
        format=fmt,
        environment=settings.app_env,
    )


def get_logger(name: str):
    """Get a logger instance with the given name."""
    return structlog.get_logger(name)
