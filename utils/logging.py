# utils/logging.py

"""Logging helpers for Forkpoint."""

from __future__ import annotations

import logging
import logging.handlers
import os

import structlog
from rich.console import Console
from rich.logging import RichHandler

from config import ForkpointSettings, settings as default_settings

logger = structlog.get_logger(__name__)


__all__ = ["setup_logging"]


def setup_logging(settings: ForkpointSettings = default_settings) -> None:
    """Configure structlog and standard logging for Forkpoint."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(settings.LOG_LEVEL_STR)

    if settings.LOG_FILE:
        try:
            log_dir = os.path.dirname(settings.LOG_FILE)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                settings.LOG_FILE,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                mode="a",
                encoding="utf-8",
            )
            file_handler.setFormatter(
                logging.Formatter(settings.LOG_FORMAT, datefmt=settings.LOG_DATE_FORMAT)
            )
            root_logger.addHandler(file_handler)
        except OSError as e:  # pragma: no cover - path issues
            logger.error("Error setting up file logger: %s", e)

    if settings.ENABLE_RICH_LOGGING:
        console_handler = RichHandler(
            console=Console(stderr=True),
            level=settings.LOG_LEVEL_STR,
            rich_tracebacks=True,
            show_path=False,
            markup=False,
            show_time=True,
            show_level=True,
        )
        root_logger.addHandler(console_handler)
    else:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(
            logging.Formatter(settings.LOG_FORMAT, datefmt=settings.LOG_DATE_FORMAT)
        )
        root_logger.addHandler(stream_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    log = structlog.get_logger()
    log.info(
        "Forkpoint logging setup complete.",
        log_level=logging.getLevelName(settings.LOG_LEVEL_STR),
    )
