# app/core/logging_config.py
"""
Process-wide logging setup with an explicit lifecycle.

    setup_logging(settings)   -> called once from the FastAPI lifespan startup
    shutdown_logging()        -> flushes and closes the handlers we opened

Components never configure logging themselves; they receive a
`logging.Logger` at construction (see ProductService / SubscriptionService).
"""

import logging

from app.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Handlers opened by setup_logging, closed by shutdown_logging
_handlers: list[logging.Handler] = []


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Configure the root logger from settings and return the app logger.

    - LOG_LEVEL: root level (default INFO)
    - LOG_FILE: optional file to append to, in addition to stderr
    """
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)

    if settings.LOG_FILE and not _handlers:
        file_handler = logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)
        _handlers.append(file_handler)

    return logging.getLogger("app")


def shutdown_logging() -> None:
    """Flush and detach every handler opened by setup_logging."""
    root = logging.getLogger()
    while _handlers:
        handler = _handlers.pop()
        handler.flush()
        root.removeHandler(handler)
        handler.close()

    for handler in root.handlers:
        handler.flush()
