"""Logger helpers shared by every formmark module."""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "formmark"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``formmark`` namespace.

    Module loggers are created with ``get_logger(__name__)``; names outside
    the package are nested under ``formmark`` so one call to
    :func:`configure_logging` controls all of them.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: str | int = "WARNING") -> logging.Logger:
    """Attach a stream handler to the ``formmark`` logger and set its level.

    Safe to call repeatedly: only one handler is ever installed.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if not any(getattr(h, "_formmark_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._formmark_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
