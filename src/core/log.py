"""Logging setup. Modules just call logging.getLogger(__name__); this attaches the one handler to the package root."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
ROOT_LOGGER_NAME = "src"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Install a single stream handler on the package logger. Safe to call more than once."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if not any(getattr(handler, "_chess_handler", False) for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._chess_handler = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
