"""Logging configuration for DocChat."""

import logging
import sys

from loguru import logger


class _InterceptHandler(logging.Handler):
    """Forward records from stdlib loggers (httpx, openai, retry) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(log_level: str = "INFO") -> None:
    """Route all DocChat logging to stderr at the given level.

    Args:
        log_level: Minimum level name, e.g. "DEBUG" or "INFO"
    """
    level = log_level.upper()
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
    )
    logging.basicConfig(handlers=[_InterceptHandler()], level=getattr(logging, level, logging.INFO), force=True)
