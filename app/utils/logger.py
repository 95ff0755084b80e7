"""
Module logger helper.

Loggers share the handlers configured by ``setup_logging``. Modules imported
before logging is configured (and standalone scripts) get a shared stdout
fallback handler, which ``setup_logging`` detaches again.
"""

import logging
import sys
from app.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

FALLBACK_HANDLER = logging.StreamHandler(sys.stdout)
FALLBACK_HANDLER.setFormatter(logging.Formatter(LOG_FORMAT))


def get_logger(name: str) -> logging.Logger:
    """Get a module logger, attaching the stdout fallback when nothing handles it yet."""
    logger = logging.getLogger(name)

    if not logger.hasHandlers():
        logger.addHandler(FALLBACK_HANDLER)
        log_level = get_settings().LOG_LEVEL
        logger.setLevel(log_level if log_level in logging._nameToLevel else logging.INFO)

    return logger


def detach_fallback_handlers() -> None:
    """Remove the fallback handler from every logger so configured handlers take over."""
    for logger in logging.root.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and FALLBACK_HANDLER in logger.handlers:
            logger.removeHandler(FALLBACK_HANDLER)
