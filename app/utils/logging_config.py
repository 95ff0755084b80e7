"""
Logging configuration for the Matchmaking API.

Builds a single ``dictConfig`` so every module logger (obtained through
``app.utils.logger.get_logger``) shares the same handlers and format.
"""
import logging
import logging.config
import sys
from pathlib import Path
from typing import Dict, Any
from app.config import get_settings
from app.utils.logger import LOG_FORMAT, detach_fallback_handlers

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"


def get_logging_config() -> Dict[str, Any]:
    """Get logging configuration for the current settings."""
    settings = get_settings()
    log_level = settings.LOG_LEVEL if settings.LOG_LEVEL in logging._nameToLevel else "INFO"

    config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": LOG_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "detailed": {
                "format": DETAILED_FORMAT,
                "datefmt": "%Y-%m-%d %H:%M:%S"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "standard",
                "stream": sys.stdout
            }
        },
        "loggers": {
            "app": {
                "level": log_level,
                "propagate": True
            },
            "uvicorn": {
                "level": "INFO"
            },
            "fastapi": {
                "level": "INFO"
            },
            # Reduce noise from external libraries
            "sqlalchemy": {
                "level": "WARNING"
            },
            "httpx": {
                "level": "WARNING"
            }
        },
        "root": {
            "level": log_level,
            "handlers": ["console"]
        }
    }

    # Add rotating file handler if a log file is specified
    if settings.LOG_FILE:
        Path(settings.LOG_FILE).parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": log_level,
            "formatter": "detailed",
            "filename": settings.LOG_FILE,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5
        }
        config["root"]["handlers"].append("file")

    return config


def setup_logging() -> logging.Logger:
    """Apply the logging configuration."""
    logging.config.dictConfig(get_logging_config())
    detach_fallback_handlers()

    logger = logging.getLogger("app")
    logger.info("Logging configuration initialized")
    return logger
