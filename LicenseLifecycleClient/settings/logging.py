"""
Logging configuration for structured logging.

This module configures JSON logging so client events (activation,
validation, update checks) can be shipped to a log aggregator.
"""

import sys

from pythonjsonlogger import jsonlogger

SERVICE_NAME = "license-lifecycle-client"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that tags every record with the client name."""

    def add_fields(self, log_record, record, message_dict):
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("service", SERVICE_NAME)
        log_record["level"] = record.levelname


def _app_logger(level: str) -> dict:
    return {
        "handlers": ["console"],
        "level": level,
        "propagate": False,
    }


def get_logging_config(environment: str = "development") -> dict:
    """
    Get logging configuration for the client.

    Args:
        environment: Environment name (development, production, test)

    Returns:
        Django logging configuration dictionary
    """
    log_level = "DEBUG" if environment == "development" else "INFO"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": CustomJsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s %(pathname)s %(lineno)d",
            },
            "simple": {
                "format": "{levelname} {message}",
                "style": "{",
            },
        },
        "filters": {},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": sys.stdout,
            },
        },
        "root": {
            "handlers": ["console"],
            "level": log_level,
        },
        "loggers": {
            "django": {
                "handlers": ["console"],
                "level": "INFO",
                "propagate": False,
            },
            "django.db.backends": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
            "core": _app_logger(log_level),
            "api": _app_logger(log_level),
            "licenses": _app_logger(log_level),
            "updates": _app_logger(log_level),
        },
    }
