"""
Structured logging configuration for nexturno.

Provides JSON-formatted logs with a session_id field so lines from one
session can be correlated.

Environment Variables:
    NEXTURNO_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: WARNING
    NEXTURNO_LOG_FORMAT: Log format (json, text) - default: text

Usage:
    from nexturno.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, session_id="3fa2c91b07de")
    logger.info("Transition applied")
"""

import logging
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class SessionIdFilter(logging.Filter):
    """
    Logging filter that adds session_id to all log records.

    Ensures all records have a session_id field, even if not logged through
    a LoggerAdapter.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session_id"):
            record.session_id = "N/A"  # type: ignore
        return True


def setup_logging(level: str = "WARNING", log_format: str = "text") -> None:
    """
    Configure the root logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown -> WARNING)
        log_format: "json" for python-json-logger output, anything else for text

    Logs go to stderr so command output on stdout stays parseable.
    """
    lvl = LEVELS.get(level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(lvl)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(lvl)
    handler.addFilter(SessionIdFilter())

    if log_format.lower() == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(session_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [session_id=%(session_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str, session_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger carrying session_id for correlation.

    Example:
        logger = get_logger(__name__, session_id="3fa2c91b07de")
        logger.warning("Transition rejected")
        # Output (JSON): {"timestamp": "...", "level": "WARNING", "message": "Transition rejected", "session_id": "3fa2c91b07de"}
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"session_id": session_id or "N/A"})
