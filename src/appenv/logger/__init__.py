"""
appenv logger module

Usage:
    from appenv.logger import get_logger, create_logger

    logger = get_logger()               # configured from APPENV_LOG_* vars
    logger = create_logger(level=logging.DEBUG, json_format=True)

Environment Variables:
    {PREFIX}_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default WARNING)
    {PREFIX}_LOG_FILE: Optional file path for log output
    {PREFIX}_LOG_JSON: "true" for JSON output

    Where {PREFIX} is derived from the logger name ("appenv" -> "APPENV").
"""

import logging
import os
from typing import Optional

from .default_logger import DefaultLogger
from .interface import Logger
from .structured_logger import JsonFormatter, StructuredLogger, TextFormatter


def _get_env_prefix(name: str) -> str:
    """Convert a logger name to its environment variable prefix.

    Examples:
        "appenv" -> "APPENV"
        "my-service.config" -> "MY_SERVICE_CONFIG"
    """
    return name.upper().replace("-", "_").replace(".", "_")


def create_logger(
    name: str = "appenv",
    level: Optional[int] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> Logger:
    """Create a ``StructuredLogger``; unset arguments come from the environment."""
    env_prefix = _get_env_prefix(name)

    if level is None:
        level_str = os.environ.get(f"{env_prefix}_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_str, logging.WARNING)

    if log_file is None:
        log_file = os.environ.get(f"{env_prefix}_LOG_FILE")

    if json_format is None:
        json_format = os.environ.get(f"{env_prefix}_LOG_JSON", "false").lower() == "true"

    return StructuredLogger(
        name=name,
        level=level,
        log_file=log_file,
        json_format=json_format,
    )


def get_logger(name: str = "appenv") -> Logger:
    """Get a logger configured from ``{PREFIX}_LOG_*`` environment variables."""
    return create_logger(name=name)


__all__ = [
    "Logger",
    "DefaultLogger",
    "StructuredLogger",
    "JsonFormatter",
    "TextFormatter",
    "create_logger",
    "get_logger",
]
