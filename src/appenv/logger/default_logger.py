"""
Stream logger with session tracking.

Writes one formatted line per call to a text stream (stderr by default).
Handy in tests, where the stream can be an ``io.StringIO``.
"""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, TextIO

from .interface import Logger


class DefaultLogger(Logger):
    """Minimal logger writing to a stream.

    Example:
        buf = io.StringIO()
        logger = DefaultLogger(output=buf, include_timestamp=False)
        logger.info("Loaded env file", path="config/production.env")
    """

    def __init__(
        self,
        name: str = "appenv",
        output: TextIO = sys.stderr,
        include_timestamp: bool = True,
        level: str = "DEBUG",
    ):
        self._name = name
        self._session_id = str(uuid.uuid4())
        self._output = output
        self._include_timestamp = include_timestamp
        self._threshold = getattr(logging, level.upper(), logging.DEBUG)

    def get_session_id(self) -> str:
        return self._session_id

    def _format_message(self, level: int, message: str, **kwargs: Any) -> str:
        parts = []
        if self._include_timestamp:
            parts.append(datetime.now(timezone.utc).isoformat())
        parts.append(f"[{logging.getLevelName(level)}]")
        parts.append(f"[{self._name}]")
        parts.append(f"[session:{self._session_id[:8]}]")
        parts.append(message)
        if kwargs:
            parts.append("(" + " ".join(f"{k}={v}" for k, v in kwargs.items()) + ")")
        return " ".join(parts)

    def _log(self, level: int, message: str, **kwargs: Any) -> None:
        if level < self._threshold:
            return
        print(self._format_message(level, message, **kwargs), file=self._output, flush=True)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, **kwargs)
