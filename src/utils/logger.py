"""Logging infrastructure for the Smart Recipe Finder service.

Configured via environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_TYPE: text, json (default: text)

Every record carries the id of the HTTP request being served (empty outside
a request). The id lives in a context variable set by the request middleware,
so code below the routes logs without passing it around.
"""

import json
import logging
import os
import sys
import uuid
from contextvars import ContextVar
from typing import Any

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    """Short random id, enough to correlate the lines of one request."""
    return uuid.uuid4().hex[:8]


def get_request_id() -> str:
    return request_id_var.get()


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


class RequestIdFilter(logging.Filter):
    """Attach the current request id to each record (explicit `extra=` wins)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = get_request_id()
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, request_id, exception."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", "")
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class RichTextFormatter(logging.Formatter):
    """Coloured console lines with an emoji per level and the request id in brackets."""

    RESET = "\033[0m"
    STYLES = {
        "DEBUG": ("\033[36m", "🔍"),
        "INFO": ("\033[32m", "ℹ️"),
        "WARNING": ("\033[33m", "⚠️"),
        "ERROR": ("\033[31m", "❌"),
        "CRITICAL": ("\033[31m", "❌"),
    }

    def format(self, record: logging.LogRecord) -> str:
        color, icon = self.STYLES.get(record.levelname, (self.RESET, ""))
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        request_id = getattr(record, "request_id", "")
        prefix = f"[{request_id}] " if request_id else ""

        line = f"{color}{icon} {timestamp} {record.levelname:<8} {record.name:<20} {prefix}{record.getMessage()}{self.RESET}"
        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """Return a configured logger; repeated calls reuse the existing handler.

    Args:
        name: Logger name.

    Returns:
        Logger writing to stdout in the LOG_TYPE format at LOG_LEVEL.
    """
    logger_instance = logging.getLogger(name)
    if logger_instance.handlers:
        return logger_instance

    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    formatter = JSONFormatter() if os.getenv("LOG_TYPE", "text").lower() == "json" else RichTextFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())

    logger_instance.setLevel(level)
    logger_instance.addHandler(handler)
    logger_instance.propagate = False
    return logger_instance


logger = get_logger("recipe_finder")

# Third-party clients log every request at INFO
for _noisy in ("google.genai", "httpx", "aiohttp"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
