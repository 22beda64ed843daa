"""
Structured logging with per-invocation context.

Key Features:
- Standard logger.info() calls pick up the current tool context automatically
- ContextVar-based propagation: safe across the await inside a tool call
- Dual output modes: JSON for production, human-readable for development
"""

import json
import logging
import os
import re
import sys
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import IO, Any

log_context: ContextVar[dict[str, Any] | None] = ContextVar("log_context", default=None)

# ANSI escape code pattern (matches \033[...m or \x1b[...m)
ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;]*m|\033\[[0-9;]*m")

# Extra attributes copied from a record into JSON output when present
_EXTRA_FIELDS = ("event", "endpoint", "status_code", "payload_keys")


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI escape codes from text for clean JSON logging."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Produces machine-parseable log entries with:
    - Standard fields (timestamp, level, logger, message)
    - Invocation context (tool, ...)
    - Known extra fields (event, endpoint, status_code, payload_keys)
    """

    def format(self, record: logging.LogRecord) -> str:
        context = log_context.get() or {}

        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": strip_ansi_codes(record.getMessage()),
        }
        log_entry.update(context)

        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_entry[name] = value

        if record.exc_info:
            log_entry["exception"] = strip_ansi_codes(self.formatException(record.exc_info))

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Colorized single-line formatter for local development."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        context = log_context.get() or {}
        tool = context.get("tool", "")
        context_prefix = f"[tool:{tool}] " if tool else ""

        color = self.COLORS.get(record.levelname, "")
        level = f"{record.levelname:<8}"

        event = ""
        record_event = getattr(record, "event", None)
        if record_event is not None:
            event = f" [{record_event}]"

        message = f"{color}[{level}]{self.RESET} {context_prefix}{record.getMessage()}{event}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def configure_logging(
    level: str = "INFO",
    format: str = "auto",  # "json", "human", or "auto"
    stream: IO[str] | None = None,
) -> None:
    """
    Configure logging for the server process.

    Call once at startup.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format:
            - "json": Machine-parseable JSON (for production)
            - "human": Human-readable with colors (for development)
            - "auto": JSON if LOG_FORMAT=json or ENV=production, else human
        stream: Output stream (defaults to stderr, which keeps stdout clean
            for the STDIO transport)
    """
    if format == "auto":
        log_format_env = os.getenv("LOG_FORMAT", "").lower()
        env = os.getenv("ENV", "development").lower()
        format = "json" if log_format_env == "json" or env == "production" else "human"

    formatter: logging.Formatter
    if format == "json":
        formatter = StructuredFormatter()
    else:
        formatter = HumanReadableFormatter()

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())

    # httpx logs every request at INFO; route it through our handler only
    for logger_name in ("httpx", "httpcore"):
        third_party = logging.getLogger(logger_name)
        third_party.handlers.clear()
        third_party.propagate = True


def set_log_context(**kwargs: Any) -> None:
    """
    Add fields to the log context of the current invocation.

    The context lives in a ContextVar, so it follows the coroutine across
    awaits and never leaks into concurrently running invocations.
    """
    current = log_context.get() or {}
    log_context.set({**current, **kwargs})


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current log context (empty dict if unset)."""
    context = log_context.get() or {}
    return context.copy()


def clear_log_context() -> None:
    """Clear the log context."""
    log_context.set(None)


__all__ = [
    "StructuredFormatter",
    "HumanReadableFormatter",
    "configure_logging",
    "set_log_context",
    "get_log_context",
    "clear_log_context",
]
