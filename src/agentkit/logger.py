"""
Structured JSON logging on structlog.

Every record is a single JSON object written to stdout (debug/info/warn) or
stderr (error):

    {"level": "info", "message": "...", "logger": "agentkit", ...fields, "timestamp": "2025-01-01T00:00:00.000000Z"}

Components receive a bound logger handle instead of reaching for a global;
build one at process start with configure_logging() and add fields with
.bind(). Each handle carries its own processors and level, so configuring
one never changes another.
"""

from __future__ import annotations

import logging
import sys
import traceback
from functools import lru_cache
from typing import Any

import structlog
from structlog.typing import EventDict, FilteringBoundLogger, WrappedLogger

StructuredLogger = FilteringBoundLogger

LEVEL_NAMES = {
    "debug": "debug",
    "info": "info",
    "warning": "warn",
    "warn": "warn",
    "error": "error",
    "exception": "error",
    "critical": "error",
}


def serialize_error(error: BaseException) -> dict[str, str]:
    """name/message/stack of an exception, as it appears in error records."""
    stack = "".join(
        traceback.format_exception(type(error), error, error.__traceback__)
    )
    return {
        "name": type(error).__name__,
        "message": str(error),
        "stack": stack.rstrip("\n"),
    }


# ── Processors ───────────────────────────────────────────────

def add_level(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["level"] = LEVEL_NAMES.get(method_name, method_name)
    return event_dict


def render_error(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Turn exc_info (an exception, or True for the one being handled) into an error field."""
    exc_info = event_dict.pop("exc_info", None)
    if exc_info is True:
        exc_info = sys.exc_info()[1]
    if isinstance(exc_info, BaseException):
        event_dict["error"] = serialize_error(exc_info)
    return event_dict


def order_fields(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """level and message first, timestamp last."""
    ordered = {
        "level": event_dict.pop("level"),
        "message": event_dict.pop("message"),
    }
    timestamp = event_dict.pop("timestamp")
    ordered.update(event_dict)
    ordered["timestamp"] = timestamp
    return ordered


PROCESSORS = [
    add_level,
    structlog.processors.EventRenamer("message"),
    render_error,
    structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
    order_fields,
    structlog.processors.JSONRenderer(),
]


# ── Output ───────────────────────────────────────────────────

class StdStreamLogger:
    """
    Final sink: error-level lines to stderr, everything else to stdout.

    Streams are looked up per write so a redirected sys.stdout/sys.stderr
    is honored.
    """

    def _write(self, stream_name: str, message: str) -> None:
        stream = getattr(sys, stream_name)
        stream.write(message + "\n")
        stream.flush()

    def msg(self, message: str) -> None:
        self._write("stdout", message)

    def err(self, message: str) -> None:
        self._write("stderr", message)

    debug = info = warning = warn = msg
    error = exception = critical = err


def configure_logging(level: str = "INFO", name: str = "agentkit") -> StructuredLogger:
    """Build a JSON logger handle filtering below level, tagged with its name."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    return structlog.wrap_logger(
        StdStreamLogger(),
        processors=PROCESSORS,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        cache_logger_on_first_use=True,
    ).bind(logger=name)


@lru_cache(maxsize=1)
def default_logger() -> StructuredLogger:
    """Process-wide fallback handle for callers that do not inject one."""
    return configure_logging()


__all__ = [
    "StructuredLogger",
    "StdStreamLogger",
    "configure_logging",
    "default_logger",
    "serialize_error",
]
