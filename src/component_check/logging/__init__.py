"""
Logging setup for component checks.

Standard library logging with a JSON or text formatter, the name of the
component under check and the current trace context on every record.
"""

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any

from opentelemetry import trace

DEFAULT_LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - [%(component_name)s] - [%(name)s] - %(message)s"
)

TRACE_LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - [%(component_name)s] - [%(trace_id)s:%(span_id)s] - "
    "[%(name)s] - %(message)s"
)

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}

DEFAULT_LOG_LEVEL = "INFO"
LOG_OFF_LEVEL = "OFF"

# LogRecord attributes that are not user-supplied extras
_RECORD_ATTRIBUTES = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "exc_info",
    "exc_text",
    "stack_info",
    "message",
    "component_name",
    "trace_id",
    "span_id",
}


class ComponentNameFilter(logging.Filter):
    """Inject the name of the component under check into log records."""

    def __init__(self, component_name: str = "-") -> None:
        super().__init__()
        self.component_name = component_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.component_name = getattr(record, "component", None) or self.component_name  # type: ignore[attr-defined]
        return True


class TraceContextFilter(logging.Filter):
    """Inject trace and span ids into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        current_span = trace.get_current_span()
        if current_span and current_span.is_recording():
            span_context = current_span.get_span_context()
            record.trace_id = format(span_context.trace_id, "032x")  # type: ignore[attr-defined]
            record.span_id = format(span_context.span_id, "016x")  # type: ignore[attr-defined]
        else:
            record.trace_id = "0" * 32  # type: ignore[attr-defined]
            record.span_id = "0" * 16  # type: ignore[attr-defined]
        return True


class ComponentJSONFormatter(logging.Formatter):
    """One JSON object per record, extras included."""

    def __init__(self, include_trace: bool = True):
        super().__init__()
        self.include_trace = include_trace

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "component": getattr(record, "component_name", None),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_trace:
            trace_id = getattr(record, "trace_id", None)
            span_id = getattr(record, "span_id", None)
            if trace_id and span_id:
                log_entry["trace_id"] = trace_id
                log_entry["span_id"] = span_id

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES and key not in log_entry:
                log_entry[key] = value

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def setup_logging(
    component_name: str = "-",
    log_level: str | None = None,
    enable_json: bool | None = None,
    enable_trace: bool | None = None,
    stream: Any = None,
) -> logging.Handler:
    """Configure root logging for a component check.

    Arguments left as ``None`` fall back to ``LOG_LEVEL``, ``LOG_FORMAT``
    (``json`` or ``text``) and ``ENABLE_TRACE_LOGGING``, then to the defaults.
    Explicit arguments win over the environment. Returns the installed
    handler.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = log_level.upper()
    if enable_json is None:
        enable_json = os.getenv("LOG_FORMAT", "text").lower() == "json"
    if enable_trace is None:
        enable_trace = os.getenv("ENABLE_TRACE_LOGGING", "true").lower() == "true"

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_component_check", False):
            root.removeHandler(handler)

    if log_level == LOG_OFF_LEVEL:
        root.setLevel(logging.CRITICAL + 1)
    else:
        root.setLevel(LOG_LEVELS.get(log_level, logging.INFO))

    handler = logging.StreamHandler(stream or sys.stdout)
    handler._component_check = True  # type: ignore[attr-defined]

    if enable_json:
        formatter: logging.Formatter = ComponentJSONFormatter(include_trace=enable_trace)
    else:
        formatter = logging.Formatter(TRACE_LOG_FORMAT if enable_trace else DEFAULT_LOG_FORMAT)
    handler.setFormatter(formatter)

    handler.addFilter(ComponentNameFilter(component_name))
    if enable_trace:
        handler.addFilter(TraceContextFilter())

    root.addHandler(handler)
    return handler
