"""
inputguard Logging Subsystem

Purpose
-------
Structured logging for validator activity. Library modules log through
``get_logger(__name__)``; applications decide where the records go.

Responsibilities
----------------
- Carry caller context (which form, which field, which batch) into every
  record via a ContextVar (`LogContext`, `set_log_context`).
- Lift validation fields (``validator``, ``kind``, ``raw_value``,
  ``error_code``, ``reason``) out of ``extra`` into a dedicated group.
- Render records as JSON (production) or as one console line per record,
  optionally colored by level (development).
- Configure the root logger on request (`setup_logging`).

Design Decisions
----------------
- inputguard is a library: importing it never installs handlers.
- JSON layout::

      {"timestamp", "level", "logger", "message",
       "context":    {component, operation, field, correlation_id},
       "validation": {validator, kind, raw_value, error_code, reason},
       "extra":      {anything else passed via extra=}}

  Empty groups are omitted.
- Reserved LogRecord attributes are derived from a blank LogRecord, so new
  interpreter attributes never leak into ``extra``.

Dependencies
------------
- inputguard.core.config.Config
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from datetime import datetime, timezone
from logging import Logger
from typing import Any, Dict, Optional, Tuple

from inputguard.core.config import Config


_log_context: ContextVar[Dict[str, Any]] = ContextVar("inputguard_log_context", default={})

CONTEXT_FIELDS: Tuple[str, ...] = ("component", "operation", "field", "correlation_id")
VALIDATION_FIELDS: Tuple[str, ...] = ("validator", "kind", "raw_value", "error_code", "reason")

_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime"}


# ============================================================================
# Config / Environment
# ============================================================================


@dataclass(frozen=True)
class LoggerConfig:
    """Logging settings derived from ``Config`` at call time."""

    CONSOLE_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    @property
    def log_level(self) -> int:
        return getattr(logging, str(Config.LOG_LEVEL).upper(), logging.INFO)

    @property
    def use_json(self) -> bool:
        if Config.LOG_JSON is None:
            return Config.is_production()
        return bool(Config.LOG_JSON)

    @property
    def use_colors(self) -> bool:
        return not self.use_json and Config.LOG_COLORS and sys.stdout.isatty()


LOGGER_CONFIG = LoggerConfig()


# ============================================================================
# Filters & Formatters
# ============================================================================


class ContextFilter(logging.Filter):
    """
    Attach the current log context and validation fields to each record.

    Validation fields already set through ``extra`` win; otherwise a
    ``validator`` stored in the context (``LogContext(validator=...)``) is
    applied. Missing fields are set to None so format strings never fail.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = _log_context.get()

        for name in CONTEXT_FIELDS:
            setattr(record, name, context.get(name))
        if record.component is None:
            record.component = record.name.split(".", 1)[0]

        for name in VALIDATION_FIELDS:
            if getattr(record, name, None) is None:
                setattr(record, name, context.get(name))

        return True


def _validation_suffix(record: logging.LogRecord) -> str:
    validator = getattr(record, "validator", None)
    kind = getattr(record, "kind", None)
    field = getattr(record, "field", None)
    parts = [part for part in (validator, kind) if part]
    if not parts:
        return ""
    where = f" field={field}" if field else ""
    return f" [{':'.join(parts)}{where}]"


class ConsoleFormatter(logging.Formatter):
    """Human-readable single line, with ``[validator:kind field=...]`` appended."""

    LEVEL_COLORS: Dict[int, str] = {
        logging.DEBUG: "\033[90m",
        logging.INFO: "\033[94m",
        logging.WARNING: "\033[93m",
        logging.ERROR: "\033[91m",
        logging.CRITICAL: "\033[1;91m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str, datefmt: str, use_colors: bool = False) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        line = super().format(record) + _validation_suffix(record)
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{line}{self.RESET}" if color else line


class JSONFormatter(logging.Formatter):
    """One JSON object per record; see the module docstring for the layout."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        groups = {
            "context": _pick(record, CONTEXT_FIELDS),
            "validation": _pick(record, VALIDATION_FIELDS),
            "extra": {
                key: value
                for key, value in vars(record).items()
                if key not in _RESERVED_ATTRS
                and key not in CONTEXT_FIELDS
                and key not in VALIDATION_FIELDS
                and not key.startswith("_")
            },
        }
        payload.update((name, group) for name, group in groups.items() if group)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=repr)


def _pick(record: logging.LogRecord, names: Tuple[str, ...]) -> Dict[str, Any]:
    values = {name: getattr(record, name, None) for name in names}
    return {name: value for name, value in values.items() if value is not None}


# ============================================================================
# Global Setup
# ============================================================================


def _build_console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOGGER_CONFIG.log_level)
    if LOGGER_CONFIG.use_json:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            ConsoleFormatter(
                fmt=LOGGER_CONFIG.CONSOLE_FORMAT,
                datefmt=LOGGER_CONFIG.DATE_FORMAT,
                use_colors=LOGGER_CONFIG.use_colors,
            )
        )
    handler.addFilter(ContextFilter())
    return handler


def setup_logging() -> None:
    """Install one console handler on the root logger. Safe to call repeatedly."""
    root = logging.getLogger()
    if getattr(root, "_inputguard_logging_initialized", False):
        return

    root.setLevel(LOGGER_CONFIG.log_level)
    root.handlers.clear()
    root.addHandler(_build_console_handler())
    root._inputguard_logging_initialized = True  # type: ignore[attr-defined]

    get_logger(__name__).info(
        "Logging initialized",
        extra={
            "log_level": logging.getLevelName(LOGGER_CONFIG.log_level),
            "json": LOGGER_CONFIG.use_json,
        },
    )


def shutdown_logging() -> None:
    root = logging.getLogger()
    if not getattr(root, "_inputguard_logging_initialized", False):
        return

    for handler in list(root.handlers):
        handler.flush()
        handler.close()
        root.removeHandler(handler)
    root._inputguard_logging_initialized = False  # type: ignore[attr-defined]


# ============================================================================
# Public API
# ============================================================================


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


class LogContext:
    """
    Attach caller context to every record logged inside the block.

    >>> with LogContext(component="signup", field="username", validator="length_range"):
    ...     validator.is_valid(value)

    Nested blocks inherit the outer context and override individual keys.
    """

    def __init__(
        self,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        field: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> None:
        self.values: Dict[str, Any] = {
            key: value
            for key, value in {
                "component": component,
                "operation": operation,
                "field": field,
                "correlation_id": correlation_id,
                **extra,
            }.items()
            if value is not None
        }
        self._token: Optional[Token[Dict[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        merged = {**_log_context.get(), **self.values}
        merged.setdefault("correlation_id", uuid.uuid4().hex[:8])
        self._token = _log_context.set(merged)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def set_log_context(**values: Any) -> None:
    """Merge ``values`` into the current context; None values are ignored."""
    current = dict(_log_context.get())
    current.update({key: value for key, value in values.items() if value is not None})
    _log_context.set(current)


def get_log_context() -> Dict[str, Any]:
    return dict(_log_context.get())


def clear_log_context() -> None:
    _log_context.set({})
