"""Centralized logging setup and structured DEBUG trace helpers.

Modules log through ``logging.getLogger(__name__)``. DEBUG traces carry a
flat ``extra`` payload built by :func:`extra_context` so every trace line
has the same event/component/action/outcome vocabulary.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_MARKER = "_nodecompat_handler"


class _ContextFormatter(logging.Formatter):
    """Append structured context fields to DEBUG records."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = getattr(record, "context_fields", None)
        if record.levelno <= logging.DEBUG and context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{base} {pairs}"
        return base


def configure_logging(level: Optional[str] = None) -> None:
    """Install the console handler on the root logger once.

    The level comes from ``level`` when given, otherwise from the
    ``NODECOMPAT_LOG_LEVEL`` environment variable, defaulting to INFO.
    """
    root = logging.getLogger()
    level_name = (level or os.environ.get(Constants.ENV_LOG_LEVEL) or "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if any(getattr(h, _HANDLER_MARKER, False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(_ContextFormatter(Constants.LOG_FORMAT))
    setattr(handler, _HANDLER_MARKER, True)
    root.addHandler(handler)


def add_file_handler(path: str) -> logging.Handler:
    """Mirror log output into ``path``."""
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(_ContextFormatter(Constants.LOG_FILE_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when ``logger`` would emit DEBUG records."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured trace.

    None values are dropped so traces stay compact.
    """
    return {"context_fields": {k: v for k, v in fields.items() if v is not None}}


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 3)
