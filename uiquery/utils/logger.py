# uiquery/utils/logger.py
from __future__ import annotations

"""Logging
---------
Every module logs through `get_logger(__name__)`. Handlers hang off the
`uiquery` package logger only, so applications embedding the library keep
control of the root logger. Console output goes through rich on stderr;
JSON lines go to a rotating file when LOG_TO_FILE is set.
"""

import json
import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Iterator, Optional, Union

from rich.console import Console
from rich.logging import RichHandler

from uiquery.utils.config import LogLevel, Settings, get_settings

__all__ = [
    "get_logger",
    "set_log_level",
    "bind",
    "unbind",
    "bound",
]

PACKAGE_LOGGER = "uiquery"

_setup_lock = threading.Lock()
_handlers: list[logging.Handler] = []
_context: Dict[str, Any] = {}  # merged into every record as `context`


# ---------- Formatters ----------

class JsonFormatter(logging.Formatter):
    """One JSON object per line; bound context is nested under `context`."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            entry["context"] = dict(context)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


# ---------- Handlers ----------

def _console_handler(settings: Settings) -> logging.Handler:
    console = Console(
        stderr=True,
        force_jupyter=False,
        color_system="auto",
        no_color=not settings.COLORIZED_OUTPUT,
    )
    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        markup=False,  # locators routinely contain [brackets]
        omit_repeated_times=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _file_handler(settings: Settings) -> logging.Handler:
    settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(settings.LOG_FILE),
        maxBytes=2 * 1024 * 1024,
        backupCount=2,
        encoding="utf-8",
        delay=True,
    )
    handler.setFormatter(JsonFormatter())
    return handler


def _level_of(level: Union[LogLevel, str]) -> int:
    name = level.value if isinstance(level, LogLevel) else str(level).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def _setup() -> logging.Logger:
    """Attach handlers to the package logger the first time it is needed."""
    pkg = logging.getLogger(PACKAGE_LOGGER)
    if _handlers:
        return pkg

    with _setup_lock:
        if _handlers:
            return pkg

        settings = get_settings()
        level = _level_of(settings.LOG_LEVEL)

        handlers = [_console_handler(settings)]
        if settings.LOG_TO_FILE:
            handlers.append(_file_handler(settings))

        pkg.setLevel(level)
        for handler in handlers:
            handler.setLevel(level)
            pkg.addHandler(handler)
        _handlers.extend(handlers)
    return pkg


# ---------- Public API ----------

def get_logger(name: Optional[str] = None) -> logging.LoggerAdapter:
    """Logger for `name` (defaults to the package logger) carrying the bound context."""
    _setup()
    return logging.LoggerAdapter(logging.getLogger(name or PACKAGE_LOGGER), extra={"context": _context})


def set_log_level(level: Union[LogLevel, str]) -> None:
    pkg = _setup()
    value = _level_of(level)
    pkg.setLevel(value)
    for handler in _handlers:
        handler.setLevel(value)


def bind(**kwargs: Any) -> None:
    """Attach key/values (e.g. kind="field") to every subsequent record."""
    _context.update(kwargs)


def unbind(*keys: str) -> None:
    for key in keys:
        _context.pop(key, None)


@contextmanager
def bound(**kwargs: Any) -> Iterator[None]:
    """`bind` for the duration of a block."""
    bind(**kwargs)
    try:
        yield
    finally:
        unbind(*kwargs)
