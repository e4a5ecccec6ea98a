"""Logging setup for NotionMail.

Everything under the ``notion_mail`` logger is written as JSON lines to
``app.log``. Records logged through ``log_event`` also land in ``events.log``.
The terminal only shows warnings and errors, rendered by rich, so log output
never interleaves with the prompts.
"""

import json
import logging
import re
import time
from datetime import datetime, timezone
from functools import wraps
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from rich.logging import RichHandler

from .paths import LOGS_DIR

ROOT_LOGGER_NAME = "notion_mail"

REDACTED = "[REDACTED]"

# (file name, max bytes, backups)
APP_LOG = ("app.log", 5 * 1024 * 1024, 5)
EVENTS_LOG = ("events.log", 2 * 1024 * 1024, 3)


def _parse_level(level: str) -> int:
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Invalid logging level: {level}")
    return value


def _ensure_log_dir() -> Path:
    from .errors import FileSystemError

    try:
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemError(f"Failed to create log directory: {LOGS_DIR}") from e
    return LOGS_DIR


## Formatting and redaction


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    EXTRA_FIELDS = ("event_type", "context")

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in self.EXTRA_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class SecretMasker:
    """Redacts Notion integration tokens and other credentials."""

    PATTERNS = (
        re.compile(r"\b((?:secret|ntn)_)[A-Za-z0-9]{8,}\b"),
        re.compile(r"(bearer\s+)[^\s\"',}]+", re.IGNORECASE),
        re.compile(r"((?:api[_-]?key|token)[\"']?\s*[:=]\s*[\"']?)[^\s\"',}]+", re.IGNORECASE),
    )

    SENSITIVE_KEYS = frozenset({
        "api_key",
        "apikey",
        "auth",
        "authorization",
        "notion_api_key",
        "secret",
        "token",
    })

    def mask_text(self, text: str) -> str:
        for pattern in self.PATTERNS:
            text = pattern.sub(lambda m: m.group(1) + REDACTED, text)
        return text

    def mask_mapping(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return {key: self._mask_value(key, value) for key, value in data.items()}

    def _mask_value(self, key: Any, value: Any) -> Any:
        if str(key).lower() in self.SENSITIVE_KEYS:
            return REDACTED
        if isinstance(value, dict):
            return self.mask_mapping(value)
        if isinstance(value, str):
            return self.mask_text(value)
        return value


class RedactingFilter(logging.Filter):
    """Masks secrets in the rendered message and in the ``context`` extra."""

    def __init__(self, masker: Optional[SecretMasker] = None):
        super().__init__()
        self.masker = masker or SecretMasker()

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self.masker.mask_text(record.getMessage())
        record.args = None

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            record.context = self.masker.mask_mapping(context)

        return True


## Handler management


class LogManager:
    """Owns the handlers attached to the ``notion_mail`` logger."""

    def __init__(self, log_level: str = "INFO"):
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self.root_logger.setLevel(logging.DEBUG)

        self.console_handler = RichHandler(show_path=False, markup=False, rich_tracebacks=True)
        self.console_handler.setFormatter(logging.Formatter("%(message)s"))

        log_dir = _ensure_log_dir()
        self.app_handler = self._rotating_handler(log_dir, *APP_LOG)
        self.events_handler = self._rotating_handler(log_dir, *EVENTS_LOG)
        self.events_handler.setLevel(logging.INFO)
        self.events_handler.addFilter(lambda record: hasattr(record, "event_type"))

        redact = RedactingFilter()
        self.root_logger.handlers.clear()
        for handler in (self.console_handler, self.app_handler, self.events_handler):
            handler.addFilter(redact)
            self.root_logger.addHandler(handler)

        self.set_level(log_level)

    @staticmethod
    def _rotating_handler(log_dir: Path, filename: str, max_bytes: int, backups: int) -> RotatingFileHandler:
        from .errors import FileSystemError

        try:
            handler = RotatingFileHandler(
                log_dir / filename, maxBytes=max_bytes, backupCount=backups, encoding="utf-8"
            )
        except OSError as e:
            raise FileSystemError(f"Failed to open log file {filename}: {e}") from e

        handler.setFormatter(JSONFormatter())
        return handler

    def set_level(self, level: str) -> None:
        """Apply the configured level. The console never shows less than WARNING."""
        threshold = _parse_level(level)
        self.app_handler.setLevel(threshold)
        self.console_handler.setLevel(max(threshold, logging.WARNING))


_manager: Optional[LogManager] = None


def init_logging(log_level: str = "INFO") -> LogManager:
    """Install the handlers on first call; later calls only change the level."""
    global _manager

    if _manager is None:
        _manager = LogManager(log_level)
    else:
        _manager.set_level(log_level)

    return _manager


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``notion_mail`` hierarchy."""
    if not name or name == ROOT_LOGGER_NAME:
        logger_name = ROOT_LOGGER_NAME
    elif name.startswith(f"{ROOT_LOGGER_NAME}."):
        logger_name = name
    else:
        logger_name = f"{ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(logger_name)


def log_event(event_type: str, message: str, **context) -> None:
    """Record a domain event such as ``message_sent``."""
    logging.getLogger(ROOT_LOGGER_NAME).info(
        message, extra={"event_type": event_type, "context": context}
    )


## Call tracing

_trace = logging.getLogger(f"{ROOT_LOGGER_NAME}.trace")


def _trace_exit(name: str, started: float, error: Optional[BaseException] = None) -> None:
    elapsed = time.perf_counter() - started
    if error is None:
        _trace.debug(f"<- {name} ({elapsed:.3f}s)")
    else:
        _trace.debug(f"<- {name} raised {type(error).__name__} after {elapsed:.3f}s")


def log_call(func):
    """Trace entry, exit and duration of a function at DEBUG."""
    name = f"{func.__module__}.{func.__qualname__}"

    @wraps(func)
    def wrapper(*args, **kwargs):
        started = time.perf_counter()
        _trace.debug(f"-> {name}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            _trace_exit(name, started, e)
            raise
        _trace_exit(name, started)
        return result

    return wrapper


def async_log_call(func):
    """``log_call`` for coroutine functions."""
    name = f"{func.__module__}.{func.__qualname__}"

    @wraps(func)
    async def wrapper(*args, **kwargs):
        started = time.perf_counter()
        _trace.debug(f"-> {name}")
        try:
            result = await func(*args, **kwargs)
        except Exception as e:
            _trace_exit(name, started, e)
            raise
        _trace_exit(name, started)
        return result

    return wrapper
