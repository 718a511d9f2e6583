"""Logging pipeline for scroll engine diagnostics.

Engine modules only call ``logging.getLogger("scrollkit.<area>")``; hosts and
the ``scrollkit`` command decide where records go. File output is streamed
through a queue listener so inertia ticks never block on disk writes.
"""

from __future__ import annotations

import json
import logging
import os
import queue
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path

from scrollkit.api.logging import ScrollLoggingConfig

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_QUEUE_LISTENER: QueueListener | None = None

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra=`` values are kept under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {
            key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES
        }
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with the package-prefixed override first."""
    value = os.getenv("SCROLLKIT_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def configure_scroll_logging(config: ScrollLoggingConfig) -> None:
    """Replace root handlers with a console handler and an optional queued file handler."""
    global _QUEUE_LISTENER

    shutdown_scroll_logging()
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(_formatter(config.console_format))
    if not config.file_path:
        root.addHandler(console)
        return

    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
    file_handler.setFormatter(_formatter(config.file_format))

    records: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    root.addHandler(QueueHandler(records))
    _QUEUE_LISTENER = QueueListener(records, console, file_handler, respect_handler_level=True)
    _QUEUE_LISTENER.start()


def shutdown_scroll_logging() -> None:
    """Drain and stop the file listener if one is running, then close its handlers."""
    global _QUEUE_LISTENER

    if _QUEUE_LISTENER is None:
        return
    _QUEUE_LISTENER.stop()
    for handler in _QUEUE_LISTENER.handlers:
        handler.close()
    _QUEUE_LISTENER = None


def setup_scroll_logging() -> None:
    """Install env-resolved console logging unless the host already configured handlers."""
    if logging.getLogger().handlers:
        return
    configure_scroll_logging(ScrollLoggingConfig(level_name=resolve_log_level_name()))


@contextmanager
def scroll_logging(config: ScrollLoggingConfig) -> Iterator[None]:
    """Configure logging for the duration of a block and flush file output on exit."""
    configure_scroll_logging(config)
    try:
        yield
    finally:
        shutdown_scroll_logging()


def _formatter(kind: str) -> logging.Formatter:
    if kind.strip().lower() == "json":
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT)
