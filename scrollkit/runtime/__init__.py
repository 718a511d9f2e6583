"""Scroll runtime support: tuning, logging and frame scheduling."""

from scrollkit.runtime.config import ScrollTuning, load_scroll_tuning
from scrollkit.runtime.frames import ManualFrameScheduler
from scrollkit.runtime.logging import (
    JsonFormatter,
    configure_scroll_logging,
    resolve_log_level_name,
    scroll_logging,
    setup_scroll_logging,
    shutdown_scroll_logging,
)

__all__ = [
    "JsonFormatter",
    "ManualFrameScheduler",
    "ScrollTuning",
    "configure_scroll_logging",
    "load_scroll_tuning",
    "resolve_log_level_name",
    "scroll_logging",
    "setup_scroll_logging",
    "shutdown_scroll_logging",
]
