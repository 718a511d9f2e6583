"""Scroll position engine for custom scrollbars and virtualized lists."""

from scrollkit.api import CallbackGeometry, FrameScheduler, GeometrySource
from scrollkit.runtime import ManualFrameScheduler, ScrollTuning, load_scroll_tuning
from scrollkit.ui_runtime import ScrollEngine

__all__ = [
    "CallbackGeometry",
    "FrameScheduler",
    "GeometrySource",
    "ManualFrameScheduler",
    "ScrollEngine",
    "ScrollTuning",
    "load_scroll_tuning",
]
