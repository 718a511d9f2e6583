"""Public scroll engine boundary contracts."""

from scrollkit.api.geometry import CallbackGeometry, GeometrySource
from scrollkit.api.logging import ScrollLoggingConfig
from scrollkit.api.scheduling import FrameCallback, FrameScheduler
from scrollkit.api.types import (
    InertiaDomain,
    PageDirection,
    ScrollAlign,
    ScrollObserver,
    TrackClickDirection,
    WheelDeltaMode,
)

__all__ = [
    "CallbackGeometry",
    "FrameCallback",
    "FrameScheduler",
    "GeometrySource",
    "InertiaDomain",
    "PageDirection",
    "ScrollAlign",
    "ScrollLoggingConfig",
    "ScrollObserver",
    "TrackClickDirection",
    "WheelDeltaMode",
]
