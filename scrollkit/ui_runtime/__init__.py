"""Scroll geometry, list viewport and engine helpers."""

from scrollkit.ui_runtime.list_viewport import (
    first_fully_visible_index,
    is_item_visible,
    last_fully_visible_index,
    next_page_down_index,
    next_page_up_index,
    visible_range,
    visible_slice,
)
from scrollkit.ui_runtime.metrics import ThumbMetrics, measure_thumb
from scrollkit.ui_runtime.scroll_engine import ScrollEngine
from scrollkit.ui_runtime.track import (
    ThumbSpan,
    is_within_track,
    thumb_span,
    track_click_direction,
)
from scrollkit.ui_runtime.wheel import InertiaStep, item_inertia_step, px_inertia_step

__all__ = [
    "InertiaStep",
    "ScrollEngine",
    "ThumbMetrics",
    "ThumbSpan",
    "first_fully_visible_index",
    "is_item_visible",
    "is_within_track",
    "item_inertia_step",
    "last_fully_visible_index",
    "measure_thumb",
    "next_page_down_index",
    "next_page_up_index",
    "px_inertia_step",
    "thumb_span",
    "track_click_direction",
    "visible_range",
    "visible_slice",
]
