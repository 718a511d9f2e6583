"""Stateless scrollbar geometry formulas.

Every function accepts transient layout values (zero sizes, content smaller
than the viewport) and answers with clamped defaults instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MIN_THUMB_SIZE = 12.0


@dataclass(frozen=True, slots=True)
class ThumbMetrics:
    """Thumb rendering snapshot for one scroll position."""

    size: float
    offset: float
    travel_size: float
    percent: float
    scroll_ratio: float
    is_scrolling_needed: bool


def clamp(value: float, low: float, high: float) -> float:
    """Clamp `value` into `[low, high]`."""
    return max(low, min(value, high))


def scroll_size(viewport_size: float, content_size: float) -> float:
    return max(content_size, viewport_size)


def max_scroll_offset(viewport_size: float, content_size: float) -> float:
    return max(0.0, content_size - viewport_size)


def is_scrolling_needed(viewport_size: float, content_size: float) -> bool:
    return content_size > viewport_size


def scroll_ratio(viewport_size: float, content_size: float, scroll_offset: float) -> float:
    """Return scroll position normalized over the scrollable range."""
    if not is_scrolling_needed(viewport_size, content_size):
        return 0.0
    return scroll_offset / max_scroll_offset(viewport_size, content_size)


def offset_from_ratio(ratio: float, viewport_size: float, content_size: float) -> float:
    """Map a ratio (clamped into `[0, 1]`) back to a content offset."""
    if not is_scrolling_needed(viewport_size, content_size):
        return 0.0
    return clamp(ratio, 0.0, 1.0) * max_scroll_offset(viewport_size, content_size)


def thumb_size(
    viewport_size: float,
    content_size: float,
    track_size: float,
    min_thumb_size: float = DEFAULT_MIN_THUMB_SIZE,
) -> float:
    """Return thumb length, floored by `min_thumb_size`.

    The floor is not capped by the track, so a floor longer than the track
    yields a thumb longer than its track.
    """
    if content_size <= 0 or track_size == 0:
        return 0.0
    raw_size = min(1.0, viewport_size / content_size) * track_size
    return max(raw_size, min_thumb_size)


def thumb_travel_size(
    viewport_size: float,
    content_size: float,
    track_size: float,
    min_thumb_size: float = DEFAULT_MIN_THUMB_SIZE,
) -> float:
    size = thumb_size(viewport_size, content_size, track_size, min_thumb_size)
    return max(0.0, track_size - size)


def thumb_offset(
    viewport_size: float,
    content_size: float,
    track_size: float,
    scroll_offset: float,
    min_thumb_size: float = DEFAULT_MIN_THUMB_SIZE,
) -> float:
    """Return thumb start measured from the track start."""
    if not is_scrolling_needed(viewport_size, content_size):
        return 0.0
    ratio = scroll_ratio(viewport_size, content_size, scroll_offset)
    return ratio * thumb_travel_size(viewport_size, content_size, track_size, min_thumb_size)


def thumb_percent(
    viewport_size: float,
    content_size: float,
    track_size: float,
    scroll_offset: float,
    min_thumb_size: float = DEFAULT_MIN_THUMB_SIZE,
) -> float:
    """Return thumb offset as a percentage of the thumb's own length."""
    if not is_scrolling_needed(viewport_size, content_size):
        return 0.0
    size = thumb_size(viewport_size, content_size, track_size, min_thumb_size)
    if size <= 0:
        return 0.0
    offset = thumb_offset(viewport_size, content_size, track_size, scroll_offset, min_thumb_size)
    return offset / size * 100.0


def track_to_scroll_factor(
    viewport_size: float,
    content_size: float,
    track_size: float,
    min_thumb_size: float = DEFAULT_MIN_THUMB_SIZE,
) -> float:
    """Return track-space pixels per content-space pixel."""
    if not is_scrolling_needed(viewport_size, content_size):
        return 0.0
    travel = thumb_travel_size(viewport_size, content_size, track_size, min_thumb_size)
    return travel / max_scroll_offset(viewport_size, content_size)


def thumb_offset_from_click(
    click_coord: float,
    track_start: float,
    thumb_length: float,
    travel_size: float,
) -> float:
    """Center the thumb on a track click and clamp it into its travel range."""
    desired = (click_coord - track_start) - thumb_length / 2.0
    return clamp(desired, 0.0, travel_size)


def offset_from_thumb_offset(
    thumb_start: float,
    travel_size: float,
    max_offset: float,
) -> float:
    """Map a thumb position in `[0, travel_size]` to a content offset."""
    if travel_size <= 0:
        return 0.0
    return thumb_start / travel_size * max_offset


def measure_thumb(
    viewport_size: float,
    content_size: float,
    track_size: float,
    scroll_offset: float,
    min_thumb_size: float = DEFAULT_MIN_THUMB_SIZE,
) -> ThumbMetrics:
    """Collect every thumb metric for one geometry snapshot."""
    return ThumbMetrics(
        size=thumb_size(viewport_size, content_size, track_size, min_thumb_size),
        offset=thumb_offset(viewport_size, content_size, track_size, scroll_offset, min_thumb_size),
        travel_size=thumb_travel_size(viewport_size, content_size, track_size, min_thumb_size),
        percent=thumb_percent(
            viewport_size, content_size, track_size, scroll_offset, min_thumb_size
        ),
        scroll_ratio=scroll_ratio(viewport_size, content_size, scroll_offset),
        is_scrolling_needed=is_scrolling_needed(viewport_size, content_size),
    )
