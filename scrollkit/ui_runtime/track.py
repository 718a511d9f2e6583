"""Track hit-testing helpers in the host's coordinate space."""

from __future__ import annotations

from dataclasses import dataclass

from scrollkit.api.types import TrackClickDirection
from scrollkit.ui_runtime.metrics import (
    DEFAULT_MIN_THUMB_SIZE,
    is_scrolling_needed,
    thumb_offset,
    thumb_size,
)


@dataclass(frozen=True, slots=True)
class ThumbSpan:
    """Thumb extent along the track axis."""

    start: float
    end: float
    size: float

    def contains(self, coord: float) -> bool:
        return self.start <= coord <= self.end


def thumb_span(
    viewport_size: float,
    content_size: float,
    track_size: float,
    scroll_offset: float,
    track_start: float,
    min_thumb_size: float = DEFAULT_MIN_THUMB_SIZE,
) -> ThumbSpan:
    """Return thumb start/end offset by `track_start`; a full track when nothing scrolls."""
    if not is_scrolling_needed(viewport_size, content_size):
        return ThumbSpan(start=track_start, end=track_start + track_size, size=track_size)
    size = thumb_size(viewport_size, content_size, track_size, min_thumb_size)
    start = track_start + thumb_offset(
        viewport_size, content_size, track_size, scroll_offset, min_thumb_size
    )
    return ThumbSpan(start=start, end=start + size, size=size)


def track_click_direction(
    coord: float, thumb_start: float, thumb_end: float
) -> TrackClickDirection:
    """Classify a track click relative to the thumb."""
    if coord < thumb_start:
        return "up"
    if coord > thumb_end:
        return "down"
    return "none"


def is_within_track(coord: float, track_start: float, track_size: float) -> bool:
    return track_start <= coord <= track_start + track_size
