from __future__ import annotations

import pytest

from scrollkit.ui_runtime.track import is_within_track, thumb_span, track_click_direction


def test_thumb_span_offsets_by_track_start() -> None:
    span = thumb_span(100.0, 300.0, 100.0, 100.0, track_start=40.0)
    assert span.start == pytest.approx(40.0 + 100.0 / 3.0)
    assert span.end == pytest.approx(40.0 + 200.0 / 3.0)
    assert span.contains(80.0)
    assert not span.contains(20.0)


def test_thumb_span_fills_track_when_nothing_scrolls() -> None:
    span = thumb_span(300.0, 100.0, 80.0, 0.0, track_start=10.0)
    assert (span.start, span.end, span.size) == (10.0, 90.0, 80.0)


def test_track_click_direction() -> None:
    assert track_click_direction(5.0, 10.0, 20.0) == "up"
    assert track_click_direction(25.0, 10.0, 20.0) == "down"
    assert track_click_direction(10.0, 10.0, 20.0) == "none"


def test_is_within_track_inclusive() -> None:
    assert is_within_track(10.0, 10.0, 50.0)
    assert is_within_track(60.0, 10.0, 50.0)
    assert not is_within_track(60.5, 10.0, 50.0)
