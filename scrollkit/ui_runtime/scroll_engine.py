"""Stateful single-axis scroll engine for custom scrollbars and virtualized lists."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from contextlib import contextmanager

from scrollkit.api.geometry import GeometrySource
from scrollkit.api.scheduling import FrameScheduler
from scrollkit.api.types import (
    InertiaDomain,
    PageDirection,
    ScrollAlign,
    ScrollObserver,
    WheelDeltaMode,
)
from scrollkit.runtime.config import ScrollTuning
from scrollkit.ui_runtime import list_viewport, metrics, track, wheel

_LOG = logging.getLogger("scrollkit.engine")
_INERTIA_LOG = logging.getLogger("scrollkit.inertia")

_POSITION_TOLERANCE = 1e-6


class ScrollEngine:
    """Owns one axis' scroll offset and derives everything else on demand.

    Geometry is pulled from `geometry` on every access. The offset changes
    only through handlers, inertia ticks and explicit `scroll_offset` /
    `scroll_ratio` assignment; `on_scroll` fires only for the first two and
    only when the committed value differs from the previous one.
    """

    def __init__(
        self,
        geometry: GeometrySource,
        *,
        scheduler: FrameScheduler,
        on_scroll: ScrollObserver | None = None,
        tuning: ScrollTuning | None = None,
    ) -> None:
        resolved = tuning or ScrollTuning()
        self._geometry = geometry
        self._scheduler = scheduler
        self._on_scroll = on_scroll
        self._min_thumb_size = resolved.min_thumb_size
        self._min_velocity_px_step = resolved.min_velocity_px_step
        self._max_velocity_px_step = resolved.max_velocity_px_step
        self._min_velocity_item_step = resolved.min_velocity_item_step
        self._max_velocity_item_step = resolved.max_velocity_item_step
        self._inertia_decay = resolved.inertia_decay
        self._px_stop_threshold = resolved.px_stop_threshold
        self._item_stop_threshold = resolved.item_stop_threshold

        self._scroll_offset = 0.0
        self._px_velocity = 0.0
        self._item_velocity = 0.0
        self._frame_handle: int | None = None
        self._frame_generation = 0
        self._disposed = False

    # geometry

    @property
    def viewport_size(self) -> float:
        return self._geometry.viewport_size()

    @property
    def content_size(self) -> float:
        return self._geometry.content_size()

    @property
    def track_size(self) -> float:
        return self._geometry.track_size()

    @property
    def item_size(self) -> float:
        return list_viewport.normalize_item_size(self._geometry.item_size())

    @property
    def item_count(self) -> int:
        return self._geometry.item_count()

    # tuning

    @property
    def min_thumb_size(self) -> float:
        return self._min_thumb_size

    @min_thumb_size.setter
    def min_thumb_size(self, value: float) -> None:
        self._min_thumb_size = value

    @property
    def min_velocity_px_step(self) -> float:
        return self._min_velocity_px_step

    @min_velocity_px_step.setter
    def min_velocity_px_step(self, value: float) -> None:
        self._min_velocity_px_step = value

    @property
    def max_velocity_px_step(self) -> float:
        return self._max_velocity_px_step

    @max_velocity_px_step.setter
    def max_velocity_px_step(self, value: float) -> None:
        self._max_velocity_px_step = value

    @property
    def min_velocity_item_step(self) -> float:
        return self._min_velocity_item_step

    @min_velocity_item_step.setter
    def min_velocity_item_step(self, value: float) -> None:
        self._min_velocity_item_step = value

    @property
    def max_velocity_item_step(self) -> float:
        return self._max_velocity_item_step

    @max_velocity_item_step.setter
    def max_velocity_item_step(self, value: float) -> None:
        self._max_velocity_item_step = value

    @property
    def inertia_decay(self) -> float:
        return self._inertia_decay

    @inertia_decay.setter
    def inertia_decay(self, value: float) -> None:
        self._inertia_decay = metrics.clamp(value, 0.0, 1.0)

    # derived views

    @property
    def scroll_size(self) -> float:
        return metrics.scroll_size(self.viewport_size, self.content_size)

    @property
    def max_scroll_offset(self) -> float:
        return metrics.max_scroll_offset(self.viewport_size, self.content_size)

    @property
    def is_scrolling_needed(self) -> bool:
        return metrics.is_scrolling_needed(self.viewport_size, self.content_size)

    @property
    def scroll_offset(self) -> float:
        return self._scroll_offset

    @scroll_offset.setter
    def scroll_offset(self, value: float) -> None:
        self._scroll_offset = metrics.clamp(value, 0.0, self.max_scroll_offset)

    @property
    def scroll_ratio(self) -> float:
        return metrics.scroll_ratio(self.viewport_size, self.content_size, self._scroll_offset)

    @scroll_ratio.setter
    def scroll_ratio(self, ratio: float) -> None:
        self._scroll_offset = metrics.offset_from_ratio(
            ratio, self.viewport_size, self.content_size
        )

    @property
    def thumb_size(self) -> float:
        return metrics.thumb_size(
            self.viewport_size, self.content_size, self.track_size, self._min_thumb_size
        )

    @property
    def thumb_travel_size(self) -> float:
        return metrics.thumb_travel_size(
            self.viewport_size, self.content_size, self.track_size, self._min_thumb_size
        )

    @property
    def thumb_offset(self) -> float:
        return metrics.thumb_offset(
            self.viewport_size,
            self.content_size,
            self.track_size,
            self._scroll_offset,
            self._min_thumb_size,
        )

    @property
    def thumb_percent(self) -> float:
        return metrics.thumb_percent(
            self.viewport_size,
            self.content_size,
            self.track_size,
            self._scroll_offset,
            self._min_thumb_size,
        )

    @property
    def track_to_scroll_factor(self) -> float:
        return metrics.track_to_scroll_factor(
            self.viewport_size, self.content_size, self.track_size, self._min_thumb_size
        )

    @property
    def is_at_start(self) -> bool:
        """True at the top of the range, and always when nothing scrolls."""
        limit = self.max_scroll_offset
        if limit <= 0:
            return True
        return self._scroll_offset <= limit * _POSITION_TOLERANCE

    @property
    def is_at_end(self) -> bool:
        """True at the bottom of the range; never when nothing scrolls."""
        limit = self.max_scroll_offset
        if limit <= 0:
            return False
        return abs(self._scroll_offset - limit) <= limit * _POSITION_TOLERANCE

    def thumb_metrics(self) -> metrics.ThumbMetrics:
        return metrics.measure_thumb(
            self.viewport_size,
            self.content_size,
            self.track_size,
            self._scroll_offset,
            self._min_thumb_size,
        )

    def thumb_span(self, track_start: float = 0.0) -> track.ThumbSpan:
        return track.thumb_span(
            self.viewport_size,
            self.content_size,
            self.track_size,
            self._scroll_offset,
            track_start,
            self._min_thumb_size,
        )

    # interaction handlers

    def handle_delta(self, delta: float) -> None:
        """Apply a thumb drag delta measured in track space."""
        if not self.is_scrolling_needed:
            return
        limit = self.max_scroll_offset
        factor = self.track_to_scroll_factor
        if factor > 0:
            target = self._scroll_offset + delta / factor
        elif delta > 0:
            target = limit
        elif delta < 0:
            target = 0.0
        else:
            target = self._scroll_offset
        self._commit(metrics.clamp(target, 0.0, limit))

    def handle_track_click(
        self,
        client_coord: float,
        track_start: float,
        *,
        snap_to_items: bool = False,
    ) -> None:
        """Jump so the thumb is centered on a track click."""
        if not self.is_scrolling_needed:
            return
        travel = self.thumb_travel_size
        limit = self.max_scroll_offset
        thumb_start = metrics.thumb_offset_from_click(
            client_coord, track_start, self.thumb_size, travel
        )
        target = metrics.offset_from_thumb_offset(thumb_start, travel, limit)
        if snap_to_items:
            item_size = self.item_size
            max_index = self.item_count - math.ceil(self.viewport_size / item_size)
            index = max(0, min(max_index, wheel.round_half_up(target / item_size)))
            target = index * item_size
        self._commit(metrics.clamp(target, 0.0, limit))

    def handle_track_page_click(self, client_coord: float, track_start: float) -> None:
        """Page one viewport toward a track click that misses the thumb."""
        if not self.is_scrolling_needed:
            return
        span = self.thumb_span(track_start)
        direction = track.track_click_direction(client_coord, span.start, span.end)
        if direction == "none":
            return
        self.handle_page_scroll("up" if direction == "up" else "down")

    def handle_page_scroll(self, direction: PageDirection) -> None:
        if not self.is_scrolling_needed:
            return
        step = self.viewport_size if direction == "down" else -self.viewport_size
        self._commit(metrics.clamp(self._scroll_offset + step, 0.0, self.max_scroll_offset))

    def scroll_item_into_view(self, index: int, align: ScrollAlign = "start") -> None:
        """Scroll so item `index` sits at the requested alignment."""
        if not self.is_scrolling_needed:
            return
        item_size = self.item_size
        viewport_size = self.viewport_size
        item_top = index * item_size
        item_bottom = item_top + item_size
        viewport_top = self._scroll_offset
        viewport_bottom = viewport_top + viewport_size

        target = self._scroll_offset
        if align == "start":
            target = item_top
        elif align == "end":
            target = item_bottom - viewport_size
        elif align == "center":
            target = item_top - (viewport_size - item_size) / 2.0
        elif item_top < viewport_top:
            target = item_top
        elif item_bottom > viewport_bottom:
            target = item_bottom - viewport_size
        self._commit(metrics.clamp(target, 0.0, self.max_scroll_offset))

    # visibility and paging queries

    def get_first_fully_visible_index(self) -> int:
        return list_viewport.first_fully_visible_index(
            self._scroll_offset, self.viewport_size, self.item_size
        )

    def get_last_fully_visible_index(self) -> int:
        return list_viewport.last_fully_visible_index(
            self._scroll_offset, self.viewport_size, self.item_size
        )

    def is_item_visible(self, index: int, fully: bool = True) -> bool:
        return list_viewport.is_item_visible(
            index, self._scroll_offset, self.viewport_size, self.item_size, fully=fully
        )

    def get_next_page_up_index(self, focused_index: int) -> int:
        return list_viewport.next_page_up_index(
            focused_index, self._scroll_offset, self.viewport_size, self.item_size
        )

    def get_next_page_down_index(self, focused_index: int) -> int:
        return list_viewport.next_page_down_index(
            focused_index, self._scroll_offset, self.viewport_size, self.item_size, self.item_count
        )

    def visible_range(self, overscan: int = 0) -> range:
        return list_viewport.visible_range(
            self._scroll_offset,
            self.viewport_size,
            self.item_size,
            self.item_count,
            overscan=overscan,
        )

    # wheel and inertia

    @property
    def px_velocity(self) -> float:
        return self._px_velocity

    @property
    def item_velocity(self) -> float:
        return self._item_velocity

    @property
    def is_inertia_running(self) -> bool:
        return self._frame_handle is not None

    def handle_wheel_px(self, delta: float, delta_mode: WheelDeltaMode = 0) -> None:
        """Accumulate pixel-domain wheel velocity and start the motion loop."""
        if self._disposed:
            return
        delta_px = wheel.wheel_px_delta(
            delta, delta_mode, item_size=self.item_size, viewport_size=self.viewport_size
        )
        self._px_velocity += wheel.velocity_px_step(
            delta_px,
            min_step=self._min_velocity_px_step,
            max_step=self._max_velocity_px_step,
        )
        self._ensure_inertia("px")

    def handle_wheel_items(self, delta: float, delta_mode: WheelDeltaMode = 0) -> None:
        """Accumulate item-domain wheel velocity and start the motion loop."""
        if self._disposed:
            return
        delta_items = wheel.wheel_item_delta(
            delta, delta_mode, item_size=self.item_size, viewport_size=self.viewport_size
        )
        self._item_velocity += wheel.velocity_item_step(
            delta_items,
            min_step=self._min_velocity_item_step,
            max_step=self._max_velocity_item_step,
        )
        self._ensure_inertia("item")

    def stop_inertia(self) -> None:
        """Cancel the motion loop and zero both velocity accumulators."""
        was_running = self._release_frame()
        self._px_velocity = 0.0
        self._item_velocity = 0.0
        if was_running:
            _INERTIA_LOG.debug("inertia_stop reason=cancelled offset=%.3f", self._scroll_offset)

    def dispose(self) -> None:
        """Stop motion, detach the observer and ignore further wheel input."""
        self.stop_inertia()
        self._on_scroll = None
        self._disposed = True

    # measurement reconciliation

    def reconcile_measurements(self, old_ratio: float) -> None:
        """Re-derive the offset from a ratio captured before a viewport/content resize."""
        self._scroll_offset = metrics.offset_from_ratio(
            old_ratio, self.viewport_size, self.content_size
        )
        if _LOG.isEnabledFor(logging.DEBUG):
            _LOG.debug(
                "measurements_reconciled ratio=%.6f offset=%.3f max_offset=%.3f",
                old_ratio,
                self._scroll_offset,
                self.max_scroll_offset,
            )

    @contextmanager
    def measurement_change(self) -> Iterator[None]:
        """Preserve the scroll ratio across geometry updates made inside the block."""
        old_ratio = self.scroll_ratio
        try:
            yield
        finally:
            self.reconcile_measurements(old_ratio)

    # internals

    def _commit(self, value: float) -> None:
        if value == self._scroll_offset:
            return
        self._scroll_offset = value
        if self._on_scroll is not None:
            self._on_scroll()

    def _ensure_inertia(self, domain: InertiaDomain) -> None:
        if self._frame_handle is not None:
            return
        if self._px_velocity == 0.0 and self._item_velocity == 0.0:
            return
        _INERTIA_LOG.debug(
            "inertia_start domain=%s px_velocity=%.3f item_velocity=%.3f",
            domain,
            self._px_velocity,
            self._item_velocity,
        )
        self._arm_frame()

    def _arm_frame(self) -> None:
        self._release_frame()
        generation = self._frame_generation
        self._frame_handle = self._scheduler.schedule(lambda: self._run_inertia_frame(generation))

    def _release_frame(self) -> bool:
        handle = self._frame_handle
        self._frame_handle = None
        self._frame_generation += 1
        if handle is None:
            return False
        self._scheduler.cancel(handle)
        return True

    def _run_inertia_frame(self, generation: int) -> None:
        if generation != self._frame_generation or self._frame_handle is None:
            return
        self._frame_handle = None

        try:
            if self._px_velocity != 0.0:
                self._tick_px()
            if generation == self._frame_generation and self._item_velocity != 0.0:
                self._tick_items()
        except BaseException:
            # A raising observer ends the gesture; leftover velocity must not leak
            # into the next wheel event.
            self.stop_inertia()
            _INERTIA_LOG.debug(
                "inertia_stop reason=observer_error offset=%.3f", self._scroll_offset
            )
            raise
        if generation != self._frame_generation:
            return

        if self._px_velocity == 0.0 and self._item_velocity == 0.0:
            self._frame_generation += 1
            _INERTIA_LOG.debug("inertia_stop reason=settled offset=%.3f", self._scroll_offset)
            return
        self._arm_frame()

    def _tick_px(self) -> None:
        if abs(self._px_velocity) < self._px_stop_threshold:
            self._px_velocity = 0.0
            return
        step = wheel.px_inertia_step(
            self._scroll_offset,
            self._px_velocity,
            viewport_size=self.viewport_size,
            content_size=self.content_size,
            decay=self._inertia_decay,
        )
        self._px_velocity = step.velocity
        self._commit(step.scroll_offset)

    def _tick_items(self) -> None:
        if abs(self._item_velocity) < self._item_stop_threshold:
            self._item_velocity = 0.0
            return
        step = wheel.item_inertia_step(
            self._scroll_offset,
            self._item_velocity,
            viewport_size=self.viewport_size,
            content_size=self.content_size,
            item_size=self.item_size,
            item_count=self.item_count,
            decay=self._inertia_decay,
        )
        self._item_velocity = step.velocity
        self._commit(step.scroll_offset)
