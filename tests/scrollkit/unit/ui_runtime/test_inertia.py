from __future__ import annotations

import logging

import pytest

from scrollkit.runtime.config import ScrollTuning
from scrollkit.runtime.frames import ManualFrameScheduler
from scrollkit.ui_runtime.scroll_engine import ScrollEngine
from tests.scrollkit.conftest import FakeGeometry, ScrollRecorder, StickyScheduler


def _px_geometry() -> FakeGeometry:
    return FakeGeometry(viewport=100.0, content=1000.0, track=100.0, item=20.0, count=50)


def _item_geometry() -> FakeGeometry:
    return FakeGeometry(viewport=100.0, content=600.0, track=100.0, item=30.0, count=20)


def test_wheel_px_first_tick_moves_by_step(
    scheduler: ManualFrameScheduler, recorder: ScrollRecorder
) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler, on_scroll=recorder)
    engine.handle_wheel_px(30.0, 0)

    assert engine.is_inertia_running
    assert engine.px_velocity == 30.0
    assert engine.scroll_offset == 0.0
    assert scheduler.pending_count == 1

    assert scheduler.run_frame() == 1
    assert engine.scroll_offset == 30.0
    assert engine.px_velocity == pytest.approx(21.0)
    assert recorder.calls == 1


def test_wheel_px_settles_and_returns_to_idle(scheduler: ManualFrameScheduler) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler)
    engine.handle_wheel_px(30.0, 0)
    scheduler.run_until_idle()

    assert engine.scroll_offset == pytest.approx(100.0 * (1.0 - 0.7**12))
    assert engine.px_velocity == 0.0
    assert not engine.is_inertia_running
    assert scheduler.pending_count == 0


def test_velocity_shrinks_every_tick(scheduler: ManualFrameScheduler) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler)
    engine.handle_wheel_px(-1.0, 2)
    engine.scroll_offset = 900.0
    magnitudes = [abs(engine.px_velocity)]
    while engine.is_inertia_running:
        scheduler.run_frame()
        magnitudes.append(abs(engine.px_velocity))
    assert magnitudes[-1] == 0.0
    assert all(later < earlier for earlier, later in zip(magnitudes, magnitudes[1:]))


def test_repeated_wheel_accumulates_velocity(scheduler: ManualFrameScheduler) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler)
    engine.handle_wheel_px(30.0, 0)
    engine.handle_wheel_px(30.0, 0)
    assert engine.px_velocity == 60.0
    assert scheduler.pending_count == 1
    scheduler.run_frame()
    assert engine.scroll_offset == 60.0


def test_wheel_px_line_and_page_modes(scheduler: ManualFrameScheduler) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler)
    engine.handle_wheel_px(2.0, 1)
    assert engine.px_velocity == 40.0
    engine.stop_inertia()
    engine.handle_wheel_px(-1.0, 2)
    assert engine.px_velocity == -60.0


def test_zero_delta_does_not_start_loop(scheduler: ManualFrameScheduler) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler)
    engine.handle_wheel_px(0.0, 0)
    engine.handle_wheel_items(0.0, 1)
    assert not engine.is_inertia_running
    assert scheduler.pending_count == 0


def test_wheel_items_snaps_to_item_boundaries(scheduler: ManualFrameScheduler) -> None:
    engine = ScrollEngine(_item_geometry(), scheduler=scheduler)
    engine.handle_wheel_items(120.0, 0)
    assert engine.item_velocity == 1.0

    scheduler.run_frame()
    assert engine.scroll_offset == 20.0
    scheduler.run_frame()
    assert engine.scroll_offset == 50.0
    scheduler.run_until_idle()
    assert engine.scroll_offset == 50.0
    assert engine.item_velocity == 0.0
    assert not engine.is_inertia_running


def test_wheel_items_backward_aligns_leading_edge(scheduler: ManualFrameScheduler) -> None:
    engine = ScrollEngine(_item_geometry(), scheduler=scheduler)
    engine.scroll_offset = 50.0
    engine.handle_wheel_items(-3.0, 0)
    scheduler.run_frame()
    assert engine.scroll_offset == 30.0


def test_single_notch_ignores_item_bounds(scheduler: ManualFrameScheduler) -> None:
    tuning = ScrollTuning(min_velocity_item_step=2.0, max_velocity_item_step=4.0)
    engine = ScrollEngine(_item_geometry(), scheduler=scheduler, tuning=tuning)
    engine.handle_wheel_items(1.0, 1)
    assert engine.item_velocity == 1.0
    engine.handle_wheel_items(10.0, 1)
    assert engine.item_velocity == 5.0


def test_both_domains_share_one_frame(scheduler: ManualFrameScheduler) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler)
    engine.handle_wheel_px(30.0, 0)
    engine.handle_wheel_items(1.0, 1)
    assert scheduler.pending_count == 1
    scheduler.run_frame()
    assert scheduler.pending_count == 1
    assert engine.px_velocity == pytest.approx(21.0)
    assert engine.item_velocity == pytest.approx(0.7)
    scheduler.run_until_idle()
    assert engine.px_velocity == 0.0
    assert engine.item_velocity == 0.0


def test_stop_inertia_cancels_and_is_idempotent(
    scheduler: ManualFrameScheduler, recorder: ScrollRecorder
) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler, on_scroll=recorder)
    engine.handle_wheel_px(30.0, 0)
    engine.stop_inertia()
    engine.stop_inertia()

    assert not engine.is_inertia_running
    assert engine.px_velocity == 0.0
    assert scheduler.pending_count == 0
    assert scheduler.run_frame() == 0
    assert engine.scroll_offset == 0.0
    assert recorder.calls == 0


def test_stale_callback_after_dispose_is_ignored(recorder: ScrollRecorder) -> None:
    scheduler = StickyScheduler()
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler, on_scroll=recorder)
    engine.handle_wheel_px(30.0, 0)
    (callback,) = scheduler.callbacks.values()

    engine.dispose()
    engine.dispose()
    callback()

    assert scheduler.cancelled == [1]
    assert engine.scroll_offset == 0.0
    assert recorder.calls == 0


def test_dispose_ignores_later_wheel_input(scheduler: ManualFrameScheduler) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler)
    engine.dispose()
    engine.handle_wheel_px(30.0, 0)
    engine.handle_wheel_items(1.0, 1)
    assert scheduler.pending_count == 0
    engine.scroll_offset = 40.0
    assert engine.scroll_offset == 40.0


def test_observer_stopping_inertia_ends_loop(scheduler: ManualFrameScheduler) -> None:
    engine: ScrollEngine

    def on_scroll() -> None:
        engine.stop_inertia()

    engine = ScrollEngine(_px_geometry(), scheduler=scheduler, on_scroll=on_scroll)
    engine.handle_wheel_px(30.0, 0)
    scheduler.run_frame()
    assert engine.scroll_offset == 30.0
    assert not engine.is_inertia_running
    assert scheduler.pending_count == 0


def test_observer_not_fired_when_clamped_at_end(
    scheduler: ManualFrameScheduler, recorder: ScrollRecorder
) -> None:
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler, on_scroll=recorder)
    engine.scroll_offset = 900.0
    engine.handle_wheel_px(30.0, 0)
    scheduler.run_until_idle()
    assert engine.scroll_offset == 900.0
    assert recorder.calls == 0


def test_inertia_logs_start_and_stop(scheduler: ManualFrameScheduler, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="scrollkit.inertia")
    engine = ScrollEngine(_px_geometry(), scheduler=scheduler)
    engine.handle_wheel_px(30.0, 0)
    scheduler.run_until_idle()
    messages = [
        record.getMessage() for record in caplog.records if record.name == "scrollkit.inertia"
    ]
    assert messages[0].startswith("inertia_start domain=px")
    assert messages[-1].startswith("inertia_stop reason=settled")


def test_raising_observer_returns_engine_to_idle(scheduler: ManualFrameScheduler) -> None:
    calls = 0

    def on_scroll() -> None:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("observer failed")

    engine = ScrollEngine(_px_geometry(), scheduler=scheduler, on_scroll=on_scroll)
    engine.handle_wheel_px(30.0, 0)
    with pytest.raises(RuntimeError, match="observer failed"):
        scheduler.run_frame()

    assert engine.scroll_offset == 30.0
    assert not engine.is_inertia_running
    assert engine.px_velocity == 0.0
    assert engine.item_velocity == 0.0
    assert scheduler.pending_count == 0

    engine.handle_wheel_px(30.0, 0)
    assert engine.px_velocity == 30.0
    scheduler.run_frame()
    assert engine.scroll_offset == 60.0
