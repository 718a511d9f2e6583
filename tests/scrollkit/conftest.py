from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from scrollkit.runtime.frames import ManualFrameScheduler


@dataclass(slots=True)
class FakeGeometry:
    viewport: float = 100.0
    content: float = 300.0
    track: float = 100.0
    item: float = 20.0
    count: int = 15

    def viewport_size(self) -> float:
        return self.viewport

    def content_size(self) -> float:
        return self.content

    def track_size(self) -> float:
        return self.track

    def item_size(self) -> float:
        return self.item

    def item_count(self) -> int:
        return self.count


@dataclass(slots=True)
class StickyScheduler:
    """Scheduler whose `cancel` is a no-op, to exercise stale callbacks."""

    callbacks: dict[int, Callable[[], None]] = field(default_factory=dict)
    cancelled: list[int] = field(default_factory=list)
    _next: int = 1

    def schedule(self, callback: Callable[[], None]) -> int:
        handle = self._next
        self._next += 1
        self.callbacks[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self.cancelled.append(handle)


@dataclass(slots=True)
class ScrollRecorder:
    calls: int = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def scheduler() -> ManualFrameScheduler:
    return ManualFrameScheduler()


@pytest.fixture
def recorder() -> ScrollRecorder:
    return ScrollRecorder()
