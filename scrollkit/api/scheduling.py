"""Frame scheduling contract used by inertial scrolling."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

FrameCallback = Callable[[], None]


@runtime_checkable
class FrameScheduler(Protocol):
    """Request/cancel pair for one-shot next-frame callbacks."""

    def schedule(self, callback: FrameCallback) -> int:
        """Run `callback` once on a later frame and return its handle."""

    def cancel(self, handle: int) -> None:
        """Drop a pending callback; unknown or spent handles are ignored."""
