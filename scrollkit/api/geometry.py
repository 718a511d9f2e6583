"""Pull-based geometry contract consumed by the scroll engine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

SizeGetter = Callable[[], float]
CountGetter = Callable[[], int]


@runtime_checkable
class GeometrySource(Protocol):
    """Host-owned measurements, read on demand and never cached by the engine."""

    def viewport_size(self) -> float:
        """Visible extent along the scroll axis."""

    def content_size(self) -> float:
        """Total scrollable extent along the scroll axis."""

    def track_size(self) -> float:
        """Length of the rail the thumb travels along."""

    def item_size(self) -> float:
        """Fixed size of one virtualized item."""

    def item_count(self) -> int:
        """Number of virtualized items."""


@dataclass(frozen=True, slots=True)
class CallbackGeometry:
    """Adapt plain measurement callables to `GeometrySource`."""

    viewport: SizeGetter
    content: SizeGetter
    track: SizeGetter
    item: SizeGetter | None = None
    count: CountGetter | None = None

    def viewport_size(self) -> float:
        return self.viewport()

    def content_size(self) -> float:
        return self.content()

    def track_size(self) -> float:
        return self.track()

    def item_size(self) -> float:
        return 1.0 if self.item is None else self.item()

    def item_count(self) -> int:
        return 0 if self.count is None else self.count()
