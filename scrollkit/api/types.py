"""Shared literal and callback aliases for the scroll API."""

from __future__ import annotations

from collections.abc import Callable
from typing import Literal, TypeAlias

WheelDeltaMode: TypeAlias = Literal[0, 1, 2]
PageDirection: TypeAlias = Literal["up", "down"]
ScrollAlign: TypeAlias = Literal["nearest", "start", "end", "center"]
TrackClickDirection: TypeAlias = Literal["up", "down", "none"]
InertiaDomain: TypeAlias = Literal["px", "item"]

ScrollObserver = Callable[[], None]

WHEEL_DELTA_PIXEL = 0
WHEEL_DELTA_LINE = 1
WHEEL_DELTA_PAGE = 2
