"""Wheel delta normalization and per-tick inertia steps."""

from __future__ import annotations

import math
from dataclasses import dataclass

from scrollkit.api.types import WHEEL_DELTA_LINE, WHEEL_DELTA_PAGE, WHEEL_DELTA_PIXEL
from scrollkit.ui_runtime.list_viewport import normalize_item_size
from scrollkit.ui_runtime.metrics import clamp, max_scroll_offset


@dataclass(frozen=True, slots=True)
class InertiaStep:
    """Offset to commit for one tick and the velocity carried to the next."""

    scroll_offset: float
    velocity: float


def _sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def normalize_delta_mode(delta_mode: int) -> int:
    """Map a wheel ``deltaMode`` to line, page or pixel; unknown values count as pixels."""
    if delta_mode in (WHEEL_DELTA_LINE, WHEEL_DELTA_PAGE):
        return delta_mode
    return WHEEL_DELTA_PIXEL


def wheel_px_delta(
    delta: float, delta_mode: int, *, item_size: float, viewport_size: float
) -> float:
    """Convert a wheel delta to pixels."""
    mode = normalize_delta_mode(delta_mode)
    if mode == WHEEL_DELTA_PIXEL:
        return delta
    if mode == WHEEL_DELTA_LINE:
        return delta * normalize_item_size(item_size)
    return delta * viewport_size


def wheel_item_delta(
    delta: float, delta_mode: int, *, item_size: float, viewport_size: float
) -> float:
    """Convert a wheel delta to items; pixel deltas count as exactly one item."""
    mode = normalize_delta_mode(delta_mode)
    if mode == WHEEL_DELTA_PIXEL:
        return _sign(delta)
    if mode == WHEEL_DELTA_LINE:
        return delta
    return delta * (viewport_size / normalize_item_size(item_size))


def velocity_px_step(delta_px: float, *, min_step: float, max_step: float) -> float:
    """Sign-preserving pixel velocity step clamped into `[min_step, max_step]`."""
    sign = _sign(delta_px)
    if sign == 0:
        return 0.0
    return sign * clamp(abs(delta_px), min_step, max_step)


def velocity_item_step(delta_items: float, *, min_step: float, max_step: float) -> float:
    """Sign-preserving item velocity step; a single-item delta bypasses the bounds."""
    sign = _sign(delta_items)
    if sign == 0:
        return 0.0
    if abs(delta_items) == 1:
        return sign
    return sign * clamp(abs(delta_items), min_step, max_step)


def px_inertia_step(
    scroll_offset: float,
    velocity: float,
    *,
    viewport_size: float,
    content_size: float,
    decay: float,
) -> InertiaStep:
    """Move by the current pixel velocity, then decay it."""
    limit = max_scroll_offset(viewport_size, content_size)
    next_offset = clamp(scroll_offset + velocity, 0.0, limit)
    return InertiaStep(scroll_offset=next_offset, velocity=velocity * decay)


def item_inertia_step(
    scroll_offset: float,
    velocity: float,
    *,
    viewport_size: float,
    content_size: float,
    item_size: float,
    item_count: int,
    decay: float,
) -> InertiaStep:
    """Move by whole items, snapping to item boundaries, then decay.

    Moving forward aligns the viewport's trailing edge to an item boundary
    (`down_offset` covers a viewport that is not a whole number of items);
    moving backward aligns the leading edge.
    """
    size = normalize_item_size(item_size)
    remainder = viewport_size % size
    down_offset = 0.0 if remainder == 0 else size - remainder
    max_index = item_count - math.ceil(viewport_size / size)
    step_items = round_half_up(velocity)

    next_offset = scroll_offset
    if step_items > 0:
        base_index = math.floor((scroll_offset - down_offset) / size)
        index = max(0, min(max_index, base_index + step_items))
        next_offset = index * size + down_offset
    elif step_items < 0:
        base_index = math.ceil(scroll_offset / size)
        index = max(0, min(max_index, base_index + step_items))
        next_offset = index * size

    next_offset = clamp(next_offset, 0.0, max_scroll_offset(viewport_size, content_size))
    return InertiaStep(scroll_offset=next_offset, velocity=velocity * decay)
