"""Visibility and paging queries for fixed-size virtualized lists.

Indices are not validated against the item count; a count that disagrees
with `content_size / item_size` can produce out-of-range answers.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def normalize_item_size(item_size: float) -> float:
    """Substitute 1 for a non-positive item size."""
    return item_size if item_size > 0 else 1.0


def first_fully_visible_index(scroll_offset: float, viewport_size: float, item_size: float) -> int:
    """Return the first item whose whole span lies inside the viewport."""
    size = normalize_item_size(item_size)
    viewport_bottom = scroll_offset + viewport_size
    index = math.ceil(scroll_offset / size)
    if index * size + size <= viewport_bottom:
        return index
    return index + 1


def last_fully_visible_index(scroll_offset: float, viewport_size: float, item_size: float) -> int:
    """Return the last item whose whole span lies inside the viewport."""
    size = normalize_item_size(item_size)
    viewport_bottom = scroll_offset + viewport_size
    index = math.floor((viewport_bottom - 1) / size)
    item_top = index * size
    if item_top >= scroll_offset and item_top + size <= viewport_bottom:
        return index
    return index - 1


def is_item_visible(
    index: int,
    scroll_offset: float,
    viewport_size: float,
    item_size: float,
    *,
    fully: bool = True,
) -> bool:
    """Return whether an item is fully (or, with `fully=False`, partly) visible."""
    size = normalize_item_size(item_size)
    item_top = index * size
    item_bottom = item_top + size
    viewport_bottom = scroll_offset + viewport_size
    if fully:
        return item_top >= scroll_offset and item_bottom <= viewport_bottom
    return item_bottom > scroll_offset and item_top < viewport_bottom


def next_page_up_index(
    focused_index: int,
    scroll_offset: float,
    viewport_size: float,
    item_size: float,
) -> int:
    """Return the focus target for a page-up key press."""
    first = first_fully_visible_index(scroll_offset, viewport_size, item_size)
    last = last_fully_visible_index(scroll_offset, viewport_size, item_size)
    visible_count = max(1, last - first + 1)
    if focused_index > first:
        return first
    # The old top becomes the new bottom.
    return max(0, first - visible_count + 1)


def next_page_down_index(
    focused_index: int,
    scroll_offset: float,
    viewport_size: float,
    item_size: float,
    item_count: int,
) -> int:
    """Return the focus target for a page-down key press."""
    first = first_fully_visible_index(scroll_offset, viewport_size, item_size)
    last = last_fully_visible_index(scroll_offset, viewport_size, item_size)
    visible_count = max(1, last - first + 1)
    if focused_index < last:
        return last
    # The old bottom becomes the new top.
    return min(item_count - 1, last + visible_count - 1)


def visible_range(
    scroll_offset: float,
    viewport_size: float,
    item_size: float,
    item_count: int,
    *,
    overscan: int = 0,
) -> range:
    """Return the half-open index range of at least partly visible items."""
    size = normalize_item_size(item_size)
    total = max(0, item_count)
    pad = max(0, overscan)
    start = math.floor(scroll_offset / size) - pad
    stop = math.ceil((scroll_offset + viewport_size) / size) + pad
    start = max(0, min(start, total))
    stop = max(start, min(stop, total))
    return range(start, stop)


def visible_slice(
    items: Sequence[T],
    scroll_offset: float,
    viewport_size: float,
    item_size: float,
    *,
    overscan: int = 0,
) -> list[T]:
    """Return the items inside `visible_range` for rendering."""
    window = visible_range(scroll_offset, viewport_size, item_size, len(items), overscan=overscan)
    return list(items[window.start : window.stop])
