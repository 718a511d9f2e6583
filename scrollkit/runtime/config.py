"""Centralized tuning configuration for scroll engines."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping

ENV_PREFIX = "SCROLLKIT_"


@dataclass(frozen=True, slots=True)
class ScrollTuning:
    """Thumb floor, wheel velocity bounds and inertia decay for one engine."""

    min_thumb_size: float = 12.0
    min_velocity_px_step: float = 10.0
    max_velocity_px_step: float = 60.0
    min_velocity_item_step: float = 1.0
    max_velocity_item_step: float = 3.0
    inertia_decay: float = 0.7
    px_stop_threshold: float = 0.5
    item_stop_threshold: float = 0.01

    def __post_init__(self) -> None:
        for item in fields(self):
            if getattr(self, item.name) < 0.0:
                raise ValueError(f"{item.name} must be >= 0")
        if self.min_velocity_px_step > self.max_velocity_px_step:
            raise ValueError("min_velocity_px_step must be <= max_velocity_px_step")
        if self.min_velocity_item_step > self.max_velocity_item_step:
            raise ValueError("min_velocity_item_step must be <= max_velocity_item_step")
        if self.inertia_decay > 1.0:
            raise ValueError("inertia_decay must be within [0, 1]")


def _raw(name: str, *, env: Mapping[str, str] | None = None) -> str | None:
    value = os.getenv(name) if env is None else env.get(name)
    return None if value is None else str(value)


def _float(
    name: str,
    default: float,
    *,
    minimum: float | None = None,
    env: Mapping[str, str] | None = None,
) -> float:
    raw = _raw(name, env=env)
    if raw is None:
        value = float(default)
    else:
        try:
            value = float(raw.strip())
        except ValueError:
            value = float(default)
    if minimum is None:
        return value
    return max(float(minimum), value)


def load_scroll_tuning(*, env: Mapping[str, str] | None = None) -> ScrollTuning:
    """Resolve tuning from `SCROLLKIT_*` variables over the built-in defaults."""
    defaults = ScrollTuning()
    values = {
        item.name: _float(
            f"{ENV_PREFIX}{item.name.upper()}",
            getattr(defaults, item.name),
            minimum=0.0,
            env=env,
        )
        for item in fields(ScrollTuning)
    }
    values["inertia_decay"] = min(1.0, values["inertia_decay"])
    return ScrollTuning(**values)
