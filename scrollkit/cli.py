"""Command-line inertia simulator for tuning wheel behaviour."""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence

from scrollkit.api.geometry import CallbackGeometry
from scrollkit.api.logging import ScrollLoggingConfig
from scrollkit.runtime.config import load_scroll_tuning
from scrollkit.runtime.frames import ManualFrameScheduler
from scrollkit.runtime.logging import (
    resolve_log_level_name,
    scroll_logging,
    setup_scroll_logging,
)
from scrollkit.ui_runtime.scroll_engine import ScrollEngine

_LOG = logging.getLogger("scrollkit.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scrollkit", description="Scroll engine utilities.")
    commands = parser.add_subparsers(dest="command", required=True)

    simulate_parser = commands.add_parser("simulate", help="Trace one wheel gesture tick by tick.")
    simulate_parser.add_argument("--viewport", type=float, default=100.0)
    simulate_parser.add_argument("--content", type=float, default=1000.0)
    simulate_parser.add_argument("--track", type=float, default=100.0)
    simulate_parser.add_argument("--item-size", type=float, default=20.0)
    simulate_parser.add_argument("--item-count", type=int, default=None)
    simulate_parser.add_argument("--offset", type=float, default=0.0)
    simulate_parser.add_argument("--delta", type=float, default=100.0)
    simulate_parser.add_argument("--delta-mode", type=int, choices=(0, 1, 2), default=0)
    simulate_parser.add_argument("--domain", choices=("px", "item"), default="px")
    simulate_parser.add_argument("--max-frames", type=int, default=1000)
    simulate_parser.add_argument("--json", action="store_true", help="Emit JSON lines.")
    simulate_parser.add_argument(
        "--log-level", default=None, help="Root log level; defaults to SCROLLKIT_LOG_LEVEL."
    )
    simulate_parser.add_argument(
        "--log-file", default=None, help="Also stream engine logs to this file."
    )
    simulate_parser.add_argument(
        "--log-format",
        choices=("text", "json"),
        default="json",
        help="Record format for --log-file.",
    )
    return parser


def _logging_config(args: argparse.Namespace) -> ScrollLoggingConfig | None:
    if args.log_level is None and args.log_file is None:
        return None
    return ScrollLoggingConfig(
        level_name=args.log_level or resolve_log_level_name(),
        console_format="text",
        file_path=args.log_file,
        file_format=args.log_format,
    )


def simulate(args: argparse.Namespace) -> list[dict[str, float | int]]:
    """Run one wheel gesture to rest and return per-frame samples."""
    item_count = args.item_count
    if item_count is None:
        item_count = int(args.content // args.item_size) if args.item_size > 0 else 0
    geometry = CallbackGeometry(
        viewport=lambda: args.viewport,
        content=lambda: args.content,
        track=lambda: args.track,
        item=lambda: args.item_size,
        count=lambda: item_count,
    )
    scheduler = ManualFrameScheduler()
    engine = ScrollEngine(geometry, scheduler=scheduler, tuning=load_scroll_tuning())
    engine.scroll_offset = args.offset
    if args.domain == "px":
        engine.handle_wheel_px(args.delta, args.delta_mode)
    else:
        engine.handle_wheel_items(args.delta, args.delta_mode)

    samples: list[dict[str, float | int]] = []
    while engine.is_inertia_running and scheduler.frame_index < args.max_frames:
        scheduler.run_frame()
        samples.append(
            {
                "frame": scheduler.frame_index,
                "offset": engine.scroll_offset,
                "px_velocity": engine.px_velocity,
                "item_velocity": engine.item_velocity,
                "thumb_offset": engine.thumb_offset,
            }
        )
    if engine.is_inertia_running:
        _LOG.warning("simulation_truncated max_frames=%d", args.max_frames)
    engine.dispose()
    return samples


def _print_samples(samples: list[dict[str, float | int]], *, as_json: bool) -> None:
    for sample in samples:
        if as_json:
            print(json.dumps(sample))
        else:
            print(
                f"frame={sample['frame']:>4} offset={sample['offset']:10.3f} "
                f"px_v={sample['px_velocity']:8.3f} item_v={sample['item_velocity']:7.3f} "
                f"thumb={sample['thumb_offset']:8.3f}"
            )


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config = _logging_config(args)
    if config is None:
        setup_scroll_logging()
        samples = simulate(args)
    else:
        with scroll_logging(config):
            samples = simulate(args)
    _print_samples(samples, as_json=args.json)
    return 0
