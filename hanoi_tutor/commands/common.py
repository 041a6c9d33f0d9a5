from __future__ import annotations

import argparse
import sys

from hanoi_tutor.config import TutorConfig, resolve_config


def add_puzzle_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", help="Path to JSON config (n_pegs, n_disks, speed_ms)."
    )
    parser.add_argument(
        "--pegs",
        dest="n_pegs",
        type=int,
        default=None,
        help="Number of rods, clamped to 2..8 (default from config or 3).",
    )
    parser.add_argument(
        "--disks",
        dest="n_disks",
        type=int,
        default=None,
        help="Number of disks, clamped to 1..8 (default from config or 4).",
    )
    parser.add_argument(
        "--speed",
        dest="speed_ms",
        type=int,
        default=None,
        help="Auto-play delay per move in ms, clamped to 100..1200 (default 500).",
    )


def config_from_args(args: argparse.Namespace) -> TutorConfig:
    return resolve_config(
        getattr(args, "config", None),
        {
            "n_pegs": getattr(args, "n_pegs", None),
            "n_disks": getattr(args, "n_disks", None),
            "speed_ms": getattr(args, "speed_ms", None),
        },
    )


def print_error(message: str) -> None:
    print(f"error: {message}", file=sys.stderr, flush=True)
