from __future__ import annotations

import argparse
from pathlib import Path

from hanoi_tutor.commands.common import (
    add_puzzle_arguments,
    config_from_args,
    print_error,
)
from hanoi_tutor.playback import PlaybackSession
from hanoi_tutor.progress import build_frame_progress_reporter
from hanoi_tutor.puzzle import DegenerateFallbackUsed, render_state_image


def _parse_size(value: str) -> tuple[int, int]:
    try:
        width, height = (int(part) for part in value.lower().split("x", 1))
    except ValueError as exc:
        raise argparse.ArgumentTypeError("size must look like WIDTHxHEIGHT") from exc
    if width < 64 or height < 64:
        raise argparse.ArgumentTypeError("size must be at least 64x64")
    return (width, height)


def write_frames(
    session: PlaybackSession,
    out_dir: Path,
    *,
    size: tuple[int, int] = (640, 480),
    progress: bool = False,
) -> list[Path]:
    """Write one PNG per playback position, starting with the initial board."""

    session.solve(autoplay=False)
    reporter = build_frame_progress_reporter(
        enabled=progress, total_frames=session.total_moves + 1
    )
    written: list[Path] = []
    try:
        while True:
            calls = session.active_calls()
            image = render_state_image(session.state, size=size, calls=calls)
            path = image.write(out_dir / f"frame_{session.move_index:04d}.png")
            written.append(path)
            reporter.on_frame_written(
                {
                    "move_index": session.move_index,
                    "total_moves": session.total_moves,
                    "depth": calls[-1].depth if calls else "-",
                }
            )
            if not session.step():
                break
    finally:
        reporter.close()
    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hanoi-tutor frames",
        description="Render the recursive solution as PNG frames (requires pillow).",
    )
    add_puzzle_arguments(parser)
    parser.add_argument("--out-dir", required=True, help="Directory for PNG frames.")
    parser.add_argument(
        "--size", type=_parse_size, default=(640, 480), help="Frame size WxH."
    )
    parser.add_argument(
        "--progress", action="store_true", help="Show a tqdm progress bar."
    )
    args = parser.parse_args(argv)

    config = config_from_args(args)
    session = PlaybackSession(config.n_pegs, config.n_disks, speed_ms=config.speed_ms)
    try:
        written = write_frames(
            session, Path(args.out_dir), size=args.size, progress=args.progress
        )
    except DegenerateFallbackUsed as exc:
        print_error(f"{session.message} ({exc})")
        return 1
    except RuntimeError as exc:
        print_error(str(exc))
        return 1
    print(f"Wrote {len(written)} frames to {args.out_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
