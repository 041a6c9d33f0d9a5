from __future__ import annotations

import argparse
import queue

from hanoi_tutor.commands.common import (
    add_puzzle_arguments,
    config_from_args,
    print_error,
)
from hanoi_tutor.playback import PlaybackFrame, PlaybackSession, TimerFactory
from hanoi_tutor.puzzle import DegenerateFallbackUsed, render_board, render_call_stack


def _print_frame(frame: PlaybackFrame) -> None:
    if frame.last_move is not None:
        from_peg, to_peg = frame.last_move
        print(
            f"Move {frame.move_index} of {frame.total_moves}: "
            f"Rod {from_peg + 1} -> Rod {to_peg + 1}",
            flush=True,
        )
    print(render_board(frame.state))
    print(render_call_stack(frame.calls))
    print(flush=True)


def _step_through(session: PlaybackSession) -> None:
    while session.step():
        _print_frame(session.snapshot())


def _animate(session: PlaybackSession, frames: queue.Queue[PlaybackFrame]) -> None:
    """Print frames pushed by the session timer until auto-play stops."""

    if not session.running:
        return
    while True:
        frame = frames.get()
        _print_frame(frame)
        if not frame.running:
            return


def main(
    argv: list[str] | None = None, *, timer_factory: TimerFactory | None = None
) -> int:
    parser = argparse.ArgumentParser(
        prog="hanoi-tutor trace",
        description="Step through the recursive solution, showing the call stack.",
    )
    add_puzzle_arguments(parser)
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Play the solution on a timer, one move every --speed ms.",
    )
    args = parser.parse_args(argv)

    config = config_from_args(args)
    frames: queue.Queue[PlaybackFrame] = queue.Queue()
    session = PlaybackSession(
        config.n_pegs,
        config.n_disks,
        speed_ms=config.speed_ms,
        timer_factory=timer_factory,
        on_tick=frames.put,
    )
    try:
        session.solve(autoplay=args.animate)
    except DegenerateFallbackUsed as exc:
        print_error(f"{session.message} ({exc})")
        return 1

    print(render_board(session.state))
    print()
    try:
        if args.animate:
            _animate(session, frames)
        else:
            _step_through(session)
    except KeyboardInterrupt:
        session.stop()
        print_error("interrupted")
        return 130
    finally:
        session.close()

    message = session.snapshot().message
    if message:
        print(message)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
