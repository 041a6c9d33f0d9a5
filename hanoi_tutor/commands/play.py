from __future__ import annotations

import argparse

from hanoi_tutor.commands.common import add_puzzle_arguments, config_from_args
from hanoi_tutor.playback import PlaybackSession
from hanoi_tutor.puzzle import HanoiError, render_board, render_call_stack

HELP_TEXT = (
    "Commands: '<from> <to>' (rods numbered from 1), 'step', 'solve', "
    "'stack', 'score', 'reset', 'help', 'quit'"
)


def _print(obj: object) -> None:
    print(obj, flush=True)


def _parse_move(raw: str) -> tuple[int, int] | None:
    parts = raw.replace("->", " ").split()
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        return None
    return (int(parts[0]) - 1, int(parts[1]) - 1)


def _show(session: PlaybackSession) -> None:
    _print(render_board(session.state))
    if session.message:
        _print(session.message)


def _run_command(session: PlaybackSession, raw: str) -> bool:
    """Handle one input line; False means quit."""

    command = raw.strip().lower()
    if command in {"q", "quit", "exit"}:
        return False
    if command in {"h", "help", "?"}:
        _print(HELP_TEXT)
        return True
    if command == "reset":
        session.reset()
        _show(session)
        return True
    if command == "score":
        score = session.score()
        _print(score.to_dict())
        return True
    if command == "stack":
        _print(render_call_stack(session.active_calls()))
        return True
    if command in {"step", "solve"}:
        try:
            if command == "solve":
                session.solve(autoplay=False)
                while session.step():
                    pass
            elif not session.step():
                _print("Nothing left to play; 'reset' to start over.")
        except HanoiError as exc:
            _print(f"Error: {exc}")
            return True
        _show(session)
        _print(render_call_stack(session.active_calls()))
        _print(f"Move {session.move_index} of {session.total_moves}")
        return True

    move = _parse_move(command)
    if move is None:
        _print(f"Unrecognized input: {raw.strip()!r}. {HELP_TEXT}")
        return True
    from_peg, to_peg = move
    try:
        session.player_move(from_peg, to_peg)
    except HanoiError as exc:
        _print(f"Illegal move: {exc}")
        return True
    _show(session)
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hanoi-tutor play",
        description="Play Tower of Hanoi in the terminal.",
    )
    add_puzzle_arguments(parser)
    args = parser.parse_args(argv)

    config = config_from_args(args)
    session = PlaybackSession(config.n_pegs, config.n_disks, speed_ms=config.speed_ms)
    _print(HELP_TEXT)
    _show(session)
    while True:
        try:
            raw = input("> ")
        except (EOFError, KeyboardInterrupt):
            break
        if not raw.strip():
            continue
        if not _run_command(session, raw):
            break
    session.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
