from __future__ import annotations

import sys
from typing import Callable

from hanoi_tutor.commands import frames, play, solve, table, trace
from hanoi_tutor.commands.common import print_error
from hanoi_tutor.puzzle import HanoiError


COMMANDS: dict[str, tuple[str, Callable[[list[str] | None], int]]] = {
    "solve": ("Print the recursive solution", solve.main),
    "table": ("Minimal move counts per peg/disk count", table.main),
    "trace": ("Step through the solution with the call stack", trace.main),
    "play": ("Play interactively in the terminal", play.main),
    "frames": ("Render playback frames as PNG (pillow)", frames.main),
}


def _print_help() -> None:
    print("hanoi-tutor <command> [args]\n")
    print("Commands:")
    for name, (desc, _) in COMMANDS.items():
        print(f"  {name:20s} {desc}")


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] in {"-h", "--help"}:
        _print_help()
        return 0

    command = args.pop(0)
    if command not in COMMANDS:
        print(f"Unknown command: {command}\n")
        _print_help()
        return 2

    _, handler = COMMANDS[command]
    try:
        return handler(args)
    except HanoiError as exc:
        print_error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
