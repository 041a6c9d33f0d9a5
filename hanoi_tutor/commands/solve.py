from __future__ import annotations

import argparse
import json

from hanoi_tutor.commands.common import (
    add_puzzle_arguments,
    config_from_args,
    print_error,
)
from hanoi_tutor.puzzle import UNSOLVABLE, format_call, minimal_moves, plan_solution


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hanoi-tutor solve",
        description="Print the recursive solution (and optionally its call trace).",
    )
    add_puzzle_arguments(parser)
    parser.add_argument(
        "--trace", action="store_true", help="Print enter/move/exit trace events."
    )
    parser.add_argument(
        "--json", action="store_true", help="Emit moves, trace and bound as JSON."
    )
    args = parser.parse_args(argv)

    config = config_from_args(args)
    solution = plan_solution(config.n_pegs, config.n_disks)
    minimal = minimal_moves(config.n_pegs, config.n_disks)
    minimal_value = None if minimal is UNSOLVABLE else minimal

    if args.json:
        payload = {
            "n_pegs": config.n_pegs,
            "n_disks": config.n_disks,
            "minimal_moves": minimal_value,
            **solution.to_dict(),
        }
        if not args.trace:
            payload.pop("trace")
        print(json.dumps(payload, indent=2, sort_keys=True))
    else:
        print(f"Pegs: {config.n_pegs}  Disks: {config.n_disks}")
        if args.trace:
            for step in solution.trace:
                print(f"{step.phase:5s} {format_call(step)}")
            print()
        for index, (from_peg, to_peg) in enumerate(solution.moves, start=1):
            print(f"{index:3d}. Rod {from_peg + 1} -> Rod {to_peg + 1}")
        bound = "unsolvable" if minimal_value is None else str(minimal_value)
        print(f"Moves: {len(solution.moves)} (minimal: {bound})")

    if solution.uses_fallback:
        print_error(
            "no auxiliary rod available; the plan moves a whole stack at once "
            "and is not a valid solution"
        )
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
