from __future__ import annotations

import argparse

from hanoi_tutor.config import clamp_disks, clamp_pegs
from hanoi_tutor.puzzle import MIN_PEGS, UNSOLVABLE, best_split, minimal_moves


def _cell(n_pegs: int, n_disks: int, *, splits: bool) -> str:
    value = minimal_moves(n_pegs, n_disks)
    if value is UNSOLVABLE:
        return "-"
    if splits:
        split = best_split(n_pegs, n_disks)
        if split is not None:
            return f"{value} (k={split})"
    return str(value)


def render_table(max_pegs: int, max_disks: int, *, splits: bool = False) -> str:
    header = ["pegs\\disks", *(str(d) for d in range(1, max_disks + 1))]
    rows = [header]
    for n_pegs in range(MIN_PEGS, max_pegs + 1):
        rows.append(
            [str(n_pegs)]
            + [
                _cell(n_pegs, n_disks, splits=splits)
                for n_disks in range(1, max_disks + 1)
            ]
        )
    widths = [max(len(row[i]) for row in rows) for i in range(len(header))]
    return "\n".join(
        "  ".join(cell.rjust(widths[i]) for i, cell in enumerate(row)).rstrip()
        for row in rows
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hanoi-tutor table",
        description="Minimal move counts (Frame-Stewart) per peg and disk count.",
    )
    parser.add_argument("--max-pegs", type=int, default=6)
    parser.add_argument("--max-disks", type=int, default=8)
    parser.add_argument(
        "--splits",
        action="store_true",
        help="Show how many disks the optimal split parks on a spare rod.",
    )
    args = parser.parse_args(argv)

    print(
        render_table(
            clamp_pegs(args.max_pegs), clamp_disks(args.max_disks), splits=args.splits
        )
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
