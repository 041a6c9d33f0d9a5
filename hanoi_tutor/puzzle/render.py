from __future__ import annotations

from typing import Sequence

from .callstack import format_call
from .env import PuzzleState
from .solver import RecursionStep


def _disk_cell(disk: int | None, width: int) -> str:
    if disk is None:
        return "|".center(width)
    return ("=" * (2 * disk - 1)).center(width)


def render_board(state: PuzzleState) -> str:
    """Side-by-side text drawing of the pegs, top level first."""

    width = 2 * state.n_disks + 1
    height = max(state.n_disks, 1)
    lines = []
    for level in range(height - 1, -1, -1):
        cells = []
        for peg in state.pegs:
            disk = peg[level] if level < len(peg) else None
            cells.append(_disk_cell(disk, width))
        lines.append(" ".join(cells).rstrip())
    lines.append(" ".join("-" * width for _ in state.pegs))

    labels = []
    for index in range(state.n_pegs):
        label = f"Rod {index + 1}"
        if state.selected_peg == index:
            label = f"[{label}]"
        labels.append(label.center(width))
    lines.append(" ".join(labels).rstrip())
    return "\n".join(lines)


def render_call_stack(calls: Sequence[RecursionStep]) -> str:
    if not calls:
        return "No active calls (completed or not started)"
    lines = []
    for index, step in enumerate(calls):
        marker = "->" if index == len(calls) - 1 else "  "
        lines.append(f"{marker} {format_call(step)}")
    return "\n".join(lines)
