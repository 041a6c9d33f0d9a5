from __future__ import annotations

from typing import Sequence

from .solver import RecursionStep


def _matching_exit(trace: Sequence[RecursionStep], start: int) -> int | None:
    enter = trace[start]
    for index in range(start + 1, len(trace)):
        step = trace[index]
        if step.phase == "exit" and step.depth == enter.depth and step.n == enter.n:
            return index
    return None


def active_calls(
    trace: Sequence[RecursionStep], prefix_length: int
) -> tuple[RecursionStep, ...]:
    """Calls entered within the first `prefix_length` steps and not yet exited.

    Returned outermost first, one entry per (depth, n, from_peg).
    """

    prefix = max(0, min(prefix_length, len(trace)))
    seen: set[tuple[int, int, int]] = set()
    active: list[RecursionStep] = []
    for index in range(prefix):
        step = trace[index]
        if step.phase != "enter":
            continue
        exit_index = _matching_exit(trace, index)
        if exit_index is not None and exit_index < prefix:
            continue
        key = (step.depth, step.n, step.from_peg)
        if key in seen:
            continue
        seen.add(key)
        active.append(step)
    return tuple(active)


def next_trace_index(trace: Sequence[RecursionStep], index: int) -> int:
    """Index just past the next `move` step at or after `index`."""

    for position in range(max(0, index), len(trace)):
        if trace[position].phase == "move":
            return position + 1
    return len(trace)


def _rod(peg: int) -> str:
    return f"Rod{peg + 1}"


def format_call(step: RecursionStep, *, indent: bool = True) -> str:
    aux = ", ".join(_rod(peg) for peg in step.aux)
    label = (
        f"solve(n={step.n}, from={_rod(step.from_peg)}, "
        f"to={_rod(step.to_peg)}, aux=[{aux}])"
    )
    return ("  " * step.depth + label) if indent else label
