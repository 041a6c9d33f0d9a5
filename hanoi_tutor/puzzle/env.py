from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, TypeAlias

PegIndex: TypeAlias = int
Disk: TypeAlias = int
Move: TypeAlias = tuple[PegIndex, PegIndex]

MIN_PEGS = 2
MAX_PEGS = 8
MIN_DISKS = 1
MAX_DISKS = 8


class HanoiError(Exception):
    """Base exception for the Tower of Hanoi tutor."""


class IllegalMoveError(HanoiError):
    """Raised when a move violates Tower of Hanoi rules."""


@dataclass(frozen=True, slots=True)
class PuzzleState:
    """Immutable snapshot of a Tower of Hanoi configuration.

    Representation notes:
      - `pegs` is a tuple of stacks (length `n_pegs`), each listed bottom->top.
      - Disk sizes are integers 1..n_disks, where 1 is the smallest.
      - `selected_peg` is the peg a player has picked up from, if any.
      - `moves_made` counts player-initiated moves only.
    """

    n_pegs: int
    n_disks: int
    pegs: tuple[tuple[Disk, ...], ...]
    selected_peg: PegIndex | None = None
    moves_made: int = 0

    @property
    def disk_positions(self) -> tuple[PegIndex, ...]:
        """`disk_positions[d-1]` gives the peg index holding disk `d`."""

        positions = [0] * self.n_disks
        for peg_index, peg in enumerate(self.pegs):
            for disk in peg:
                positions[disk - 1] = peg_index
        return tuple(positions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "n_pegs": self.n_pegs,
            "n_disks": self.n_disks,
            "pegs": [list(p) for p in self.pegs],
            "disk_positions": list(self.disk_positions),
            "selected_peg": self.selected_peg,
            "moves_made": self.moves_made,
        }


def _expected_stack(n_disks: int) -> tuple[Disk, ...]:
    return tuple(range(n_disks, 0, -1))


def _validate_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")


def _validate_n_disks(n_disks: int) -> None:
    _validate_int("n_disks", n_disks)
    if not MIN_DISKS <= n_disks <= MAX_DISKS:
        raise ValueError(
            f"n_disks must be in [{MIN_DISKS}, {MAX_DISKS}], got {n_disks}"
        )


def _validate_n_pegs(n_pegs: int) -> None:
    _validate_int("n_pegs", n_pegs)
    if not MIN_PEGS <= n_pegs <= MAX_PEGS:
        raise ValueError(f"n_pegs must be in [{MIN_PEGS}, {MAX_PEGS}], got {n_pegs}")


def initial_state(n_pegs: int, n_disks: int) -> PuzzleState:
    """All disks stacked on peg 0, largest at the bottom."""

    _validate_n_pegs(n_pegs)
    _validate_n_disks(n_disks)
    pegs = [() for _ in range(n_pegs)]
    pegs[0] = _expected_stack(n_disks)
    return PuzzleState(n_pegs=n_pegs, n_disks=n_disks, pegs=tuple(pegs))


def top_disk(state: PuzzleState, peg: PegIndex) -> Disk | None:
    stack = state.pegs[peg]
    return stack[-1] if stack else None


def _illegal_reason(state: PuzzleState, from_peg: object, to_peg: object) -> str | None:
    for peg in (from_peg, to_peg):
        if isinstance(peg, bool) or not isinstance(peg, int):
            return "peg indices must be integers"
        if peg < 0 or peg >= state.n_pegs:
            return f"peg index must be in [0, {state.n_pegs - 1}], got {peg}"
    if from_peg == to_peg:
        return "from_peg and to_peg must be different"
    source = state.pegs[from_peg]
    if not source:
        return f"peg {from_peg} is empty"
    target = state.pegs[to_peg]
    if target and target[-1] < source[-1]:
        return f"cannot place disk {source[-1]} on top of smaller disk {target[-1]}"
    return None


def is_legal_move(state: PuzzleState, from_peg: PegIndex, to_peg: PegIndex) -> bool:
    return _illegal_reason(state, from_peg, to_peg) is None


def apply_move(state: PuzzleState, from_peg: PegIndex, to_peg: PegIndex) -> PuzzleState:
    """Return a new state with the top disk of `from_peg` moved onto `to_peg`.

    The player move counter is left alone; callers that score player moves
    bump `moves_made` themselves.
    """

    reason = _illegal_reason(state, from_peg, to_peg)
    if reason is not None:
        raise IllegalMoveError(reason)

    pegs = list(state.pegs)
    disk = pegs[from_peg][-1]
    pegs[from_peg] = pegs[from_peg][:-1]
    pegs[to_peg] = pegs[to_peg] + (disk,)
    return replace(state, pegs=tuple(pegs))


def legal_moves(state: PuzzleState) -> list[Move]:
    legal: list[Move] = []
    for from_peg in range(state.n_pegs):
        if not state.pegs[from_peg]:
            continue
        disk = state.pegs[from_peg][-1]
        for to_peg in range(state.n_pegs):
            if to_peg == from_peg:
                continue
            if not state.pegs[to_peg] or state.pegs[to_peg][-1] > disk:
                legal.append((from_peg, to_peg))
    return legal


def is_solved(state: PuzzleState, goal_peg: PegIndex | None = None) -> bool:
    goal = state.n_pegs - 1 if goal_peg is None else goal_peg
    return state.pegs[goal] == _expected_stack(state.n_disks)
