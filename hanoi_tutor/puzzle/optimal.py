from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import lru_cache
from typing import Any


class UnsolvableConfiguration(enum.Enum):
    """Sentinel for peg/disk counts with no finite solution."""

    UNSOLVABLE = "unsolvable"

    def __repr__(self) -> str:
        return "UNSOLVABLE"


UNSOLVABLE = UnsolvableConfiguration.UNSOLVABLE


def _validate_counts(n_pegs: int, n_disks: int) -> None:
    for name, value in (("n_pegs", n_pegs), ("n_disks", n_disks)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if n_pegs < 1:
        raise ValueError(f"n_pegs must be >= 1, got {n_pegs}")
    if n_disks < 0:
        raise ValueError(f"n_disks must be >= 0, got {n_disks}")


@lru_cache(maxsize=None)
def _frame_stewart(n_pegs: int, n_disks: int) -> int | UnsolvableConfiguration:
    if n_disks == 0:
        return 0
    if n_disks == 1:
        return 1
    if n_pegs < 3:
        return UNSOLVABLE
    if n_pegs == 3:
        return (1 << n_disks) - 1

    best: int | None = None
    for split in range(1, n_disks):
        candidate = _split_cost(n_pegs, n_disks, split)
        if best is None or candidate < best:
            best = candidate
    assert best is not None
    return best


def _split_cost(n_pegs: int, n_disks: int, split: int) -> int:
    # With n_pegs >= 4 neither term can be unsolvable.
    spare = _frame_stewart(n_pegs, split)
    rest = _frame_stewart(n_pegs - 1, n_disks - split)
    assert isinstance(spare, int) and isinstance(rest, int)
    return 2 * spare + rest


def minimal_moves(n_pegs: int, n_disks: int) -> int | UnsolvableConfiguration:
    """Minimum number of moves for `n_disks` on `n_pegs` (Frame-Stewart).

    Returns `UNSOLVABLE` when fewer than three pegs hold more than one disk.
    """

    _validate_counts(n_pegs, n_disks)
    return _frame_stewart(n_pegs, n_disks)


def clear_minimal_moves_cache() -> None:
    _frame_stewart.cache_clear()


def best_split(n_pegs: int, n_disks: int) -> int | None:
    """Number of disks parked on a spare peg by the optimal Frame-Stewart split.

    None when the recurrence does not split (fewer than 4 pegs or 2 disks).
    """

    _validate_counts(n_pegs, n_disks)
    if n_pegs < 4 or n_disks < 2:
        return None
    best_split_value = 1
    best_cost = _split_cost(n_pegs, n_disks, 1)
    for split in range(2, n_disks):
        candidate = _split_cost(n_pegs, n_disks, split)
        if candidate < best_cost:
            best_cost = candidate
            best_split_value = split
    return best_split_value


@dataclass(frozen=True, slots=True)
class Score:
    moves_made: int
    minimal: int | UnsolvableConfiguration

    @property
    def excess(self) -> int | None:
        if self.minimal is UNSOLVABLE:
            return None
        return max(0, self.moves_made - self.minimal)

    @property
    def efficiency(self) -> float | None:
        """minimal / moves_made, 1.0 for an optimal run."""

        if self.minimal is UNSOLVABLE or self.moves_made <= 0:
            return None
        return min(1.0, self.minimal / self.moves_made)

    @property
    def is_optimal(self) -> bool:
        return self.minimal is not UNSOLVABLE and self.moves_made == self.minimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "moves_made": self.moves_made,
            "minimal": None if self.minimal is UNSOLVABLE else self.minimal,
            "excess": self.excess,
            "efficiency": self.efficiency,
            "optimal": self.is_optimal,
        }


def score_moves(moves_made: int, n_pegs: int, n_disks: int) -> Score:
    if moves_made < 0:
        raise ValueError(f"moves_made must be >= 0, got {moves_made}")
    return Score(moves_made=moves_made, minimal=minimal_moves(n_pegs, n_disks))
