from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Sequence, TypeAlias

from .env import HanoiError, Move, PegIndex, _validate_n_disks, _validate_n_pegs

Phase: TypeAlias = Literal["enter", "move", "exit"]


class DegenerateFallbackUsed(HanoiError):
    """Raised when a plan moves a multi-disk stack because no auxiliary peg exists."""


@dataclass(frozen=True, slots=True)
class RecursionStep:
    """One event of a simulated `solve(n, from, to, aux)` call."""

    depth: int
    n: int
    from_peg: PegIndex
    to_peg: PegIndex
    aux: tuple[PegIndex, ...]
    phase: Phase

    def to_dict(self) -> dict[str, Any]:
        return {
            "depth": self.depth,
            "n": self.n,
            "from_peg": self.from_peg,
            "to_peg": self.to_peg,
            "aux": list(self.aux),
            "phase": self.phase,
        }


@dataclass(frozen=True, slots=True)
class Solution:
    """Moves plus the recursion trace that produced them.

    The i-th `move` phase step in `trace` corresponds to `moves[i]`.
    `fallback_moves` lists indices of moves that shift a whole stack at once
    and are therefore not playable under the rules.
    """

    moves: tuple[Move, ...]
    trace: tuple[RecursionStep, ...]
    fallback_moves: tuple[int, ...] = ()

    @property
    def uses_fallback(self) -> bool:
        return bool(self.fallback_moves)

    def require_physical(self) -> Solution:
        if self.fallback_moves:
            raise DegenerateFallbackUsed(
                "no auxiliary peg available: move(s) "
                f"{list(self.fallback_moves)} transfer a multi-disk stack at once"
            )
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "moves": [list(m) for m in self.moves],
            "trace": [step.to_dict() for step in self.trace],
            "fallback_moves": list(self.fallback_moves),
        }


def _solve(
    n: int,
    from_peg: PegIndex,
    to_peg: PegIndex,
    aux: tuple[PegIndex, ...],
    depth: int,
    moves: list[Move],
    trace: list[RecursionStep],
    fallback: list[int],
) -> None:
    if n <= 0:
        return

    def emit(phase: Phase) -> None:
        trace.append(RecursionStep(depth, n, from_peg, to_peg, aux, phase))

    emit("enter")
    if n == 1 or not aux:
        if n > 1:
            fallback.append(len(moves))
        moves.append((from_peg, to_peg))
        emit("move")
        emit("exit")
        return

    temp, rest = aux[0], aux[1:]
    # The vacated destination becomes an auxiliary for the sub-problem.
    _solve(n - 1, from_peg, temp, (to_peg, *rest), depth + 1, moves, trace, fallback)
    moves.append((from_peg, to_peg))
    emit("move")
    _solve(n - 1, temp, to_peg, (from_peg, *rest), depth + 1, moves, trace, fallback)
    emit("exit")


def generate(
    n: int,
    from_peg: PegIndex,
    to_peg: PegIndex,
    aux: Sequence[PegIndex],
    *,
    strict: bool = False,
) -> Solution:
    """Recursively move `n` disks, always parking on the first auxiliary peg.

    Optimal for a single auxiliary peg; with more pegs the plan is valid but
    usually longer than `minimal_moves`.
    """

    moves: list[Move] = []
    trace: list[RecursionStep] = []
    fallback: list[int] = []
    _solve(n, from_peg, to_peg, tuple(aux), 0, moves, trace, fallback)
    solution = Solution(
        moves=tuple(moves), trace=tuple(trace), fallback_moves=tuple(fallback)
    )
    if strict:
        solution.require_physical()
    return solution


def default_aux(
    n_pegs: int, source: PegIndex, target: PegIndex
) -> tuple[PegIndex, ...]:
    return tuple(peg for peg in range(n_pegs) if peg not in (source, target))


def plan_solution(
    n_pegs: int,
    n_disks: int,
    *,
    source: PegIndex = 0,
    target: PegIndex | None = None,
    strict: bool = False,
) -> Solution:
    _validate_n_pegs(n_pegs)
    _validate_n_disks(n_disks)
    resolved_target = n_pegs - 1 if target is None else target
    for peg in (source, resolved_target):
        if peg < 0 or peg >= n_pegs:
            raise ValueError(f"peg index must be in [0, {n_pegs - 1}], got {peg}")
    if source == resolved_target:
        raise ValueError("source and target must be different")
    return generate(
        n_disks,
        source,
        resolved_target,
        default_aux(n_pegs, source, resolved_target),
        strict=strict,
    )
