"""Tower of Hanoi teaching engine: puzzle state, recursive solver, call traces."""

from __future__ import annotations

from .playback import PlaybackBusyError, PlaybackFrame, PlaybackSession
from .puzzle import (
    UNSOLVABLE,
    DegenerateFallbackUsed,
    HanoiError,
    IllegalMoveError,
    PuzzleState,
    RecursionStep,
    Solution,
    active_calls,
    apply_move,
    generate,
    initial_state,
    is_legal_move,
    minimal_moves,
    plan_solution,
)

__all__ = [
    "UNSOLVABLE",
    "DegenerateFallbackUsed",
    "HanoiError",
    "IllegalMoveError",
    "PlaybackBusyError",
    "PlaybackFrame",
    "PlaybackSession",
    "PuzzleState",
    "RecursionStep",
    "Solution",
    "active_calls",
    "apply_move",
    "generate",
    "initial_state",
    "is_legal_move",
    "minimal_moves",
    "plan_solution",
]
