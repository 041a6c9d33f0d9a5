from __future__ import annotations

from .callstack import active_calls, format_call, next_trace_index
from .env import (
    MAX_DISKS,
    MAX_PEGS,
    MIN_DISKS,
    MIN_PEGS,
    Disk,
    HanoiError,
    IllegalMoveError,
    Move,
    PegIndex,
    PuzzleState,
    apply_move,
    initial_state,
    is_legal_move,
    is_solved,
    legal_moves,
    top_disk,
)
from .optimal import (
    UNSOLVABLE,
    Score,
    UnsolvableConfiguration,
    best_split,
    clear_minimal_moves_cache,
    minimal_moves,
    score_moves,
)
from .render import render_board, render_call_stack
from .solver import (
    DegenerateFallbackUsed,
    RecursionStep,
    Solution,
    default_aux,
    generate,
    plan_solution,
)
from .vision import render_puzzle_image, render_state_image

__all__ = [
    "MAX_DISKS",
    "MAX_PEGS",
    "MIN_DISKS",
    "MIN_PEGS",
    "Disk",
    "HanoiError",
    "IllegalMoveError",
    "Move",
    "PegIndex",
    "PuzzleState",
    "apply_move",
    "initial_state",
    "is_legal_move",
    "is_solved",
    "legal_moves",
    "top_disk",
    "UNSOLVABLE",
    "Score",
    "UnsolvableConfiguration",
    "best_split",
    "clear_minimal_moves_cache",
    "minimal_moves",
    "score_moves",
    "DegenerateFallbackUsed",
    "RecursionStep",
    "Solution",
    "default_aux",
    "generate",
    "plan_solution",
    "active_calls",
    "format_call",
    "next_trace_index",
    "render_board",
    "render_call_stack",
    "render_puzzle_image",
    "render_state_image",
]
