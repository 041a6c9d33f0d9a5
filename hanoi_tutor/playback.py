from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Protocol

from hanoi_tutor.config import DEFAULT_CONFIG, clamp_disks, clamp_pegs, clamp_speed
from hanoi_tutor.puzzle.callstack import active_calls, next_trace_index
from hanoi_tutor.puzzle.env import (
    HanoiError,
    Move,
    PegIndex,
    PuzzleState,
    apply_move,
    initial_state,
    is_legal_move,
    is_solved,
)
from hanoi_tutor.puzzle.optimal import UNSOLVABLE, Score, score_moves
from hanoi_tutor.puzzle.solver import (
    DegenerateFallbackUsed,
    RecursionStep,
    Solution,
    plan_solution,
)

SELECT_NON_EMPTY_MESSAGE = "Select a rod with disks first."
NO_DISK_MESSAGE = "No disk to move."
ILLEGAL_MOVE_MESSAGE = "Illegal move: cannot place larger disk on smaller one."


class PlaybackBusyError(HanoiError):
    """Raised when a manual action is attempted while auto-play is running."""


class Timer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


def _thread_timer(interval_s: float, callback: Callable[[], None]) -> Timer:
    timer = threading.Timer(interval_s, callback)
    timer.daemon = True
    return timer


def _minimal_label(score: Score) -> str:
    return "n/a" if score.minimal is UNSOLVABLE else str(score.minimal)


@dataclass(frozen=True, slots=True)
class PlaybackFrame:
    """Consistent view of a session, taken under its lock."""

    state: PuzzleState
    move_index: int
    total_moves: int
    last_move: Move | None
    calls: tuple[RecursionStep, ...]
    running: bool
    message: str | None


FrameListener = Callable[[PlaybackFrame], None]


class PlaybackSession:
    """Single-writer owner of a puzzle, its solve plan and the playback cursor.

    Every public method takes the session lock, so timer ticks, manual steps
    and player moves never interleave. Stopping, resetting or reconfiguring
    bumps a generation counter; a tick scheduled under an older generation
    does nothing when it fires.
    """

    def __init__(
        self,
        n_pegs: int = DEFAULT_CONFIG["n_pegs"],
        n_disks: int = DEFAULT_CONFIG["n_disks"],
        *,
        speed_ms: int = DEFAULT_CONFIG["speed_ms"],
        timer_factory: TimerFactory | None = None,
        on_tick: FrameListener | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._timer_factory = timer_factory or _thread_timer
        # Called with the lock held after every timer tick; must not call
        # back into the session.
        self._on_tick = on_tick
        self._timer: Timer | None = None
        self._generation = 0

        self.n_pegs = clamp_pegs(n_pegs)
        self.n_disks = clamp_disks(n_disks)
        self.speed_ms = clamp_speed(speed_ms)
        self.state: PuzzleState = initial_state(self.n_pegs, self.n_disks)
        self.solution: Solution | None = None
        self.move_index = 0
        self.trace_index = 0
        self.running = False
        self.message: str | None = None

    # -- configuration -----------------------------------------------------

    def configure(self, n_pegs: Any = None, n_disks: Any = None) -> PuzzleState:
        with self._lock:
            if n_pegs is not None:
                self.n_pegs = clamp_pegs(n_pegs)
            if n_disks is not None:
                self.n_disks = clamp_disks(n_disks)
            self._reset_locked()
            return self.state

    def set_speed(self, speed_ms: Any) -> int:
        with self._lock:
            self.speed_ms = clamp_speed(speed_ms)
            return self.speed_ms

    def reset(self) -> PuzzleState:
        with self._lock:
            self._reset_locked()
            return self.state

    def stop(self) -> None:
        with self._lock:
            self._cancel_locked()

    close = stop

    # -- player input ------------------------------------------------------

    def click_peg(self, index: PegIndex) -> str | None:
        """Select/deselect a rod or move the selected disk onto it.

        Returns the feedback message for this click, if any.
        """

        with self._lock:
            if index < 0 or index >= self.n_pegs:
                raise ValueError(f"peg index must be in [0, {self.n_pegs - 1}]")
            if self.running:
                return None

            selected = self.state.selected_peg
            if selected is None:
                if not self.state.pegs[index]:
                    self.message = SELECT_NON_EMPTY_MESSAGE
                    return self.message
                self.state = replace(self.state, selected_peg=index)
                self.message = None
                return None

            self.state = replace(self.state, selected_peg=None)
            if selected == index:
                return None
            if not self.state.pegs[selected]:
                self.message = NO_DISK_MESSAGE
                return self.message
            if not is_legal_move(self.state, selected, index):
                self.message = ILLEGAL_MOVE_MESSAGE
                return self.message
            self._player_move_locked(selected, index)
            return self.message

    def player_move(self, from_peg: PegIndex, to_peg: PegIndex) -> PuzzleState:
        with self._lock:
            if self.running:
                raise PlaybackBusyError("stop auto-play before moving disks")
            self._player_move_locked(from_peg, to_peg)
            return self.state

    # -- solving and playback ----------------------------------------------

    def solve(self, *, autoplay: bool = True) -> Solution:
        """Plan the recursive solution from the start position.

        The board is reset first because the plan assumes every disk is on
        the first rod.
        """

        with self._lock:
            self._cancel_locked()
            solution = self._prepare_plan_locked()
            if autoplay and solution.moves:
                self.running = True
                self._schedule_locked()
            return solution

    def step(self) -> bool:
        """Apply the next planned move; False once the plan is exhausted."""

        with self._lock:
            if self.running:
                raise PlaybackBusyError("stop auto-play before stepping manually")
            if self.solution is None:
                self._prepare_plan_locked()
            return self._advance_locked()

    def active_calls(self) -> tuple[RecursionStep, ...]:
        with self._lock:
            if self.solution is None:
                return ()
            return active_calls(self.solution.trace, self.trace_index)

    def snapshot(self) -> PlaybackFrame:
        with self._lock:
            return self._frame_locked()

    def score(self) -> Score:
        with self._lock:
            return score_moves(self.state.moves_made, self.n_pegs, self.n_disks)

    @property
    def is_solved(self) -> bool:
        return is_solved(self.state)

    @property
    def total_moves(self) -> int:
        return 0 if self.solution is None else len(self.solution.moves)

    # -- internals (caller holds the lock) ---------------------------------

    def _cancel_locked(self) -> None:
        self.running = False
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _reset_locked(self) -> None:
        self._cancel_locked()
        self.state = initial_state(self.n_pegs, self.n_disks)
        self.solution = None
        self.move_index = 0
        self.trace_index = 0
        self.message = None

    def _prepare_plan_locked(self) -> Solution:
        # The board is only reset once the plan is known to be playable.
        solution = plan_solution(self.n_pegs, self.n_disks)
        if solution.uses_fallback:
            self.message = (
                f"{self.n_disks} disks cannot be moved with only {self.n_pegs} rods "
                "under the rules."
            )
            solution.require_physical()
        self._reset_locked()
        self.solution = solution
        return solution

    def _player_move_locked(self, from_peg: PegIndex, to_peg: PegIndex) -> None:
        moved = apply_move(self.state, from_peg, to_peg)
        self.state = replace(
            moved, selected_peg=None, moves_made=self.state.moves_made + 1
        )
        # A hand-made move invalidates any prepared plan.
        self.solution = None
        self.move_index = 0
        self.trace_index = 0
        self.message = None
        if is_solved(self.state):
            score = score_moves(self.state.moves_made, self.n_pegs, self.n_disks)
            self.message = (
                f"Solved in {score.moves_made} moves "
                f"(minimal: {_minimal_label(score)})."
            )

    def _advance_locked(self) -> bool:
        solution = self.solution
        if solution is None or self.move_index >= len(solution.moves):
            return False
        from_peg, to_peg = solution.moves[self.move_index]
        self.state = apply_move(self.state, from_peg, to_peg)
        self.move_index += 1
        if self.move_index == len(solution.moves):
            self.trace_index = len(solution.trace)
        else:
            self.trace_index = next_trace_index(solution.trace, self.trace_index)
        if is_solved(self.state):
            score = score_moves(self.move_index, self.n_pegs, self.n_disks)
            self.message = (
                f"Solved by recursion in {self.move_index} moves "
                f"(minimal: {_minimal_label(score)})."
            )
        return True

    def _frame_locked(self) -> PlaybackFrame:
        solution = self.solution
        last_move = None
        calls: tuple[RecursionStep, ...] = ()
        if solution is not None:
            if self.move_index > 0:
                last_move = solution.moves[self.move_index - 1]
            calls = active_calls(solution.trace, self.trace_index)
        return PlaybackFrame(
            state=self.state,
            move_index=self.move_index,
            total_moves=0 if solution is None else len(solution.moves),
            last_move=last_move,
            calls=calls,
            running=self.running,
            message=self.message,
        )

    def _schedule_locked(self) -> None:
        generation = self._generation
        timer = self._timer_factory(
            self.speed_ms / 1000.0, lambda: self._tick(generation)
        )
        self._timer = timer
        timer.start()

    def _tick(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or not self.running:
                return
            self._timer = None
            try:
                self._advance_locked()
            except HanoiError as exc:
                self._cancel_locked()
                self.message = f"Playback stopped: {exc}"
            else:
                if self.solution is None or self.move_index >= len(
                    self.solution.moves
                ):
                    self.running = False
                else:
                    self._schedule_locked()
            if self._on_tick is not None:
                self._on_tick(self._frame_locked())
