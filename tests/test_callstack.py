from __future__ import annotations

import unittest

from hanoi_tutor.puzzle.callstack import active_calls, format_call, next_trace_index
from hanoi_tutor.puzzle.env import apply_move, initial_state
from hanoi_tutor.puzzle.render import render_board, render_call_stack
from hanoi_tutor.puzzle.solver import RecursionStep, plan_solution


def _summary(calls: tuple[RecursionStep, ...]) -> list[tuple[int, int, int, int]]:
    return [(c.depth, c.n, c.from_peg, c.to_peg) for c in calls]


class TestActiveCalls(unittest.TestCase):
    def setUp(self) -> None:
        self.trace = plan_solution(3, 3).trace

    def test_trace_length(self) -> None:
        self.assertEqual(len(self.trace), 21)

    def test_empty_at_start_and_end(self) -> None:
        for n_pegs, n_disks in [(3, 1), (3, 3), (4, 5), (2, 2)]:
            trace = plan_solution(n_pegs, n_disks).trace
            self.assertEqual(active_calls(trace, 0), ())
            self.assertEqual(active_calls(trace, len(trace)), ())

    def test_nested_calls_while_descending(self) -> None:
        self.assertEqual(_summary(active_calls(self.trace, 1)), [(0, 3, 0, 2)])
        self.assertEqual(
            _summary(active_calls(self.trace, 3)),
            [(0, 3, 0, 2), (1, 2, 0, 1), (2, 1, 0, 2)],
        )

    def test_call_stays_active_until_its_exit_is_played(self) -> None:
        # Index 4 is the exit of the innermost call.
        self.assertEqual(len(active_calls(self.trace, 4)), 3)
        self.assertEqual(
            _summary(active_calls(self.trace, 5)), [(0, 3, 0, 2), (1, 2, 0, 1)]
        )

    def test_second_branch(self) -> None:
        self.assertEqual(_summary(active_calls(self.trace, 11)), [(0, 3, 0, 2)])
        self.assertEqual(
            _summary(active_calls(self.trace, 12)), [(0, 3, 0, 2), (1, 2, 1, 2)]
        )
        self.assertEqual(
            _summary(active_calls(self.trace, 17)),
            [(0, 3, 0, 2), (1, 2, 1, 2), (2, 1, 0, 2)],
        )

    def test_every_prefix_is_a_proper_stack(self) -> None:
        trace = plan_solution(4, 5).trace
        for prefix in range(len(trace) + 1):
            calls = active_calls(trace, prefix)
            self.assertEqual([c.depth for c in calls], list(range(len(calls))))
            self.assertTrue(all(c.phase == "enter" for c in calls))

    def test_prefix_is_clamped(self) -> None:
        self.assertEqual(active_calls(self.trace, -5), ())
        self.assertEqual(active_calls(self.trace, 1000), ())

    def test_unclosed_call_counts_as_active(self) -> None:
        truncated = self.trace[:3]
        self.assertEqual(len(active_calls(truncated, 3)), 3)


class TestTraceHelpers(unittest.TestCase):
    def test_next_trace_index(self) -> None:
        trace = plan_solution(3, 3).trace
        self.assertEqual(next_trace_index(trace, 0), 4)
        self.assertEqual(next_trace_index(trace, 4), 6)
        self.assertEqual(next_trace_index(trace, 19), len(trace))

    def test_format_call(self) -> None:
        step = RecursionStep(2, 1, 0, 2, (1,), "enter")
        self.assertEqual(
            format_call(step), "    solve(n=1, from=Rod1, to=Rod3, aux=[Rod2])"
        )
        self.assertEqual(
            format_call(step, indent=False),
            "solve(n=1, from=Rod1, to=Rod3, aux=[Rod2])",
        )

    def test_render_call_stack_marks_current_call(self) -> None:
        trace = plan_solution(3, 2).trace
        text = render_call_stack(active_calls(trace, 2))
        lines = text.splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[1].startswith("->"))
        self.assertIn("solve(n=2, from=Rod1, to=Rod3, aux=[Rod2])", lines[0])
        self.assertEqual(
            render_call_stack(()), "No active calls (completed or not started)"
        )

    def test_render_board(self) -> None:
        state = apply_move(initial_state(3, 2), 0, 2)
        lines = render_board(state).splitlines()
        self.assertEqual(len(lines), 4)
        self.assertIn("===", lines[1])
        self.assertIn("Rod 3", lines[-1])


if __name__ == "__main__":
    unittest.main()
