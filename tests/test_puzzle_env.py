from __future__ import annotations

import unittest
from collections import Counter

from hanoi_tutor.puzzle.env import (
    IllegalMoveError,
    PuzzleState,
    apply_move,
    initial_state,
    is_legal_move,
    is_solved,
    legal_moves,
    top_disk,
)


def _disk_multiset(state: PuzzleState) -> Counter[int]:
    return Counter(disk for peg in state.pegs for disk in peg)


class TestPuzzleState(unittest.TestCase):
    def test_initial_state_stacks_all_disks_on_first_peg(self) -> None:
        for n_pegs in range(2, 9):
            for n_disks in range(1, 9):
                state = initial_state(n_pegs, n_disks)
                self.assertEqual(len(state.pegs), n_pegs)
                self.assertEqual(state.pegs[0], tuple(range(n_disks, 0, -1)))
                self.assertEqual(top_disk(state, 0), 1)
                self.assertEqual(state.pegs[0][0], n_disks)
                self.assertTrue(all(peg == () for peg in state.pegs[1:]))
                self.assertIsNone(state.selected_peg)
                self.assertEqual(state.moves_made, 0)

    def test_initial_state_rejects_out_of_range_config(self) -> None:
        with self.assertRaises(ValueError):
            initial_state(1, 3)
        with self.assertRaises(ValueError):
            initial_state(9, 3)
        with self.assertRaises(ValueError):
            initial_state(3, 0)
        with self.assertRaises(ValueError):
            initial_state(3, 9)
        with self.assertRaises(TypeError):
            initial_state(True, 3)

    def test_to_dict_includes_disk_positions(self) -> None:
        state = apply_move(initial_state(3, 2), 0, 1)
        payload = state.to_dict()
        self.assertEqual(payload["pegs"], [[2], [1], []])
        self.assertEqual(payload["disk_positions"], [1, 0])
        self.assertEqual(payload["moves_made"], 0)


class TestMoveValidator(unittest.TestCase):
    def test_same_peg_is_illegal(self) -> None:
        state = initial_state(3, 3)
        self.assertFalse(is_legal_move(state, 0, 0))

    def test_empty_source_is_illegal(self) -> None:
        state = initial_state(3, 3)
        self.assertFalse(is_legal_move(state, 1, 2))

    def test_larger_on_smaller_is_illegal(self) -> None:
        state = apply_move(initial_state(3, 3), 0, 2)
        self.assertFalse(is_legal_move(state, 0, 2))
        self.assertTrue(is_legal_move(state, 0, 1))
        self.assertTrue(is_legal_move(state, 2, 0))

    def test_out_of_range_peg_is_illegal_not_an_error(self) -> None:
        state = initial_state(3, 3)
        self.assertFalse(is_legal_move(state, 0, 3))
        self.assertFalse(is_legal_move(state, -1, 0))

    def test_legal_moves_for_initial_state(self) -> None:
        self.assertEqual(set(legal_moves(initial_state(3, 3))), {(0, 1), (0, 2)})
        self.assertEqual(
            set(legal_moves(initial_state(4, 2))), {(0, 1), (0, 2), (0, 3)}
        )


class TestApplyMove(unittest.TestCase):
    def test_apply_move_returns_new_state(self) -> None:
        state0 = initial_state(3, 3)
        state1 = apply_move(state0, 0, 1)
        self.assertEqual(state0.pegs[0], (3, 2, 1))
        self.assertEqual(state1.pegs[0], (3, 2))
        self.assertEqual(state1.pegs[1], (1,))
        self.assertEqual(state1.moves_made, 0)

    def test_illegal_move_raises_and_leaves_state_alone(self) -> None:
        state = apply_move(initial_state(3, 3), 0, 2)
        with self.assertRaises(IllegalMoveError) as ctx:
            apply_move(state, 0, 2)
        self.assertIn("smaller disk", str(ctx.exception))
        self.assertEqual(state.pegs, ((3, 2), (), (1,)))

        with self.assertRaises(IllegalMoveError):
            apply_move(state, 1, 0)
        with self.assertRaises(IllegalMoveError):
            apply_move(state, 2, 2)
        with self.assertRaises(IllegalMoveError):
            apply_move(state, 0, 5)

    def test_disk_multiset_is_preserved(self) -> None:
        state = initial_state(4, 5)
        expected = Counter(range(1, 6))
        for from_peg, to_peg in [(0, 1), (0, 2), (1, 2), (0, 3), (2, 0), (2, 3)]:
            state = apply_move(state, from_peg, to_peg)
            self.assertEqual(_disk_multiset(state), expected)
            for peg in state.pegs:
                self.assertEqual(list(peg), sorted(peg, reverse=True))

    def test_is_solved(self) -> None:
        state = initial_state(3, 1)
        self.assertFalse(is_solved(state))
        state = apply_move(state, 0, 2)
        self.assertTrue(is_solved(state))
        self.assertFalse(is_solved(state, goal_peg=1))


if __name__ == "__main__":
    unittest.main()
