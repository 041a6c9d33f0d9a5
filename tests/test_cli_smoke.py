from __future__ import annotations

import contextlib
import io
import json
import os
import tempfile
import threading
import unittest
from typing import Callable
from unittest.mock import patch

from hanoi_tutor.commands import cli, play, solve, table, trace


def _run(handler, argv: list[str]) -> tuple[int, str, str]:
    stdout = io.StringIO()
    stderr = io.StringIO()
    with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
        code = handler(argv)
    return code, stdout.getvalue(), stderr.getvalue()


class _ImmediateTimer:
    def __init__(self, callback: Callable[[], None]) -> None:
        self._thread = threading.Thread(target=callback, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        return


class _ImmediateTimerFactory:
    """Fires each tick right away on its own thread and records the delays."""

    def __init__(self) -> None:
        self.intervals: list[float] = []

    def __call__(self, interval_s: float, callback: Callable[[], None]):
        self.intervals.append(interval_s)
        return _ImmediateTimer(callback)


class TestCliSmoke(unittest.TestCase):
    def test_help_lists_commands(self) -> None:
        code, out, _err = _run(cli.main, [])
        self.assertEqual(code, 0)
        for name in ("solve", "table", "trace", "play", "frames"):
            self.assertIn(name, out)

    def test_unknown_command(self) -> None:
        code, out, _err = _run(cli.main, ["nope"])
        self.assertEqual(code, 2)
        self.assertIn("Unknown command: nope", out)

    def test_solve_prints_moves_and_bound(self) -> None:
        code, out, _err = _run(cli.main, ["solve", "--pegs", "3", "--disks", "3"])
        self.assertEqual(code, 0)
        self.assertIn("  1. Rod 1 -> Rod 3", out)
        self.assertIn("  7. Rod 1 -> Rod 3", out)
        self.assertIn("Moves: 7 (minimal: 7)", out)

    def test_solve_trace_lines(self) -> None:
        code, out, _err = _run(solve.main, ["--disks", "1", "--trace"])
        self.assertEqual(code, 0)
        self.assertIn("enter solve(n=1, from=Rod1, to=Rod3, aux=[Rod2])", out)
        self.assertIn("exit  solve(n=1, from=Rod1, to=Rod3, aux=[Rod2])", out)

    def test_solve_json(self) -> None:
        code, out, _err = _run(solve.main, ["--pegs", "4", "--disks", "4", "--json"])
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["minimal_moves"], 9)
        self.assertEqual(len(payload["moves"]), 15)
        self.assertNotIn("trace", payload)

    def test_solve_flags_fallback(self) -> None:
        code, out, err = _run(solve.main, ["--pegs", "2", "--disks", "2"])
        self.assertEqual(code, 1)
        self.assertIn("minimal: unsolvable", out)
        self.assertIn("no auxiliary rod available", err)

    def test_solve_reads_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"n_pegs": 3, "n_disks": 2}, f)
            code, out, _err = _run(solve.main, ["--config", path])
        self.assertEqual(code, 0)
        self.assertIn("Moves: 3 (minimal: 3)", out)

    def test_table(self) -> None:
        code, out, _err = _run(table.main, ["--max-pegs", "4", "--max-disks", "4"])
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[1].split(), ["2", "1", "-", "-", "-"])
        self.assertEqual(lines[2].split(), ["3", "1", "3", "7", "15"])
        self.assertEqual(lines[3].split(), ["4", "1", "3", "5", "9"])

    def test_table_splits(self) -> None:
        out = table.render_table(4, 3, splits=True)
        self.assertIn("(k=", out.splitlines()[-1])

    def test_trace_shows_call_stack(self) -> None:
        code, out, _err = _run(trace.main, ["--pegs", "3", "--disks", "2"])
        self.assertEqual(code, 0)
        self.assertIn("Move 1 of 3: Rod 1 -> Rod 2", out)
        self.assertIn("-> solve(n=2, from=Rod1, to=Rod3, aux=[Rod2])", out)
        self.assertIn("Solved by recursion in 3 moves (minimal: 3).", out)

    def test_trace_animate_prints_every_tick(self) -> None:
        timers = _ImmediateTimerFactory()

        def handler(argv: list[str]) -> int:
            return trace.main(argv, timer_factory=timers)

        code, out, _err = _run(
            handler, ["--pegs", "3", "--disks", "2", "--animate", "--speed", "5"]
        )
        self.assertEqual(code, 0)
        self.assertEqual(timers.intervals, [0.1, 0.1, 0.1])
        self.assertIn("Move 1 of 3: Rod 1 -> Rod 2", out)
        self.assertIn("Move 2 of 3: Rod 1 -> Rod 3", out)
        self.assertIn("Move 3 of 3: Rod 2 -> Rod 3", out)
        self.assertIn("No active calls (completed or not started)", out)
        self.assertTrue(
            out.rstrip().endswith("Solved by recursion in 3 moves (minimal: 3).")
        )

    def test_speed_comes_from_config_file(self) -> None:
        timers = _ImmediateTimerFactory()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"n_disks": 1, "speed_ms": 800}, f)
            code, _out, _err = _run(
                lambda argv: trace.main(argv, timer_factory=timers),
                ["--config", path, "--animate"],
            )
        self.assertEqual(code, 0)
        self.assertEqual(timers.intervals, [0.8])

    def test_trace_rejects_fallback(self) -> None:
        code, _out, err = _run(trace.main, ["--pegs", "2", "--disks", "3"])
        self.assertEqual(code, 1)
        self.assertIn("cannot be moved", err)

    def test_play_session(self) -> None:
        inputs = iter(["1 3", "2 3", "3 1", "1 3", "bogus", "score", "quit"])
        with patch("builtins.input", side_effect=lambda _prompt: next(inputs)):
            code, out, _err = _run(play.main, ["--pegs", "3", "--disks", "1"])
        self.assertEqual(code, 0)
        self.assertIn("Solved in 1 moves (minimal: 1).", out)
        self.assertIn("Illegal move: peg 1 is empty", out)
        self.assertIn("Unrecognized input: 'bogus'", out)
        self.assertIn("'moves_made': 3", out)

    def test_play_solve_and_eof(self) -> None:
        inputs = iter(["solve", "step"])

        def fake_input(_prompt: str) -> str:
            try:
                return next(inputs)
            except StopIteration:
                raise EOFError from None

        with patch("builtins.input", side_effect=fake_input):
            code, out, _err = _run(play.main, ["--disks", "2"])
        self.assertEqual(code, 0)
        self.assertIn("Move 3 of 3", out)
        self.assertIn("Nothing left to play", out)


if __name__ == "__main__":
    unittest.main()
