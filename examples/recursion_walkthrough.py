from __future__ import annotations

from hanoi_tutor.puzzle import (
    active_calls,
    apply_move,
    format_call,
    initial_state,
    is_solved,
    minimal_moves,
    plan_solution,
)


def main() -> None:
    n_pegs, n_disks = 4, 3
    state = initial_state(n_pegs, n_disks)
    solution = plan_solution(n_pegs, n_disks)

    trace_index = 0
    move_number = 0
    for index, step in enumerate(solution.trace):
        if step.phase != "move":
            continue
        from_peg, to_peg = solution.moves[move_number]
        state = apply_move(state, from_peg, to_peg)
        move_number += 1
        trace_index = index + 1
        print(f"Move {move_number}: Rod {from_peg + 1} -> Rod {to_peg + 1}")
        for call in active_calls(solution.trace, trace_index):
            print("   ", format_call(call))

    print("\nSolved:", is_solved(state))
    print(f"Moves: {len(solution.moves)} (minimal: {minimal_moves(n_pegs, n_disks)})")


if __name__ == "__main__":
    main()
