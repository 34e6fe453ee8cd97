"""CLI entrypoint: load a puzzle, check it, run the solver, and report metrics."""

import argparse
import sys
from pathlib import Path

from solver import solve_puzzle
from src.sudoku.grid import Grid
from src.sudoku.loader import load_puzzle
from src.sudoku.parser import parse_puzzle
from src.sudoku.solver_core import conflicts
from src.sudoku.templates import easy_sample_grid
from src.utils.io import save_json
from src.utils.trace import enable_tracing, get_tracer, reset_tracer


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Solve a 9x9 Sudoku puzzle by backtracking")
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help="Path to a puzzle file (.json, .txt, .csv or .parquet)",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Solve the built-in easy sample puzzle instead of a file.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write the solution JSON")
    parser.add_argument("--trace", type=Path, default=None, help="Optional path to write the solver trace CSV")
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only report row/column/box conflicts; do not search for a solution.",
    )
    parser.add_argument("--no-trace", action="store_true", help="Disable step tracing.")
    args = parser.parse_args(argv)
    if (args.input is None) == (not args.sample):
        parser.error("give either a puzzle file or --sample")
    return args


def format_result(puzzle_id: str, puzzle: Grid, solution, steps: int) -> dict:
    return {
        "id": puzzle_id,
        "status": "solved" if solution is not None else "unsolved",
        "puzzle": puzzle.to_string(),
        "solution": solution.to_rows() if solution is not None else None,
        "steps": steps,
    }


def report_conflicts(grid: Grid) -> bool:
    found = conflicts(grid)
    if not found:
        print("No conflicts: every row, column and box holds distinct values.")
        return True
    for conflict in found:
        print(f"Conflict: {conflict.kind} {conflict.index} repeats {conflict.value}")
    return False


def main(argv=None) -> int:
    args = parse_args(argv)
    reset_tracer()
    tracer = get_tracer()
    enable_tracing(not args.no_trace)

    try:
        if args.sample:
            puzzle_id, grid = "easy-sample", easy_sample_grid()
        else:
            record = load_puzzle(str(args.input))
            puzzle_id, grid = record["id"], parse_puzzle(record)
    except (ValueError, TypeError, OSError) as e:
        print(f"ERROR: Failed to load puzzle {args.input}: {e}")
        return 2

    print(f"Puzzle {puzzle_id}:")
    print(grid.pretty())
    print()

    if args.check_only:
        return 0 if report_conflicts(grid) else 1

    solution = solve_puzzle(grid)
    summary = tracer.summary()
    # Use assignments as a proxy for search effort; avoids counting bookkeeping logs.
    steps = summary.get("num_assignments", summary["total_steps"])

    if solution is None:
        print("No solution exists for this puzzle.")
        report_conflicts(grid)
    else:
        print("Solution:")
        print(solution.pretty())
    print(
        f"\nAssignments: {summary['num_assignments']}  "
        f"Backtracks: {summary['num_backtracks']}  "
        f"Time: {summary['elapsed_time_seconds']:.3f}s"
    )

    if args.output:
        save_json(args.output, format_result(puzzle_id, grid, solution, steps))
        print(f"Result written to {args.output}")
    if args.trace:
        tracer.to_csv(args.trace)

    return 0 if solution is not None else 1


if __name__ == "__main__":
    sys.exit(main())
