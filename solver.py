"""Top-level Sudoku solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a Grid or raw puzzle input
compatible with `src.sudoku.parser.parse_puzzle`.
"""

from typing import Any, Optional

from src.sudoku import solver_core
from src.sudoku.grid import Grid
from src.sudoku.parser import parse_puzzle


def solve_puzzle(puzzle: Any) -> Optional[Grid]:
    """
    Solve a puzzle and return the completed Grid, or None if it has no solution.
    Accepts:
      - Grid instances (solved on a copy; the caller's grid is left untouched)
      - 81-character strings, 9x9 nested lists, or dicts with a "grid" key
    """
    if isinstance(puzzle, Grid):
        grid = puzzle.copy()
    elif isinstance(puzzle, (str, list, tuple, dict)):
        grid = parse_puzzle(puzzle)
    else:
        raise TypeError("solve_puzzle expects a Grid, puzzle string, 9x9 list or puzzle dictionary")

    if solver_core.solve(grid):
        return grid
    return None


__all__ = ["solve_puzzle"]
