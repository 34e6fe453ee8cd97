"""Sudoku grid model, parsing, and backtracking solver core."""

from .grid import EMPTY, Grid, InvalidCellValueError
from .solver_core import (
    Conflict,
    SolveCancelled,
    Step,
    check_placement,
    conflicts,
    find_next_empty,
    is_consistent,
    is_safe,
    iter_steps,
    solve,
)
from .parser import parse_puzzle

__all__ = [
    "EMPTY",
    "Grid",
    "InvalidCellValueError",
    "Conflict",
    "SolveCancelled",
    "Step",
    "check_placement",
    "conflicts",
    "find_next_empty",
    "is_consistent",
    "is_safe",
    "iter_steps",
    "solve",
    "parse_puzzle",
]
