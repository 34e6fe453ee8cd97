"""Backtracking Sudoku solver, placement checks, and whole-board consistency."""

from dataclasses import dataclass
from typing import Callable, Generator, Iterator, List, Optional

from .grid import BOX_SIZE, DIGITS, EMPTY, SIZE, Cell, Coord, Grid
from src.utils.trace import Tracer, get_tracer

StopCheck = Callable[[], bool]


class SolveCancelled(RuntimeError):
    """Raised when the caller's stop check asks the search to abort."""


@dataclass(frozen=True)
class Conflict:
    kind: str  # 'row', 'column' or 'box'
    index: int
    value: int


@dataclass(frozen=True)
class Step:
    """One event of a step-by-step solve, see `iter_steps`."""

    kind: str  # 'assign', 'unassign', 'solved', 'failed'
    row: Optional[int] = None
    col: Optional[int] = None
    value: Optional[int] = None


class _Placement:
    """Tentatively writes a value and undoes it on exit unless kept."""

    def __init__(self, grid: Grid, row: int, col: int, value: int):
        self.grid = grid
        self.row = row
        self.col = col
        self.value = value
        self.kept = False

    def keep(self) -> None:
        self.kept = True

    def __enter__(self) -> "_Placement":
        self.grid.set(self.row, self.col, self.value)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self.kept or exc_type is not None:
            self.grid.set(self.row, self.col, EMPTY)
        return False


def is_safe(grid: Grid, row: int, col: int, value: int) -> bool:
    """
    True if `value` at (row, col) duplicates nothing in its row, column or box.
    The cell itself is skipped so its current content is never counted.
    """
    if value not in DIGITS:
        raise ValueError(f"Candidate value must be 1-{SIZE}, got {value!r}")

    for c in range(SIZE):
        if c != col and grid.get(row, c) == value:
            return False

    for r in range(SIZE):
        if r != row and grid.get(r, col) == value:
            return False

    r0 = row - row % BOX_SIZE
    c0 = col - col % BOX_SIZE
    for r in range(r0, r0 + BOX_SIZE):
        for c in range(c0, c0 + BOX_SIZE):
            # Box cells sharing the row or column were already scanned above.
            if r != row and c != col and grid.get(r, c) == value:
                return False
    return True


def find_next_empty(grid: Grid) -> Optional[Coord]:
    """First empty cell in row-major order, or None when the grid is full."""
    # Row-major order fixes which solution is found first.
    for r in range(SIZE):
        for c in range(SIZE):
            if grid.get(r, c) is EMPTY:
                return r, c
    return None


def _duplicates(values) -> List[int]:
    seen = set()
    dupes = set()
    for value in values:
        if value is EMPTY:
            continue
        if value in seen:
            dupes.add(value)
        seen.add(value)
    return sorted(dupes)


def conflicts(grid: Grid) -> List[Conflict]:
    """List every row, column and box holding a repeated value."""
    found: List[Conflict] = []
    for i in range(SIZE):
        for kind, values in (
            ("row", grid.row_values(i)),
            ("column", grid.column_values(i)),
            ("box", grid.box_values(i)),
        ):
            found.extend(Conflict(kind, i, v) for v in _duplicates(values))
    return found


def is_consistent(grid: Grid) -> bool:
    """
    Check that no row, column or box contains a duplicate non-empty value.
    This is necessary but not sufficient for the grid to be solvable.
    """
    for i in range(SIZE):
        if _duplicates(grid.row_values(i)):
            return False
        if _duplicates(grid.column_values(i)):
            return False
        if _duplicates(grid.box_values(i)):
            return False
    return True


def check_placement(grid: Grid, row: int, col: int, value: Cell) -> bool:
    """Per-edit feedback: would `value` typed into (row, col) clash with the board?"""
    if value is EMPTY:
        grid.get(row, col)  # still reject bad coordinates
        return True
    return is_safe(grid, row, col, value)


def solve(
    grid: Grid,
    tracer: Optional[Tracer] = None,
    should_stop: Optional[StopCheck] = None,
) -> bool:
    """
    Fill every empty cell of `grid` in place by backtracking.
    Returns False, leaving the grid exactly as it was, when no completion
    exists or the grid already breaks a Sudoku rule.
    Raises SolveCancelled (grid rolled back) if `should_stop` returns True.
    """
    tracer = tracer or get_tracer()
    consistent = is_consistent(grid)
    tracer.log_consistency_check(consistent, reason="" if consistent else "Duplicate value in input")
    if not consistent:
        return False
    return _backtrack(grid, tracer, should_stop, depth=0)


def _backtrack(
    grid: Grid, tracer: Tracer, should_stop: Optional[StopCheck], depth: int
) -> bool:
    if should_stop is not None and should_stop():
        raise SolveCancelled(f"Search stopped at depth {depth}")

    cell = find_next_empty(grid)
    if cell is None:
        # Every write went through is_safe, so a full grid is a valid one.
        tracer.log_solution_found(filled_cells=SIZE * SIZE, depth=depth)
        return True

    row, col = cell
    for value in DIGITS:
        if not is_safe(grid, row, col, value):
            continue
        with _Placement(grid, row, col, value) as placement:
            tracer.log_assign(row, col, value, depth)
            if _backtrack(grid, tracer, should_stop, depth + 1):
                placement.keep()
                return True

    tracer.log_backtrack(row, col, depth)
    return False


def iter_steps(grid: Grid) -> Iterator[Step]:
    """
    Solve `grid` one step at a time, yielding each assignment and undo.
    The last step is 'solved' or 'failed'. Closing the iterator before the
    end rolls the grid back to how it was when iteration started.
    """
    if not is_consistent(grid):
        yield Step("failed")
        return
    solved = yield from _search_steps(grid)
    yield Step("solved" if solved else "failed")


def _search_steps(grid: Grid) -> Generator[Step, None, bool]:
    cell = find_next_empty(grid)
    if cell is None:
        return True

    row, col = cell
    for value in DIGITS:
        if not is_safe(grid, row, col, value):
            continue
        with _Placement(grid, row, col, value) as placement:
            yield Step("assign", row, col, value)
            solved = yield from _search_steps(grid)
            if solved:
                placement.keep()
                return True
        yield Step("unassign", row, col, value)
    return False
