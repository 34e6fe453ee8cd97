"""Grid data structure: 81 cell values plus row/column/box queries."""

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence, Tuple

Cell = Optional[int]
Coord = Tuple[int, int]

SIZE = 9
BOX_SIZE = 3
EMPTY: Cell = None
DIGITS = range(1, SIZE + 1)

# Blank markers seen in text and spreadsheet puzzle sources.
BLANK_MARKERS = {"", ".", "0", "_", "-"}
DIGIT_TEXT = {str(d) for d in DIGITS}


class InvalidCellValueError(ValueError):
    """Raised when a cell value is neither 1-9 nor a blank marker."""

    def __init__(self, value: Any, row: Optional[int] = None, col: Optional[int] = None):
        self.value = value
        self.row = row
        self.col = col
        where = f" at ({row}, {col})" if row is not None and col is not None else ""
        super().__init__(f"Invalid cell value{where}: {value!r} (expected 1-9 or empty)")


def coerce_cell(value: Any, row: Optional[int] = None, col: Optional[int] = None) -> Cell:
    """Map a raw value to a cell value.

    Falsy values (None, 0, "", False) and blank markers become EMPTY; ints and
    ASCII digit strings 1-9 are kept. Everything else is rejected, never coerced.
    """
    if isinstance(value, float) and math.isnan(value):
        raise InvalidCellValueError(value, row, col)
    if not value:
        return EMPTY
    if isinstance(value, str):
        text = value.strip()
        if text in BLANK_MARKERS:
            return EMPTY
        if text in DIGIT_TEXT:
            return int(text)
        raise InvalidCellValueError(value, row, col)
    # numbers.Integral also admits numpy integers read from tabular sources.
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidCellValueError(value, row, col)
    if value not in DIGITS:
        raise InvalidCellValueError(value, row, col)
    return int(value)


def _check_index(name: str, index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < SIZE:
        raise IndexError(f"{name} index out of range: {index!r} (expected 0-{SIZE - 1})")


def box_index(row: int, col: int) -> int:
    _check_index("row", row)
    _check_index("column", col)
    return BOX_SIZE * (row // BOX_SIZE) + col // BOX_SIZE


def box_origin(box: int) -> Coord:
    """Top-left coordinate of a 3x3 box."""
    _check_index("box", box)
    return BOX_SIZE * (box // BOX_SIZE), BOX_SIZE * (box % BOX_SIZE)


@dataclass
class Grid:
    """
    A 9x9 board of cell values. Each cell holds an int 1-9 or EMPTY.
    The grid is only a container: it does not enforce Sudoku rules, that is
    the solver's job.
    """

    cells: List[List[Cell]] = field(
        default_factory=lambda: [[EMPTY] * SIZE for _ in range(SIZE)]
    )

    def __post_init__(self) -> None:
        rows = list(self.cells)
        if len(rows) != SIZE:
            raise ValueError(f"Grid must have {SIZE} rows, got {len(rows)}")
        normalized: List[List[Cell]] = []
        for r, raw_row in enumerate(rows):
            if isinstance(raw_row, str):
                raise ValueError(f"Row {r} must be a sequence of cells, not a string")
            values = list(raw_row)
            if len(values) != SIZE:
                raise ValueError(f"Row {r} must have {SIZE} cells, got {len(values)}")
            normalized.append([coerce_cell(v, r, c) for c, v in enumerate(values)])
        self.cells = normalized

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> "Grid":
        return cls(cells=[list(row) for row in rows])

    def get(self, row: int, col: int) -> Cell:
        _check_index("row", row)
        _check_index("column", col)
        return self.cells[row][col]

    def set(self, row: int, col: int, value: Any) -> None:
        _check_index("row", row)
        _check_index("column", col)
        self.cells[row][col] = coerce_cell(value, row, col)

    def row_values(self, row: int) -> Tuple[Cell, ...]:
        _check_index("row", row)
        return tuple(self.cells[row])

    def column_values(self, col: int) -> Tuple[Cell, ...]:
        _check_index("column", col)
        return tuple(self.cells[r][col] for r in range(SIZE))

    def box_values(self, box: int) -> Tuple[Cell, ...]:
        """Values of a 3x3 box, row-major within the box."""
        r0, c0 = box_origin(box)
        return tuple(
            self.cells[r][c]
            for r in range(r0, r0 + BOX_SIZE)
            for c in range(c0, c0 + BOX_SIZE)
        )

    def empty_cells(self) -> Iterator[Coord]:
        for r in range(SIZE):
            for c in range(SIZE):
                if self.cells[r][c] is EMPTY:
                    yield r, c

    def filled_count(self) -> int:
        return sum(1 for row in self.cells for value in row if value is not EMPTY)

    def is_complete(self) -> bool:
        return self.filled_count() == SIZE * SIZE

    def copy(self) -> "Grid":
        return Grid(cells=[row[:] for row in self.cells])

    def to_rows(self) -> List[List[Cell]]:
        return [row[:] for row in self.cells]

    def to_string(self) -> str:
        return "".join("." if v is EMPTY else str(v) for row in self.cells for v in row)

    def pretty(self) -> str:
        lines = []
        for r, row in enumerate(self.cells):
            if r and r % BOX_SIZE == 0:
                lines.append("------+-------+------")
            chunks = []
            for start in range(0, SIZE, BOX_SIZE):
                chunk = row[start:start + BOX_SIZE]
                chunks.append(" ".join("." if v is EMPTY else str(v) for v in chunk))
            lines.append(" | ".join(chunks))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.pretty()
