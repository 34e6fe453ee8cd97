"""Puzzle parser: convert raw puzzle input into a Grid.

Supports:
- 81-character strings (digits, with '.', '0', '_' or '-' for blanks)
- 9x9 nested lists
- dictionaries carrying either of the above under "grid" or "puzzle"
"""

from __future__ import annotations

from typing import Any, List

from .grid import BLANK_MARKERS, SIZE, Grid

# Characters used only to lay a board out on screen.
LAYOUT_CHARS = set(" \t\r\n|+")

PUZZLE_KEYS = ("grid", "puzzle", "board")
DIGIT_CHARS = set("0123456789")
RULER_CHARS = set("-=+")


def parse_puzzle(raw: Any) -> Grid:
    if isinstance(raw, Grid):
        return raw.copy()
    if isinstance(raw, dict):
        for key in PUZZLE_KEYS:
            if key in raw and raw[key] is not None:
                return parse_puzzle(raw[key])
        raise ValueError(f"Puzzle dictionary needs one of the keys: {', '.join(PUZZLE_KEYS)}")
    if isinstance(raw, str):
        return parse_grid_string(raw)
    if isinstance(raw, (list, tuple)):
        if raw and all(isinstance(row, str) for row in raw):
            return parse_grid_string("\n".join(raw))
        return Grid.from_rows(raw)
    raise TypeError(f"Cannot parse puzzle of type {type(raw).__name__}")


def parse_grid_string(text: str) -> Grid:
    """Parse a board written as text, one character per cell.

    In multi-line boards, ruler lines made of '-', '=' and '+' (such as
    "------+-------+------" or "=====================") are skipped. A line of
    nine or fewer '-' is a row of blanks.
    """
    cells: List[str] = []
    lines = text.splitlines()
    for line in lines:
        if len(lines) > 1 and _is_ruler(line):
            continue
        for ch in line:
            if ch in LAYOUT_CHARS:
                continue
            if ch in DIGIT_CHARS or ch in BLANK_MARKERS:
                cells.append(ch)
            else:
                raise ValueError(f"Unexpected character in puzzle text: {ch!r}")

    if len(cells) != SIZE * SIZE:
        raise ValueError(f"Sudoku puzzle must yield {SIZE * SIZE} cells, got {len(cells)}")
    return Grid.from_rows([cells[i:i + SIZE] for i in range(0, SIZE * SIZE, SIZE)])


def _is_ruler(line: str) -> bool:
    marks = line.replace(" ", "").replace("\t", "")
    if not marks or not set(marks) <= RULER_CHARS:
        return False
    return "+" in marks or "=" in marks or len(marks) > SIZE
