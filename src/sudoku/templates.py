"""Reference puzzles used as default boards and test fixtures."""

from .grid import Grid

_ = None

# The "easy" sample loaded as the default board.
EASY_SAMPLE = [
    [8, 7, 6,   9, _, _,   _, _, _],
    [_, 1, _,   _, _, 6,   _, _, _],
    [_, 4, _,   3, _, 5,   8, _, _],

    [4, _, _,   _, _, _,   2, 1, _],
    [_, 9, _,   5, _, _,   _, _, _],
    [_, 5, _,   _, 4, _,   3, _, 6],

    [_, 2, 9,   _, _, _,   _, _, 8],
    [_, _, 4,   6, 9, _,   1, 7, 3],
    [_, _, _,   _, _, 1,   _, _, 4],
]


def easy_sample_grid() -> Grid:
    return Grid.from_rows(EASY_SAMPLE)
