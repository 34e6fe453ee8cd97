"""Tests for reading puzzles from disk."""

import json

import pytest

from src.sudoku.loader import load_puzzle
from src.sudoku.parser import parse_puzzle
from src.sudoku.templates import EASY_SAMPLE, easy_sample_grid

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"


def test_load_json_object(tmp_path):
    path = tmp_path / "easy.json"
    path.write_text(json.dumps({"id": "easy-1", "grid": EASY_SAMPLE}))
    record = load_puzzle(str(path))
    assert record["id"] == "easy-1"
    assert parse_puzzle(record) == easy_sample_grid()


def test_load_json_bare_array_uses_file_stem_as_id(tmp_path):
    path = tmp_path / "bare.json"
    path.write_text(json.dumps(EASY_SAMPLE))
    record = load_puzzle(str(path))
    assert record["id"] == "bare"
    assert parse_puzzle(record) == easy_sample_grid()


def test_load_json_list_uses_first_record(tmp_path):
    path = tmp_path / "many.json"
    path.write_text(json.dumps([{"id": "a", "puzzle": PUZZLE}, {"id": "b", "puzzle": PUZZLE}]))
    record = load_puzzle(str(path))
    assert record["id"] == "a"


def test_load_text_board(tmp_path):
    path = tmp_path / "classic.txt"
    path.write_text("\n".join(PUZZLE[i:i + 9] for i in range(0, 81, 9)) + "\n")
    record = load_puzzle(str(path))
    assert parse_puzzle(record) == parse_puzzle(PUZZLE)


def test_load_csv_with_blank_cells(tmp_path):
    path = tmp_path / "easy.csv"
    lines = [",".join("" if v is None else str(v) for v in row) for row in EASY_SAMPLE]
    path.write_text("\n".join(lines) + "\n")
    record = load_puzzle(str(path))
    assert record["id"] == "easy"
    assert parse_puzzle(record) == easy_sample_grid()


def test_load_parquet_first_row(tmp_path):
    pytest.importorskip("pyarrow")
    import pandas as pd

    path = tmp_path / "puzzles.parquet"
    pd.DataFrame({"id": ["classic"], "puzzle": [PUZZLE]}).to_parquet(path)
    record = load_puzzle(str(path))
    assert record["id"] == "classic"
    assert parse_puzzle(record) == parse_puzzle(PUZZLE)


def test_missing_file_and_unknown_suffix(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_puzzle(str(tmp_path / "nope.json"))

    path = tmp_path / "puzzle.xml"
    path.write_text("<grid/>")
    with pytest.raises(ValueError):
        load_puzzle(str(path))


def test_malformed_json_raises_value_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{invalid json")
    with pytest.raises(ValueError):
        load_puzzle(str(path))


def test_load_parquet_nested_grid_column(tmp_path):
    pytest.importorskip("pyarrow")
    import pandas as pd

    path = tmp_path / "nested.parquet"
    rows = [[v or 0 for v in row] for row in EASY_SAMPLE]
    pd.DataFrame({"id": ["easy"], "grid": [rows]}).to_parquet(path)
    record = load_puzzle(str(path))
    assert record["id"] == "easy"
    assert parse_puzzle(record) == easy_sample_grid()


def test_load_parquet_nested_grid_with_nulls(tmp_path):
    pytest.importorskip("pyarrow")
    import pandas as pd

    path = tmp_path / "nulls.parquet"
    pd.DataFrame({"id": ["easy"], "grid": [EASY_SAMPLE]}).to_parquet(path)
    assert parse_puzzle(load_puzzle(str(path))) == easy_sample_grid()
