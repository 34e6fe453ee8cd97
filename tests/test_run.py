import json

import pytest

import run
from run import format_result, main
from src.sudoku.templates import EASY_SAMPLE, easy_sample_grid

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def _write_puzzle(tmp_path, name, payload):
    path = tmp_path / name
    path.write_text(json.dumps(payload))
    return path


def test_format_result_solved():
    grid = easy_sample_grid()
    result = format_result("easy", grid, grid, steps=3)
    assert result["status"] == "solved"
    assert result["solution"] == EASY_SAMPLE
    assert result["puzzle"].startswith("8769")


def test_format_result_unsolved():
    result = format_result("easy", easy_sample_grid(), None, steps=0)
    assert result["status"] == "unsolved"
    assert result["solution"] is None


def test_main_sample(capsys):
    assert main(["--sample"]) == 0
    out = capsys.readouterr().out
    assert "Puzzle easy-sample:" in out
    assert "Solution:" in out


def test_main_writes_solution_json(tmp_path):
    path = _write_puzzle(tmp_path, "classic.json", {"id": "classic", "puzzle": PUZZLE})
    output_path = tmp_path / "out" / "solution.json"

    assert main([str(path), "--output", str(output_path)]) == 0

    result = json.loads(output_path.read_text())
    assert result["id"] == "classic"
    assert result["status"] == "solved"
    flat = "".join(str(v) for row in result["solution"] for v in row)
    assert flat == SOLUTION
    assert result["steps"] > 0


def test_main_unsolvable_puzzle(tmp_path, capsys):
    bad = list(PUZZLE)
    bad[2] = "5"
    path = _write_puzzle(tmp_path, "bad.json", {"grid": "".join(bad)})
    output_path = tmp_path / "bad_out.json"

    assert main([str(path), "--output", str(output_path)]) == 1

    out = capsys.readouterr().out
    assert "No solution exists" in out
    assert "Conflict: row 0 repeats 5" in out
    assert json.loads(output_path.read_text())["status"] == "unsolved"


def test_main_check_only(tmp_path, capsys):
    path = _write_puzzle(tmp_path, "easy.json", EASY_SAMPLE)
    assert main([str(path), "--check-only"]) == 0
    assert "No conflicts" in capsys.readouterr().out


def test_main_trace_csv(tmp_path):
    trace_path = tmp_path / "trace.csv"
    assert main(["--sample", "--trace", str(trace_path)]) == 0
    header = trace_path.read_text().splitlines()[0]
    assert "action_type" in header
    assert "depth" in header


def test_main_uses_patched_solver(monkeypatch, tmp_path):
    monkeypatch.setattr("run.solve_puzzle", lambda grid: None)
    output_path = tmp_path / "result.json"
    assert main(["--sample", "--output", str(output_path)]) == 1
    assert json.loads(output_path.read_text())["status"] == "unsolved"


def test_main_malformed_json(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{invalid json")
    assert main([str(path)]) == 2
    assert "ERROR:" in capsys.readouterr().out


def test_main_requires_exactly_one_source(tmp_path):
    with pytest.raises(SystemExit):
        main([])
    with pytest.raises(SystemExit):
        main([str(tmp_path / "x.json"), "--sample"])


def test_module_exposes_parse_args():
    args = run.parse_args(["--sample", "--no-trace"])
    assert args.sample
    assert args.no_trace
    assert args.input is None
