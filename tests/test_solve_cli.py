# tests/test_solve_cli.py
import json

from puzzles import CONTRADICTORY, INKALA, INKALA_SOLUTION, NO_SOLUTION
from apps.cli.solve_cli import (
    EXIT_BAD_INPUT, EXIT_CANCELLED, EXIT_NO_SOLUTION, EXIT_OK, main, read_puzzles,
)


def test_solves_argument(capsys):
    assert main([INKALA, "--quiet"]) == EXIT_OK
    out = capsys.readouterr()
    assert out.out.strip() == f"Solution: {INKALA_SOLUTION}"
    assert out.err == ""


def test_progress_goes_to_stderr(capsys):
    assert main([INKALA]) == EXIT_OK
    out = capsys.readouterr()
    assert "puzzle 1/1: solved" in out.err
    assert out.out.startswith("Solution: ")


def test_no_solution(capsys):
    assert main([NO_SOLUTION, "--quiet"]) == EXIT_NO_SOLUTION
    assert capsys.readouterr().out.strip() == "No solution could be found."


def test_bad_input_is_distinct_from_no_solution(capsys):
    assert main([CONTRADICTORY, "--quiet"]) == EXIT_BAD_INPUT
    assert capsys.readouterr().out.startswith("Invalid puzzle: givens repeat a digit")
    assert main(["0" * 80, "--quiet"]) == EXIT_BAD_INPUT
    assert "81 characters" in capsys.readouterr().out


def test_budget_cancel(capsys):
    assert main([INKALA, "--max-steps", "5", "--quiet"]) == EXIT_CANCELLED
    assert "cancelled" in capsys.readouterr().out


def test_missing_puzzle(capsys):
    assert main([]) == EXIT_BAD_INPUT
    assert "not found" in capsys.readouterr().err


def test_json_output_and_worst_exit_code(capsys):
    assert main(["--json", "--quiet", INKALA, NO_SOLUTION]) == EXIT_NO_SOLUTION
    lines = capsys.readouterr().out.strip().splitlines()
    payloads = [json.loads(line) for line in lines]
    assert [p["status"] for p in payloads] == ["solved", "no_solution"]
    assert payloads[0]["solution"] == INKALA_SOLUTION


def test_file_input(tmp_path, capsys):
    path = tmp_path / "puzzles.txt"
    path.write_text(f"# two puzzles\n{INKALA}\n\n{INKALA.replace('0', '.')}\n", encoding="utf-8")
    assert read_puzzles(path) == [INKALA, INKALA.replace("0", ".")]
    assert main(["--file", str(path), "--quiet", "--hidden-singles"]) == EXIT_OK
    assert capsys.readouterr().out.count(INKALA_SOLUTION) == 2


def test_config_file(tmp_path, capsys):
    cfg = tmp_path / "solver.yaml"
    cfg.write_text("max_steps: 3\n", encoding="utf-8")
    assert main([INKALA, "--config", str(cfg), "--quiet"]) == EXIT_CANCELLED
    capsys.readouterr()

    assert main([INKALA, "--config", str(tmp_path / "missing.yaml")]) == EXIT_BAD_INPUT
    assert "[config] ERROR" in capsys.readouterr().err
