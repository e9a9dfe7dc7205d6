"""Command-line front end: reads 81-character puzzles from arguments or a file, solves each, and prints the solution, a failure message, or a JSON payload."""

# solve_cli.py
# Usage:
#   python -m apps.cli.solve_cli 800000000003600000070090200050007000000045700000100030001000068008500010090000400
#   python -m apps.cli.solve_cli --file puzzles.txt --json --time-limit-ms 50
#
# Exit status: 0 all solved, 1 a puzzle had no solution, 2 bad input,
# 3 a solve was cancelled by its budget. The highest applicable code wins.

import argparse
import json
import sys
import time
from pathlib import Path

from solver.config import load_config
from solver.sudoku_tools import solve_tool

EXIT_OK = 0
EXIT_NO_SOLUTION = 1
EXIT_BAD_INPUT = 2
EXIT_CANCELLED = 3

_EXIT_FOR_STATUS = {
    "solved": EXIT_OK,
    "no_solution": EXIT_NO_SOLUTION,
    "malformed_input": EXIT_BAD_INPUT,
    "contradictory_input": EXIT_BAD_INPUT,
    "cancelled": EXIT_CANCELLED,
}


def ts() -> str:
    return time.strftime("%Y-%m-%d %H:%M:%S")


def log(msg: str, *, quiet: bool = False) -> None:
    # stderr, so stdout stays parseable
    if not quiet:
        print(f"[{ts()}] {msg}", file=sys.stderr, flush=True)


def read_puzzles(path: Path) -> list[str]:
    """One puzzle per line; blank lines and '#' comments are skipped."""
    puzzles = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                puzzles.append(line)
    return puzzles


def render(payload: dict) -> str:
    status = payload["status"]
    if status == "solved":
        return f"Solution: {payload['solution']}"
    if status == "no_solution":
        return "No solution could be found."
    if status == "cancelled":
        return "Search cancelled before a solution was found."
    return f"Invalid puzzle: {payload['error']}"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="sudoku-solve", description="Solve 9x9 Sudoku puzzles given as 81-character strings.")
    ap.add_argument("puzzles", nargs="*", help="81 characters, row-major, '0' or '.' for empty cells")
    ap.add_argument("--file", type=Path, default=None, help="read puzzles from a file, one per line")
    ap.add_argument("--config", type=Path, default=None, help="YAML solver config")
    ap.add_argument("--json", action="store_true", help="print one JSON payload per puzzle")
    ap.add_argument("--max-steps", type=int, default=None, help="search node budget")
    ap.add_argument("--time-limit-ms", type=float, default=None, help="wall-clock budget per puzzle")
    ap.add_argument("--hidden-singles", action="store_true", default=None, help="force hidden singles while searching")
    ap.add_argument("--no-verify", dest="verify", action="store_false", default=None, help="skip re-checking solutions")
    ap.add_argument("--quiet", action="store_true", help="no progress lines on stderr")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config(
            args.config,
            max_steps=args.max_steps,
            time_limit_ms=args.time_limit_ms,
            hidden_singles=args.hidden_singles,
            verify=args.verify,
        )
    except (OSError, ValueError) as e:
        print(f"[config] ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    puzzles = [p.strip() for p in args.puzzles]
    if args.file is not None:
        puzzles += read_puzzles(args.file)
    if not puzzles:
        print("Valid grid string argument not found.", file=sys.stderr)
        return EXIT_BAD_INPUT

    code = EXIT_OK
    for i, puzzle in enumerate(puzzles, 1):
        payload = solve_tool(puzzle, cfg)
        stats = payload["stats"]
        if stats:
            log(f"puzzle {i}/{len(puzzles)}: {payload['status']} nodes={stats['nodes']:,} "
                f"backtracks={stats['backtracks']:,} elapsed={stats['elapsed_ms']:.3f}ms", quiet=args.quiet)
        else:
            log(f"puzzle {i}/{len(puzzles)}: {payload['status']}", quiet=args.quiet)
        print(json.dumps(payload) if args.json else render(payload))
        code = max(code, _EXIT_FOR_STATUS[payload["status"]])
    return code


if __name__ == "__main__":
    sys.exit(main())
