"""
Solve every puzzle in a text file and summarize how the search behaved.

Key behavior:
- One puzzle per line; blank lines and '#' comments are skipped.
- Progress logs during solving so long files never feel "stuck".
- Optional JSONL output, one solve payload per puzzle.
- Summary: status counts plus latency / node-count percentiles.
"""

from __future__ import annotations

# --- repo path bootstrap (so this script runs from any cwd) ---
import sys
from pathlib import Path

# this file: <repo>/tools/solve_batch.py
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# --------------------------------------------------------------

import argparse
import json
import time
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

import numpy as np

from solver.config import load_config, SolverConfig
from solver.sudoku_tools import solve_tool


def ts() -> str:
    # Local time timestamp for logs
    return time.strftime("%Y-%m-%d %H:%M:%S")


def log(msg: str, *, quiet: bool = False) -> None:
    if not quiet:
        print(f"[{ts()}] {msg}", flush=True)


@dataclass
class ProgressConfig:
    log_every_puzzles: int
    log_every_secs: float


class ProgressPrinter:
    def __init__(self, cfg: ProgressConfig, *, quiet: bool = False) -> None:
        self.cfg = cfg
        self.quiet = quiet
        self._t0 = time.time()
        self._t_last = self._t0

    def maybe_print(self, done: int, extra: str = "") -> None:
        now = time.time()
        should_by_count = self.cfg.log_every_puzzles > 0 and (done % self.cfg.log_every_puzzles == 0)
        should_by_time = (now - self._t_last) >= self.cfg.log_every_secs

        if (should_by_count or should_by_time) and not self.quiet:
            elapsed = now - self._t0
            rate = (done / elapsed) if elapsed > 0 else 0.0
            msg = f"progress: puzzles={done:,}, elapsed={elapsed:,.1f}s, rate={rate:,.0f} puzzles/s"
            if extra:
                msg += f", {extra}"
            log(msg, quiet=self.quiet)
            self._t_last = now


def iter_puzzles(path: Path) -> Iterator[Tuple[int, str]]:
    """Yield (line number, puzzle) pairs."""
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            line = line.strip()
            if line and not line.startswith("#"):
                yield lineno, line


def summarize(payloads: List[Dict]) -> Dict:
    """Status counts and percentiles over the puzzles that were actually searched."""
    counts = Counter(p["status"] for p in payloads)
    searched = [p["stats"] for p in payloads if p["stats"]]
    summary: Dict = {"total": len(payloads), "status": dict(sorted(counts.items()))}
    if searched:
        ms = np.array([s["elapsed_ms"] for s in searched], dtype=np.float64)
        nodes = np.array([s["nodes"] for s in searched], dtype=np.int64)
        q = [50, 90, 99]
        summary["elapsed_ms"] = {
            "mean": float(ms.mean()),
            **{f"p{k}": float(v) for k, v in zip(q, np.percentile(ms, q))},
            "max": float(ms.max()),
        }
        summary["nodes"] = {
            "mean": float(nodes.mean()),
            **{f"p{k}": float(v) for k, v in zip(q, np.percentile(nodes, q))},
            "max": int(nodes.max()),
        }
    return summary


def solve_file(
    in_path: Path,
    cfg: SolverConfig,
    *,
    out_path: Optional[Path],
    quiet: bool,
    prog_cfg: ProgressConfig,
) -> Dict:
    if not in_path.exists():
        raise FileNotFoundError(f"Input file not found: {in_path}")

    prog = ProgressPrinter(prog_cfg, quiet=quiet)
    payloads: List[Dict] = []
    fout = out_path.open("w", encoding="utf-8", newline="\n") if out_path is not None else None
    try:
        for lineno, puzzle in iter_puzzles(in_path):
            payload = dict(solve_tool(puzzle, cfg))
            payload["line"] = lineno
            payloads.append(payload)
            if fout is not None:
                fout.write(json.dumps(payload) + "\n")
            if payload["status"] in ("malformed_input", "contradictory_input"):
                log(f"[warn] line {lineno}: {payload['error']}", quiet=quiet)
            prog.maybe_print(len(payloads), extra=f"last={payload['status']}")
    finally:
        if fout is not None:
            fout.close()
    return summarize(payloads)


def main(argv: List[str]) -> int:
    ap = argparse.ArgumentParser(description="Solve a file of 81-character Sudoku puzzles and report statistics.")
    ap.add_argument("input", type=Path, help="Text file, one puzzle per line.")
    ap.add_argument("--out", type=Path, default=None, help="Write one JSON payload per puzzle (JSONL).")
    ap.add_argument("--summary", type=Path, default=None, help="Write the summary as JSON.")
    ap.add_argument("--config", type=Path, default=None, help="YAML solver config.")
    ap.add_argument("--time-limit-ms", type=float, default=None, help="Per-puzzle wall-clock budget.")
    ap.add_argument("--hidden-singles", action="store_true", default=None, help="Force hidden singles while searching.")
    ap.add_argument("--quiet", action="store_true", help="Suppress progress/status logs.")
    ap.add_argument("--log-every-puzzles", type=int, default=1000,
                    help="Emit a progress log every N puzzles (default: 1000). Use 0 to disable.")
    ap.add_argument("--log-every-secs", type=float, default=2.0,
                    help="Emit a progress log at least every N seconds (default: 2.0).")
    args = ap.parse_args(argv)

    quiet = bool(args.quiet)
    prog_cfg = ProgressConfig(log_every_puzzles=args.log_every_puzzles, log_every_secs=args.log_every_secs)

    try:
        cfg = load_config(args.config, time_limit_ms=args.time_limit_ms, hidden_singles=args.hidden_singles)
    except (OSError, ValueError) as e:
        print(f"[error] config: {e}", file=sys.stderr)
        return 2

    log("solve_batch starting...", quiet=quiet)
    log(f"config: {cfg.to_dict()}", quiet=quiet)
    try:
        summary = solve_file(args.input, cfg, out_path=args.out, quiet=quiet, prog_cfg=prog_cfg)
    except OSError as e:
        print(f"[error] {args.input}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(summary, indent=2))
    if args.summary is not None:
        args.summary.write_text(json.dumps(summary, indent=2) + "\n", encoding="utf-8")
        log(f"[ok] summary -> {args.summary}", quiet=quiet)
    log("All done.", quiet=quiet)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
