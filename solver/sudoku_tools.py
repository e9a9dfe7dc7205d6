from __future__ import annotations
from typing import Dict, List, Optional, Union
from types_sudoku import Grid, Issue, SolvePayload
"""Tool-friendly helpers around the solver: sanity checks, candidate listing, solution verification and a dict-in/dict-out solve used by the CLI and the HTTP API."""


# sudoku_tools.py
import numpy as np

from .config import SolverConfig
from .engine import SolveStatus, solve
from .errors import ContradictoryInput, MalformedInput, SolutionVerificationError
from .grid import SudokuGrid
from .solver_core import SIZE, rc_to_key, unit_cells_box, cell_rc

PuzzleLike = Union[str, Grid]


def _as_array(grid: PuzzleLike) -> np.ndarray:
    # No house checks here: verification must see duplicates, not reject them
    if isinstance(grid, str):
        text = grid.strip()
        bad = [i for i, ch in enumerate(text) if ch not in "0123456789."]
        if len(text) != SIZE * SIZE or bad:
            raise MalformedInput(f"not an 81-character digit string: {text!r}", length=len(text),
                                 position=bad[0] if bad else None)
        grid = [[0 if ch == "." else int(ch) for ch in text[r * SIZE:(r + 1) * SIZE]] for r in range(SIZE)]
    try:
        arr = np.asarray(grid, dtype=np.int16)
    except (TypeError, ValueError) as e:
        raise MalformedInput(f"grid is not a 9x9 array of digits: {e}", length=0) from e
    if arr.shape != (SIZE, SIZE):
        raise MalformedInput(f"grid must be 9x9, got shape {arr.shape}", length=int(arr.size))
    if arr.min() < 0 or arr.max() > SIZE:
        raise MalformedInput("grid values must be in 0..9", length=int(arr.size))
    return arr


def _units(arr: np.ndarray):
    """Yield (label, cell keys, values) for every row, column and box."""
    for r in range(SIZE):
        yield f"r{r+1}", [rc_to_key(r, c) for c in range(SIZE)], arr[r, :]
    for c in range(SIZE):
        yield f"c{c+1}", [rc_to_key(r, c) for r in range(SIZE)], arr[:, c]
    for b in range(SIZE):
        cells = [cell_rc(i) for i in unit_cells_box(b)]
        yield f"b{b+1}", [rc_to_key(r, c) for r, c in cells], np.array([arr[r, c] for r, c in cells])


def sanity_check(original: Grid, current: Grid) -> Dict:
    """Givens overwritten in ``current`` and digits repeated in any house. Blanks are allowed."""
    orig = _as_array(original)
    cur = _as_array(current)
    issues: List[Issue] = []
    for r, c in zip(*np.nonzero((orig != 0) & (cur != 0) & (cur != orig))):
        issues.append({"type": "given_overwritten", "cell": rc_to_key(int(r), int(c)),
                       "given": int(orig[r, c]), "found": int(cur[r, c])})
    for label, keys, vals in _units(cur):
        counts = np.bincount(vals, minlength=SIZE + 1)
        dups = [d for d in range(1, SIZE + 1) if counts[d] > 1]
        if dups:
            cells = [k for k, v in zip(keys, vals) if int(v) in dups]
            issues.append({"type": "duplicate", "unit": label, "digits": dups, "cells": cells})
    return {"ok": len(issues) == 0, "issues": issues}


def verify_solution(solution: PuzzleLike, puzzle: Optional[PuzzleLike] = None) -> Dict:
    """Every cell filled, every house a permutation of 1..9, and (if given) every clue preserved."""
    sol = _as_array(solution)
    issues: List[Issue] = []
    for r, c in zip(*np.nonzero(sol == 0)):
        issues.append({"type": "blank", "cell": rc_to_key(int(r), int(c))})
    for label, keys, vals in _units(sol):
        counts = np.bincount(vals, minlength=SIZE + 1)[1:]
        if np.all(counts == 1):
            continue
        dups = [d + 1 for d in np.nonzero(counts > 1)[0].tolist()]
        missing = [d + 1 for d in np.nonzero(counts == 0)[0].tolist()]
        if dups:
            cells = [k for k, v in zip(keys, vals) if int(v) in dups]
            issues.append({"type": "duplicate", "unit": label, "digits": dups, "cells": cells})
        if missing:
            issues.append({"type": "missing", "unit": label, "digits": missing})
    if puzzle is not None:
        givens = _as_array(puzzle)
        for r, c in zip(*np.nonzero((givens != 0) & (sol != givens))):
            issues.append({"type": "given_overwritten", "cell": rc_to_key(int(r), int(c)),
                           "given": int(givens[r, c]), "found": int(sol[r, c])})
    return {"ok": len(issues) == 0, "issues": issues}


def compute_candidates_tool(puzzle: PuzzleLike) -> Dict:
    """Compute candidate digits for each empty cell. Returns a dict like {'candidates': {'r1c2': [1,2,5], ...}}."""
    grid = SudokuGrid.from_string(puzzle.strip()) if isinstance(puzzle, str) else SudokuGrid.from_rows(puzzle)
    return {"candidates": grid.candidates_dict()}


def solve_tool(puzzle: PuzzleLike, config: Optional[SolverConfig] = None) -> SolvePayload:
    """Solve one puzzle and report the outcome as a JSON-ready dict.

    Input problems come back as ``malformed_input`` / ``contradictory_input``
    statuses instead of exceptions. A solution that fails verification raises
    ``SolutionVerificationError``.
    """
    config = config or SolverConfig()
    text = puzzle.strip() if isinstance(puzzle, str) else ""
    payload: SolvePayload = {"puzzle": text, "status": "", "solution": None, "error": None,
                             "issues": [], "stats": {}}
    try:
        if isinstance(puzzle, str):
            grid = SudokuGrid.from_string(text, placeholders=config.placeholders)
        else:
            grid = SudokuGrid.from_rows(puzzle)
            payload["puzzle"] = grid.to_string()
    except MalformedInput as e:
        payload.update(status="malformed_input", error=str(e))
        return payload
    except ContradictoryInput as e:
        payload.update(status="contradictory_input", error=str(e), issues=e.issues)
        return payload

    givens = grid.to_rows()
    result = solve(grid, config)
    payload.update(status=result.status.value, solution=result.solution, stats=result.stats.to_dict())
    if result.status is SolveStatus.SOLVED and config.verify:
        check = verify_solution(result.solution, givens)
        if not check["ok"]:
            raise SolutionVerificationError(check["issues"])
    return payload
