# types_sudoku.py
from __future__ import annotations

from typing import Any, Optional, TypedDict

Grid = list[list[int]]
"""A 9x9 Sudoku grid as rows of integers (0 = empty)."""

Candidates = dict[str, list[int]]
"""Map from cell key (e.g., 'r1c1') to a list of candidate digits (1..9)."""


class Issue(TypedDict, total=False):
    """A single problem found by sanity/verification checks."""

    type: str  # 'duplicate', 'given_overwritten', 'missing' or 'blank'
    unit: str  # house label, e.g. 'r3', 'c7', 'b5'
    digits: list[int]  # offending digits for duplicates / missing digits
    cells: list[str]  # cell keys involved
    cell: str  # for given_overwritten / blank
    given: int
    found: int


class SolvePayload(TypedDict):
    """Tool-layer answer for one puzzle, shared by the CLI (--json) and the HTTP API."""

    puzzle: str
    status: str  # 'solved', 'no_solution', 'cancelled', 'malformed_input', 'contradictory_input'
    solution: Optional[str]
    error: Optional[str]
    issues: list[Issue]
    stats: dict[str, Any]
