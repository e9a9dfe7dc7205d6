"""Backtracking search over a SudokuGrid.

Most-constrained-cell ordering (fewest candidates, lowest index on ties),
candidates tried in ascending order, and eager propagation: every assignment
strikes its digit from all open peers, so a peer left with no candidates ends
the branch before it is explored. Optionally, hidden singles are forced after
each branching assignment.

The search itself never raises; dead ends are undone and the next candidate is
tried. Only grid construction can fail, which happens before ``solve``.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

from .config import SolverConfig
from .grid import DEAD_END, SudokuGrid, Undo
from .solver_core import MASK_DIGITS, UNITS, UNITS_OF, Cell


class SolveStatus(str, Enum):
    SOLVED = "solved"
    NO_SOLUTION = "no_solution"
    CANCELLED = "cancelled"


@dataclass
class SearchStats:
    nodes: int = 0  # recursive calls
    assignments: int = 0  # branching + forced placements
    dead_ends: int = 0
    backtracks: int = 0  # candidates undone after failing
    max_depth: int = 0
    elapsed_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class SolveResult:
    status: SolveStatus
    solution: Optional[str] = None
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED


# Outcomes of one search frame
_FOUND = 0
_EXHAUSTED = 1
_CANCELLED = 2

Trail = list[tuple[Cell, Undo]]

# House bitmasks: bit u stands for UNITS[u]
ALL_HOUSES = (1 << len(UNITS)) - 1
CELL_HOUSES: tuple[int, ...] = tuple((1 << r) | (1 << c) | (1 << b) for r, c, b in UNITS_OF)


def houses_touched(step: tuple[Cell, Undo]) -> int:
    """Houses of a placed cell and of every peer that lost the digit."""
    cell, (_, touched) = step
    houses = CELL_HOUSES[cell]
    for p in touched:
        houses |= CELL_HOUSES[p]
    return houses


class _Search:
    def __init__(self, grid: SudokuGrid, config: SolverConfig, stats: SearchStats, t0: float):
        self.grid = grid
        self.stats = stats
        self.hidden_singles = config.hidden_singles
        self.max_steps = config.max_steps
        self.deadline = None if config.time_limit_ms is None else t0 + config.time_limit_ms / 1000.0

    def over_budget(self) -> bool:
        if self.max_steps is not None and self.stats.nodes > self.max_steps:
            return True
        return self.deadline is not None and time.perf_counter() > self.deadline

    def place(self, cell: Cell, digit: int, trail: Trail) -> bool:
        undo, ok = self.grid.assign(cell, digit)
        trail.append((cell, undo))
        self.stats.assignments += 1
        return ok

    def propagate(self, trail: Trail, dirty: int) -> bool:
        """Place hidden singles until none remain; False on a contradiction.

        ``dirty`` is a bitmask over the 27 houses. Only houses whose cells were
        placed or lost a candidate can gain a hidden single, so only those are
        rescanned.
        """
        grid = self.grid
        while dirty:
            low = dirty & -dirty
            unit = low.bit_length() - 1
            found = grid.hidden_single_in(unit)
            if found is None:
                dirty ^= low
                continue
            if found == DEAD_END:
                return False
            if not self.place(found[0], found[1], trail):
                return False
            dirty |= houses_touched(trail[-1])
        return True

    def undo(self, trail: Trail) -> None:
        while trail:
            cell, undo = trail.pop()
            self.grid.unassign(cell, undo)

    def run(self, depth: int) -> int:
        grid, stats = self.grid, self.stats
        stats.nodes += 1
        if depth > stats.max_depth:
            stats.max_depth = depth

        if grid.is_complete():
            return _FOUND
        if self.over_budget():
            return _CANCELLED

        cell = grid.find_most_constrained_cell()
        if cell is None or not grid.masks[cell]:
            stats.dead_ends += 1
            return _EXHAUSTED

        for digit in MASK_DIGITS[grid.masks[cell]]:
            trail: Trail = []
            ok = self.place(cell, digit, trail)
            if ok and self.hidden_singles:
                ok = self.propagate(trail, houses_touched(trail[-1]))
            if ok:
                outcome = self.run(depth + 1)
                if outcome == _FOUND:
                    return _FOUND
                if outcome == _CANCELLED:
                    self.undo(trail)
                    return _CANCELLED
            else:
                stats.dead_ends += 1
            self.undo(trail)
            stats.backtracks += 1
        return _EXHAUSTED


def solve(grid: SudokuGrid, config: Optional[SolverConfig] = None) -> SolveResult:
    """Search ``grid`` in place for the first solution in deterministic order.

    On SOLVED the grid holds the solution. On NO_SOLUTION or CANCELLED the grid
    is back in the state it was passed in.
    """
    config = config or SolverConfig()
    stats = SearchStats()
    t0 = time.perf_counter()
    search = _Search(grid, config, stats, t0)

    root: Trail = []
    outcome = _EXHAUSTED
    if not config.hidden_singles or search.propagate(root, ALL_HOUSES):
        outcome = search.run(0)
    if outcome != _FOUND:
        search.undo(root)
    stats.elapsed_ms = (time.perf_counter() - t0) * 1000.0

    if outcome == _FOUND:
        return SolveResult(SolveStatus.SOLVED, grid.to_string(), stats)
    if outcome == _CANCELLED:
        return SolveResult(SolveStatus.CANCELLED, None, stats)
    return SolveResult(SolveStatus.NO_SOLUTION, None, stats)


def solve_string(text: str, config: Optional[SolverConfig] = None) -> SolveResult:
    """Parse and solve an 81-character puzzle. MalformedInput / ContradictoryInput propagate."""
    config = config or SolverConfig()
    grid = SudokuGrid.from_string(text, placeholders=config.placeholders)
    return solve(grid, config)
