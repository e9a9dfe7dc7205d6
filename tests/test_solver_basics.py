# tests/test_solver_basics.py
import itertools

import pytest

from puzzles import (
    CONTRADICTORY, EMPTY, HARD, HARD_SOLUTION, INKALA, INKALA_SOLUTION, MEDIUM,
    NO_CANDIDATE, NO_SOLUTION, assert_valid_solution,
)
from solver import engine
from solver.config import SolverConfig
from solver.engine import SolveStatus, solve, solve_string
from solver.errors import ContradictoryInput, MalformedInput
from solver.grid import SudokuGrid


@pytest.mark.parametrize("puzzle,expected", [(INKALA, INKALA_SOLUTION), (HARD, HARD_SOLUTION)])
def test_known_puzzles_solve_to_known_solution(puzzle, expected):
    result = solve_string(puzzle)
    assert result.status is SolveStatus.SOLVED
    assert result.solved
    assert result.solution == expected


def test_solution_is_valid_and_keeps_givens():
    result = solve_string(MEDIUM)
    assert result.solved
    assert_valid_solution(result.solution, MEDIUM)


def test_solve_is_deterministic():
    first = solve_string(INKALA)
    second = solve_string(INKALA)
    assert first.solution == second.solution
    assert first.stats.nodes == second.stats.nodes


def test_empty_grid_is_solvable_in_fixed_order():
    result = solve_string(EMPTY)
    assert result.solved
    assert_valid_solution(result.solution, EMPTY)
    # lowest index on ties, ascending digits
    assert result.solution[:9] == "123456789"


def test_grid_holds_solution_after_solve():
    grid = SudokuGrid.from_string(INKALA)
    result = solve(grid)
    assert grid.is_complete()
    assert grid.to_string() == result.solution


@pytest.mark.parametrize("puzzle", [NO_SOLUTION, NO_CANDIDATE])
def test_unsolvable_but_valid_reports_no_solution(puzzle):
    grid = SudokuGrid.from_string(puzzle)
    result = solve(grid)
    assert result.status is SolveStatus.NO_SOLUTION
    assert result.solution is None
    assert result.stats.dead_ends >= 1
    # every assignment was undone
    assert grid.to_string() == puzzle
    assert grid.masks == SudokuGrid.from_string(puzzle).masks


def test_no_solution_search_counts():
    result = solve_string(NO_SOLUTION)
    assert result.stats.nodes == 1
    assert result.stats.assignments == 1
    assert result.stats.backtracks == 1


def test_contradictory_input_never_searches():
    with pytest.raises(ContradictoryInput):
        solve_string(CONTRADICTORY)


@pytest.mark.parametrize("text", ["0" * 80, "0" * 82, "a" + "0" * 80])
def test_malformed_input(text):
    with pytest.raises(MalformedInput):
        solve_string(text)


def test_depth_matches_open_cells():
    result = solve_string(INKALA)
    assert result.stats.max_depth == 60
    assert result.stats.nodes >= 61
    assert result.stats.elapsed_ms >= 0.0


@pytest.mark.parametrize("puzzle,expected", [(INKALA, INKALA_SOLUTION), (HARD, HARD_SOLUTION)])
def test_hidden_singles_find_the_same_unique_solution(puzzle, expected):
    result = solve_string(puzzle, SolverConfig(hidden_singles=True))
    assert result.solution == expected


def test_hidden_singles_detect_no_solution_and_restore():
    grid = SudokuGrid.from_string(NO_SOLUTION)
    result = solve(grid, SolverConfig(hidden_singles=True))
    assert result.status is SolveStatus.NO_SOLUTION
    assert grid.to_string() == NO_SOLUTION


def test_hidden_singles_solve_empty_grid():
    result = solve_string(EMPTY, SolverConfig(hidden_singles=True))
    assert_valid_solution(result.solution, EMPTY)


@pytest.mark.parametrize("max_steps", [0, 1, 10])
def test_step_budget_cancels_and_unwinds(max_steps):
    grid = SudokuGrid.from_string(INKALA)
    masks = list(grid.masks)
    result = solve(grid, SolverConfig(max_steps=max_steps))
    assert result.status is SolveStatus.CANCELLED
    assert result.solution is None
    assert result.stats.nodes == max_steps + 1
    assert grid.to_string() == INKALA
    assert grid.masks == masks


def test_generous_step_budget_still_solves():
    result = solve_string(INKALA, SolverConfig(max_steps=10_000_000))
    assert result.solution == INKALA_SOLUTION


def test_time_budget_cancels(monkeypatch):
    clock = itertools.count()
    monkeypatch.setattr(engine.time, "perf_counter", lambda: float(next(clock)))
    # deadline 1.5s after start; the second node sees the clock past it
    result = solve_string(INKALA, SolverConfig(time_limit_ms=1500))
    assert result.status is SolveStatus.CANCELLED
    assert result.stats.nodes == 2


def test_already_solved_grid_is_not_cancelled():
    result = solve_string(INKALA_SOLUTION, SolverConfig(max_steps=0))
    assert result.solution == INKALA_SOLUTION


def test_houses_touched_covers_cell_and_struck_peers():
    # r1c1 -> r1 c1 b1; r1c2 -> r1 c2 b1; r2c1 -> r2 c1 b1
    houses = engine.houses_touched((0, (0, [1, 9])))
    assert houses == sum(1 << u for u in (0, 9, 18, 10, 1))
    assert engine.houses_touched((80, (0, []))) == sum(1 << u for u in (8, 17, 26))


def test_hidden_singles_only_rescan_dirty_houses():
    almost = "0" + INKALA_SOLUTION[1:]
    grid = SudokuGrid.from_string(almost)
    search = engine._Search(grid, SolverConfig(hidden_singles=True), engine.SearchStats(), 0.0)
    trail = []
    # r1c1 is only forced through houses 0, 9 and 18
    assert search.propagate(trail, 1 << 5)
    assert trail == []
    assert search.propagate(trail, 1 << 9)
    assert [cell for cell, _ in trail] == [0]
    assert grid.to_string() == INKALA_SOLUTION

    result = solve_string(almost, SolverConfig(hidden_singles=True))
    assert result.solution == INKALA_SOLUTION
    assert result.stats.nodes == 1
    assert result.stats.assignments == 1
