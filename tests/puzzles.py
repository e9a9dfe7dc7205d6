# tests/puzzles.py
# Shared puzzle strings for the test suite.

# Arto Inkala's 2012 "world's hardest sudoku" (unique solution)
INKALA = "800000000003600000070090200050007000000045700000100030001000068008500010090000400"
INKALA_SOLUTION = "812753649943682175675491283154237896369845721287169534521974368438526917796318452"

# "AI Escargot", Arto Inkala 2006 (unique solution)
HARD = "100007090030020008009600500005300900010080002600004000300000010040000007007000300"
HARD_SOLUTION = "162857493534129678789643521475312986913586742628794135356478219241935867897261354"

MEDIUM = "600008940900006100070040000200610000000000200089002000000060005000000030800001600"

EMPTY = "0" * 81

# Two 5s in row 1 (and box 1)
CONTRADICTORY = "55" + "0" * 79

# Valid givens, but r1c9 has no candidate left: row holds 1-8, column holds 9
NO_CANDIDATE = "123456780" + "000000009" + "0" * 63

# Valid givens, r1c8 and r1c9 can only be 8, so placing either kills the other
NO_SOLUTION = "123456700" + "0" * 18 + "000000090" + "0" * 18 + "000000009" + "0" * 18


def rows_of(text):
    return [[int(ch) for ch in text[9 * r : 9 * r + 9]] for r in range(9)]


def assert_valid_solution(solution, puzzle):
    assert len(solution) == 81
    assert set(solution) <= set("123456789")
    grid = rows_of(solution)
    digits = set(range(1, 10))
    for i in range(9):
        assert set(grid[i]) == digits, f"row {i + 1}"
        assert {grid[r][i] for r in range(9)} == digits, f"column {i + 1}"
        r0, c0 = 3 * (i // 3), 3 * (i % 3)
        assert {grid[r0 + a][c0 + b] for a in range(3) for b in range(3)} == digits, f"box {i + 1}"
    for given, found in zip(puzzle, solution):
        if given not in "0.":
            assert given == found
