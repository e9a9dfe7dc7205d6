"""Core Sudoku tables used by the grid and the search: index math, peers, house lists and 9-bit candidate masks."""

# solver_core.py
# Static structure of a 9x9 board, computed once at import:
# - flat index <-> (row, col) and the 'r1c1' keys of the tool layer
# - the 27 houses (rows, columns, boxes) and the 3 houses of every cell
# - the 20 peers of every cell
# - bitmask tables (popcount, digit lists) for 9-bit candidate sets
# Cells are flat indices 0..80 (9*row + col), rows/cols 0-based internally.


Cell = int
Mask = int

SIZE = 9
NUM_CELLS = SIZE * SIZE
DIGITS = tuple(range(1, 10))
ALL_MASK: Mask = (1 << SIZE) - 1  # 0b1_1111_1111


def cell_index(r: int, c: int) -> Cell:
    return SIZE * r + c


def cell_rc(cell: Cell) -> tuple[int, int]:
    return divmod(cell, SIZE)


def which_box(r: int, c: int) -> int:
    """0-based box number, boxes numbered row-major."""
    return 3 * (r // 3) + (c // 3)


def rc_to_key(r: int, c: int) -> str:
    """Tool-layer cell key; takes 0-based coordinates, renders 1-based ('r1c1' is the top-left cell)."""
    return f"r{r + 1}c{c + 1}"


def unit_cells_row(r: int) -> list[Cell]:
    return [cell_index(r, c) for c in range(SIZE)]


def unit_cells_col(c: int) -> list[Cell]:
    return [cell_index(r, c) for r in range(SIZE)]


def unit_cells_box(b: int) -> list[Cell]:
    r0 = 3 * (b // 3)
    c0 = 3 * (b % 3)
    return [cell_index(r0 + i, c0 + j) for i in range(3) for j in range(3)]


def unit_name(u: int) -> str:
    """Label of house ``u`` in UNITS order: 'r1'..'r9', 'c1'..'c9', 'b1'..'b9'."""
    kind, n = divmod(u, SIZE)
    return "rcb"[kind] + str(n + 1)


def _peers_of(cell: Cell) -> tuple[Cell, ...]:
    r, c = cell_rc(cell)
    ps = set(unit_cells_row(r)) | set(unit_cells_col(c)) | set(unit_cells_box(which_box(r, c)))
    ps.discard(cell)
    return tuple(sorted(ps))


# 27 houses: rows 0..8, then columns, then boxes
UNITS: tuple[tuple[Cell, ...], ...] = tuple(
    [tuple(unit_cells_row(i)) for i in range(SIZE)]
    + [tuple(unit_cells_col(i)) for i in range(SIZE)]
    + [tuple(unit_cells_box(i)) for i in range(SIZE)]
)

UNITS_OF: tuple[tuple[int, int, int], ...] = tuple(
    (r, SIZE + c, 2 * SIZE + which_box(r, c)) for r, c in map(cell_rc, range(NUM_CELLS))
)

PEERS: tuple[tuple[Cell, ...], ...] = tuple(_peers_of(i) for i in range(NUM_CELLS))


def digit_to_mask(d: int) -> Mask:
    return 0 if d == 0 else 1 << (d - 1)


# Lookup tables over all 512 masks
POPCOUNT: tuple[int, ...] = tuple(bin(m).count("1") for m in range(ALL_MASK + 1))
MASK_DIGITS: tuple[tuple[int, ...], ...] = tuple(
    tuple(d for d in DIGITS if m & (1 << (d - 1))) for m in range(ALL_MASK + 1)
)


def mask_to_digits(mask: Mask) -> list[int]:
    return list(MASK_DIGITS[mask])
