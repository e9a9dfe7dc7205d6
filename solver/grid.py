"""Board state for the search: cell values, 9-bit candidate masks, and the assign/unassign primitives used for backtracking."""

from __future__ import annotations

import numbers
from typing import Any, Optional, Sequence

import numpy as np

from types_sudoku import Candidates, Grid

from .errors import ContradictoryInput, MalformedInput
from .solver_core import (
    ALL_MASK,
    MASK_DIGITS,
    NUM_CELLS,
    PEERS,
    POPCOUNT,
    SIZE,
    UNITS,
    Cell,
    Mask,
    cell_rc,
    digit_to_mask,
    mask_to_digits,
    rc_to_key,
    unit_name,
)

# (previous mask of the assigned cell, peers that lost the digit)
Undo = tuple[Mask, list[Cell]]

# Returned by hidden_single_in when a house has an unplaced digit with no cell left
DEAD_END: tuple[Cell, int] = (-1, 0)


def duplicate_issues(values: Sequence[int]) -> list[dict[str, Any]]:
    """Houses in which a non-zero digit occurs more than once, in row/column/box order."""
    issues = []
    for u, cells in enumerate(UNITS):
        seen = dups = 0
        for cell in cells:
            bit = digit_to_mask(values[cell])
            if seen & bit:
                dups |= bit
            seen |= bit
        if dups:
            digits = mask_to_digits(dups)
            issues.append(
                {
                    "type": "duplicate",
                    "unit": unit_name(u),
                    "digits": digits,
                    "cells": [rc_to_key(*cell_rc(c)) for c in cells if values[c] in digits],
                }
            )
    return issues


class SudokuGrid:
    """A 9x9 board owned by one solve.

    ``values[cell]`` is 0 for an open cell, else the placed digit. ``masks[cell]``
    holds the candidates of an open cell (bit ``d-1`` for digit ``d``); a filled
    cell keeps the single bit of its digit.
    """

    def __init__(self, values: Sequence[int]):
        if len(values) != NUM_CELLS:
            raise MalformedInput(f"expected {NUM_CELLS} cells, got {len(values)}", length=len(values))
        for i, v in enumerate(values):
            if isinstance(v, bool) or not isinstance(v, numbers.Integral) or not 0 <= v <= 9:
                raise MalformedInput(
                    f"invalid value {v!r} at {rc_to_key(*cell_rc(i))} (allowed: 0..9)",
                    length=NUM_CELLS,
                    position=i,
                )
        self.values: list[int] = [int(v) for v in values]
        issues = duplicate_issues(self.values)
        if issues:
            raise ContradictoryInput(issues)

        self.masks: list[Mask] = [0] * NUM_CELLS
        self._open = 0
        for cell, v in enumerate(self.values):
            if v:
                self.masks[cell] = digit_to_mask(v)
                continue
            used = 0
            for p in PEERS[cell]:
                used |= digit_to_mask(self.values[p])
            self.masks[cell] = ALL_MASK & ~used
            self._open += 1

    @classmethod
    def from_string(cls, text: str, placeholders: str = "0.") -> "SudokuGrid":
        """Parse exactly 81 row-major characters: '1'-'9' are givens, '0' (or any placeholder) is empty."""
        if len(text) != NUM_CELLS:
            raise MalformedInput(
                f"puzzle must be {NUM_CELLS} characters long, got {len(text)}", length=len(text)
            )
        values = []
        for i, ch in enumerate(text):
            if "1" <= ch <= "9":
                values.append(ord(ch) - ord("0"))
            elif ch == "0" or ch in placeholders:
                values.append(0)
            else:
                raise MalformedInput(
                    f"unexpected character {ch!r} at position {i}", length=len(text), position=i, char=ch
                )
        return cls(values)

    @classmethod
    def from_rows(cls, rows: Grid) -> "SudokuGrid":
        """Build from 9 rows of 9 integers (0 = empty); numpy arrays work too."""
        try:
            shape_ok = len(rows) == SIZE and all(len(row) == SIZE for row in rows)
        except TypeError:
            shape_ok = False
        if not shape_ok:
            raise MalformedInput("grid must be 9 rows of 9 cells", length=0)
        return cls([v for row in rows for v in row])

    # --- search primitives -------------------------------------------------

    def assign(self, cell: Cell, digit: int) -> tuple[Undo, bool]:
        """Place ``digit`` and strike it from every open peer.

        Returns ``(undo, ok)``; ``ok`` is False when some open peer ran out of
        candidates. The strike is applied to all peers either way so that
        ``unassign(cell, undo)`` always restores the exact prior state.
        Placing a digit that is not a candidate of ``cell`` is an error.
        """
        values, masks = self.values, self.masks
        if values[cell]:
            raise ValueError(f"cell {rc_to_key(*cell_rc(cell))} is already assigned")
        if not 1 <= digit <= SIZE or not masks[cell] & (1 << (digit - 1)):
            raise ValueError(f"{digit!r} is not a candidate of {rc_to_key(*cell_rc(cell))}")
        bit = 1 << (digit - 1)
        touched = []
        ok = True
        for p in PEERS[cell]:
            if not values[p] and masks[p] & bit:
                m = masks[p] ^ bit
                masks[p] = m
                touched.append(p)
                if not m:
                    ok = False
        undo = (masks[cell], touched)
        values[cell] = digit
        masks[cell] = bit
        self._open -= 1
        return undo, ok

    def unassign(self, cell: Cell, undo: Undo) -> None:
        prev_mask, touched = undo
        bit = 1 << (self.values[cell] - 1)
        masks = self.masks
        for p in touched:
            masks[p] |= bit
        masks[cell] = prev_mask
        self.values[cell] = 0
        self._open += 1

    def is_complete(self) -> bool:
        return self._open == 0

    def find_most_constrained_cell(self) -> Optional[Cell]:
        """Open cell with the fewest candidates, lowest index on ties; None if the board is full."""
        values, masks = self.values, self.masks
        best = None
        best_count = SIZE + 1
        for cell in range(NUM_CELLS):
            if values[cell]:
                continue
            n = POPCOUNT[masks[cell]]
            if n < best_count:
                best, best_count = cell, n
                if n == 0:
                    break
        return best

    def hidden_single_in(self, unit: int) -> Optional[tuple[Cell, int]]:
        """Lowest digit with exactly one possible cell in house ``unit`` (UNITS order).

        Returns ``DEAD_END`` when the house has an unplaced digit that fits nowhere.
        """
        values, masks = self.values, self.masks
        cells = UNITS[unit]
        once = twice = placed = 0
        for cell in cells:
            v = values[cell]
            if v:
                placed |= 1 << (v - 1)
            else:
                m = masks[cell]
                twice |= once & m
                once |= m
        if (once | placed) != ALL_MASK:
            return DEAD_END
        hidden = once & ~twice & ~placed
        if not hidden:
            return None
        d = MASK_DIGITS[hidden][0]
        bit = 1 << (d - 1)
        for cell in cells:
            if not values[cell] and masks[cell] & bit:
                return cell, d
        return None

    # --- views -------------------------------------------------------------

    def candidates(self, cell: Cell) -> list[int]:
        """Ascending candidate digits of an open cell; empty list for a filled cell."""
        if self.values[cell]:
            return []
        return mask_to_digits(self.masks[cell])

    def candidates_dict(self) -> Candidates:
        return {
            rc_to_key(*cell_rc(cell)): mask_to_digits(self.masks[cell])
            for cell in range(NUM_CELLS)
            if not self.values[cell]
        }

    def to_string(self) -> str:
        return "".join(map(str, self.values))

    def to_rows(self) -> Grid:
        return [self.values[SIZE * r : SIZE * (r + 1)] for r in range(SIZE)]

    def to_array(self) -> np.ndarray:
        return np.array(self.values, dtype=np.int8).reshape(SIZE, SIZE)

    def __repr__(self) -> str:
        return f"SudokuGrid('{self.to_string()}')"
