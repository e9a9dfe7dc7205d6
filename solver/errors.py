"""Exceptions raised while reading a puzzle. Search outcomes (no solution, cancelled) are result statuses, not exceptions."""

from __future__ import annotations

from typing import Any, Optional


class SudokuInputError(ValueError):
    """Base class for puzzles rejected before any search is attempted."""


class MalformedInput(SudokuInputError):
    def __init__(self, message: str, *, length: int, position: Optional[int] = None, char: Optional[str] = None):
        super().__init__(message)
        self.length = length
        self.position = position
        self.char = char


class ContradictoryInput(SudokuInputError):
    """Two givens share a digit in some row, column or box.

    ``issues`` holds one record per offending house, e.g.
    ``{"type": "duplicate", "unit": "r1", "digits": [5], "cells": ["r1c1", "r1c2"]}``.
    """

    def __init__(self, issues: list[dict[str, Any]]):
        units = ", ".join(f"{i['unit']} (digits {', '.join(map(str, i['digits']))})" for i in issues)
        super().__init__(f"givens repeat a digit in {units}")
        self.issues = issues


class SolutionVerificationError(RuntimeError):
    """A reported solution failed independent verification; this is a solver bug."""

    def __init__(self, issues: list[dict[str, Any]]):
        super().__init__(f"solution failed verification with {len(issues)} issue(s)")
        self.issues = issues
