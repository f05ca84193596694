#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DLX Solver - Error Taxonomy
============================

Puzzle outcomes (ConflictingGivens, Exhausted) are expected results that the
puzzle facade turns into a status. IncompleteSolution and the row-selection
errors signal caller misuse.
"""

from typing import Dict, List, Optional, Tuple


class DancingLinksError(Exception):
    """Base class for every error raised by the exact-cover engine."""


class RowIndexError(DancingLinksError, IndexError):
    """Row index outside the matrix."""

    def __init__(self, row: int, num_rows: int):
        super().__init__(f"Row index {row} out of bounds (matrix has {num_rows} rows)")
        self.row = row
        self.num_rows = num_rows


class InvalidRowError(DancingLinksError, ValueError):
    """Row cannot be added to the solution (empty, or no longer live)."""

    def __init__(self, row: int, reason: str):
        super().__init__(f"Row {row} cannot be added to solution: {reason}")
        self.row = row
        self.reason = reason


class ConflictingGivens(DancingLinksError, ValueError):
    """Two givens already violate a constraint; raised before any search."""

    def __init__(self, unit: str, index: int, value: int, cells: List[Tuple[int, int]]):
        where = ", ".join(f"({r},{c})" for r, c in cells)
        super().__init__(f"Value {value} appears {len(cells)} times in {unit} {index}: {where}")
        self.unit = unit
        self.index = index
        self.value = value
        self.cells = cells


class Exhausted(DancingLinksError):
    """Search space exhausted without an exact cover."""

    def __init__(self, stats: Optional[Dict] = None):
        super().__init__("No solution exists")
        self.stats = stats or {}


class IncompleteSolution(DancingLinksError, RuntimeError):
    """Extractor called on a search that has not reached the success state."""


class SearchTimeout(DancingLinksError):
    """Host time budget expired between two row attempts."""

    def __init__(self, timeout_s: float, stats: Optional[Dict] = None):
        super().__init__(f"Search interrupted after {timeout_s}s")
        self.timeout_s = timeout_s
        self.stats = stats or {}
