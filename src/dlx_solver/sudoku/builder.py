#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DLX Solver - Sudoku Exact-Cover Builder
========================================

Encodes an N x N grid (N = box * box, boxes box x box) as exact cover.

Columns (4 * N * N), one per constraint:
- cell (r, c) is filled           : r * N + c
- row r contains digit d          : N*N   + r * N + (d - 1)
- column c contains digit d       : 2*N*N + c * N + (d - 1)
- box b contains digit d          : 3*N*N + b * N + (d - 1)

Rows, one per (cell, value) still consistent with the givens, each covering
exactly one column of every family. A given cell only gets the row for its
own value, so the search keeps it without special-casing.
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.types import Grid, Placement, EMPTY, assert_grid
from ..core.errors import ConflictingGivens
from ..core.matrix import DancingMatrix

DEFAULT_BOX_SIZE = 3

# =============================================================================
# Grid Preparation
# =============================================================================

def infer_box(size: int) -> int:
    """Box side for an N x N grid with square boxes."""
    box = math.isqrt(size)
    if box * box != size:
        raise ValueError(f"Grid side {size} is not a perfect square; pass box explicitly")
    return box

def prepare_grid(grid, box: Optional[int] = None) -> Tuple[Grid, int, int]:
    """
    Validate shape and value domain.

    Returns:
        (grid, size, box) with grid as an int ndarray
    """
    g = np.array(grid)      # private copy; non-integer input fails assert_grid
    assert_grid(g)
    size = g.shape[0]
    if box is None:
        box = infer_box(size)
    elif box * box != size:
        raise ValueError(f"Box side {box} does not tile a {size}x{size} grid")
    bad = np.argwhere((g < EMPTY) | (g > size))
    if bad.size:
        r, c = bad[0]
        raise ValueError(f"Cell ({r},{c}) holds {g[r, c]}, expected 0..{size}")
    return g, size, box

def box_index(r: int, c: int, box: int) -> int:
    return (r // box) * box + c // box

# =============================================================================
# Given Validation
# =============================================================================

def iter_units(size: int, box: int):
    """Yield (kind, index, cells) for every row, column and box."""
    for r in range(size):
        yield "row", r, [(r, c) for c in range(size)]
    for c in range(size):
        yield "column", c, [(r, c) for r in range(size)]
    for b in range(size):
        r0, c0 = (b // box) * box, (b % box) * box
        yield "box", b, [(r0 + i, c0 + j) for i in range(box) for j in range(box)]

def validate_givens(grid: Grid, box: int):
    """
    Reject a puzzle whose givens already break a constraint.

    Raises:
        ConflictingGivens: the first unit (rows, then columns, then boxes)
            holding a value twice
    """
    size = grid.shape[0]
    for kind, index, cells in iter_units(size, box):
        seen: Dict[int, List[Tuple[int, int]]] = {}
        for r, c in cells:
            v = int(grid[r, c])
            if v != EMPTY:
                seen.setdefault(v, []).append((r, c))
        for v in sorted(seen):
            if len(seen[v]) > 1:
                raise ConflictingGivens(kind, index, v, seen[v])

# =============================================================================
# Candidate Masks
# =============================================================================

class CandidateMask:
    """
    Values already used per row, column and box.

    Implementation: three (N, N+1) boolean arrays, entry [u, v] set when
    value v is placed somewhere in unit u (column 0 unused).
    """

    def __init__(self, size: int, box: int):
        self.size = size
        self.box = box
        self.rows = np.zeros((size, size + 1), dtype=bool)
        self.cols = np.zeros((size, size + 1), dtype=bool)
        self.boxes = np.zeros((size, size + 1), dtype=bool)

    @classmethod
    def from_grid(cls, grid: Grid, box: int) -> 'CandidateMask':
        mask = cls(grid.shape[0], box)
        for r, c in np.argwhere(grid != EMPTY):
            mask.set(int(r), int(c), int(grid[r, c]))
        return mask

    def set(self, r: int, c: int, value: int):
        self.rows[r, value] = True
        self.cols[c, value] = True
        self.boxes[box_index(r, c, self.box), value] = True

    def clear(self, r: int, c: int, value: int):
        self.rows[r, value] = False
        self.cols[c, value] = False
        self.boxes[box_index(r, c, self.box), value] = False

    def candidates(self, r: int, c: int) -> List[int]:
        """Values 1..N not yet used in the cell's row, column or box, ascending."""
        used = self.rows[r] | self.cols[c] | self.boxes[box_index(r, c, self.box)]
        return [int(v) for v in np.flatnonzero(~used[1:]) + 1]

# =============================================================================
# Matrix Construction
# =============================================================================

def constraint_columns(r: int, c: int, d: int, size: int, box: int) -> List[int]:
    """The 4 columns covered by writing d into (r, c): cell, row, column, box."""
    n2 = size * size
    return [
        r * size + c,
        n2 + r * size + (d - 1),
        2 * n2 + c * size + (d - 1),
        3 * n2 + box_index(r, c, box) * size + (d - 1),
    ]

def constraint_names(size: int) -> List[str]:
    """Printable header names, 1-based, in column order."""
    names = [f"R{r + 1}C{c + 1}#" for r in range(size) for c in range(size)]
    names += [f"R{r + 1}={d}" for r in range(size) for d in range(1, size + 1)]
    names += [f"C{c + 1}={d}" for c in range(size) for d in range(1, size + 1)]
    names += [f"B{b + 1}={d}" for b in range(size) for d in range(1, size + 1)]
    return names

@dataclass
class SudokuMatrix:
    """Exact-cover instance for one puzzle."""
    puzzle: Grid
    size: int
    box: int
    matrix: DancingMatrix
    placements: List[Placement]   # row index -> placement

    @property
    def num_givens(self) -> int:
        return int((self.puzzle != EMPTY).sum())

def build_matrix(grid, box: Optional[int] = None) -> SudokuMatrix:
    """
    Build the Dancing Links matrix for a puzzle.

    Args:
        grid: N x N grid, 0 for empty cells
        box: Box side (inferred from N when omitted)

    Raises:
        ValueError: malformed grid
        ConflictingGivens: givens already violate a constraint
    """
    g, size, box = prepare_grid(grid, box)
    validate_givens(g, box)
    mask = CandidateMask.from_grid(g, box)

    rows: List[List[int]] = []
    placements: List[Placement] = []
    for r in range(size):
        for c in range(size):
            given = int(g[r, c])
            values = [given] if given != EMPTY else mask.candidates(r, c)
            for d in values:
                rows.append(constraint_columns(r, c, d, size, box))
                placements.append(Placement(r, c, d))

    matrix = DancingMatrix(4 * size * size, rows, tags=placements, names=constraint_names(size))
    return SudokuMatrix(g, size, box, matrix, placements)
