#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DLX Solver - Solution Validator
================================

Checks a filled grid without going through the exact-cover engine:
- every row, column and box holds each of 1..N exactly once
- every given of the puzzle is unchanged
"""

import numpy as np
from typing import Dict, List, Optional, Tuple

from ..core.types import Grid, EMPTY
from ..core.receipts import givens_residual
from .builder import prepare_grid, iter_units

def unit_violations(grid: Grid, box: Optional[int] = None) -> List[Tuple[str, int]]:
    """
    Units that are not a permutation of 1..N.

    Returns:
        [(kind, index), ...] in row, column, box order (empty = valid)
    """
    g, size, box = prepare_grid(grid, box)
    expected = np.arange(1, size + 1)
    bad = []
    for kind, index, cells in iter_units(size, box):
        values = np.sort(np.array([g[r, c] for r, c in cells]))
        if not np.array_equal(values, expected):
            bad.append((kind, index))
    return bad

def is_complete_solution(grid: Grid, box: Optional[int] = None) -> bool:
    """True if the grid is full and every unit is a permutation of 1..N."""
    return not unit_violations(grid, box)

def verify_solution(puzzle: Grid, solved: Grid, box: Optional[int] = None) -> Tuple[bool, Dict]:
    """
    Verify that `solved` is a legal completion of `puzzle`.

    Returns:
        (ok, report) where report = {"empty_cells": int,
                                     "unit_violations": [(kind, index), ...],
                                     "givens_residual": int}
    """
    p, _, box = prepare_grid(puzzle, box)
    s, _, _ = prepare_grid(solved, box)
    if p.shape != s.shape:
        raise ValueError(f"Shape mismatch: puzzle {p.shape}, solution {s.shape}")

    report = {
        "empty_cells": int((s == EMPTY).sum()),
        "unit_violations": unit_violations(s, box),
        "givens_residual": givens_residual(p, s),
    }
    ok = (report["empty_cells"] == 0
          and not report["unit_violations"]
          and report["givens_residual"] == 0)
    return ok, report
