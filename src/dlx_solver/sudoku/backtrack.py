#!/usr/bin/env python3
"""
DLX Solver - Reference Backtracking Solver

Plain cell-by-cell backtracking with candidate masks, kept as an independent
cross-check of the exact-cover engine. Blank cells are filled in row-major
order; each stack entry holds the candidates left for its cell, tried from
the largest value down.
"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.types import Grid, EMPTY, copy_grid
from ..core.errors import Exhausted
from .builder import prepare_grid, validate_givens, CandidateMask


@dataclass
class Square:
    """A blank cell on the stack."""
    index: int                  # position in the blank list
    candidates: List[int] = field(default_factory=list)
    value: int = EMPTY


def solve_backtracking(grid, box: Optional[int] = None) -> Tuple[Grid, Dict]:
    """
    Solve by candidate backtracking.

    Returns:
        (solved grid, stats) where stats = {"placements": N, "backtracks": M, "elapsed_ms": T}

    Raises:
        ConflictingGivens: givens already violate a constraint
        Exhausted: no completion exists
    """
    t_start = time.time()
    g, size, box = prepare_grid(grid, box)
    validate_givens(g, box)

    out = copy_grid(g)
    mask = CandidateMask.from_grid(g, box)
    blanks = [(r, c) for r in range(size) for c in range(size) if g[r, c] == EMPTY]
    stats = {"placements": 0, "backtracks": 0, "elapsed_ms": 0}

    if not blanks:
        return out, stats

    stack = [Square(0, mask.candidates(*blanks[0]))]
    while stack:
        sq = stack[-1]
        r, c = blanks[sq.index]
        if sq.value != EMPTY:
            mask.clear(r, c, sq.value)
            out[r, c] = EMPTY
            sq.value = EMPTY

        if not sq.candidates:
            stack.pop()
            stats["backtracks"] += 1
            continue

        sq.value = sq.candidates.pop()
        mask.set(r, c, sq.value)
        out[r, c] = sq.value
        stats["placements"] += 1

        if sq.index + 1 == len(blanks):
            stats["elapsed_ms"] = int((time.time() - t_start) * 1000)
            return out, stats
        nr, nc = blanks[sq.index + 1]
        stack.append(Square(sq.index + 1, mask.candidates(nr, nc)))

    stats["elapsed_ms"] = int((time.time() - t_start) * 1000)
    raise Exhausted(stats)
