#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""DLX Solver - Sudoku Solver Harness"""

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.types import Grid
from ..core.errors import ConflictingGivens, Exhausted, SearchTimeout
from ..core.receipts import Receipts, make_receipts
from ..core.search import AlgorithmX, SolutionLimit, make_policy
from .builder import prepare_grid, build_matrix
from .extractor import extract_grid, placements_to_grid

# Outcome statuses
SOLVED = "solved"
CONFLICTING_GIVENS = "conflicting_givens"
EXHAUSTED = "exhausted"
TIMEOUT = "timeout"

DEFAULT_SOLUTION_LIMIT = 2

@dataclass
class SudokuResult:
    """Outcome of solving one puzzle."""
    name: str
    status: str
    puzzle: Grid
    grid: Optional[Grid]                              # first solution, only when solved
    solutions: List[Grid] = field(default_factory=list)
    receipts: Optional[Receipts] = None
    metadata: Dict = field(default_factory=dict)

    @property
    def solved(self) -> bool:
        return self.status == SOLVED

def solve_sudoku(puzzle,
                 *,
                 name: str = "sudoku",
                 box: Optional[int] = None,
                 find_all: bool = False,
                 limit: Optional[int] = None,
                 timeout_s: Optional[float] = None) -> SudokuResult:
    """
    Solve a puzzle by exact cover.

    Args:
        puzzle: N x N grid, 0 for empty cells
        name: Identifier used in receipts
        box: Box side (inferred when omitted)
        find_all: Enumerate every solution instead of stopping at the first
        limit: Stop after this many solutions (overrides find_all)
        timeout_s: Time budget, checked between row attempts

    Returns:
        SudokuResult with status solved / conflicting_givens / exhausted / timeout

    Raises:
        ValueError: malformed grid
    """
    t_start = time.time()
    g, size, box = prepare_grid(puzzle, box)

    # 1. Build: givens are validated before any search
    t_build_start = time.time()
    try:
        sm = build_matrix(g, box)
    except ConflictingGivens as e:
        metadata = {
            "conflict": {"unit": e.unit, "index": e.index, "value": e.value,
                         "cells": [list(cell) for cell in e.cells]},
            "timing_ms": {"build": int((time.time() - t_build_start) * 1000),
                          "search": 0,
                          "total": int((time.time() - t_start) * 1000)},
        }
        recs = make_receipts(name, CONFLICTING_GIVENS, {}, detail=str(e))
        return SudokuResult(name, CONFLICTING_GIVENS, g, None, [], recs, metadata)
    t_build_end = time.time()

    # 2. Search
    policy = make_policy(find_all, limit)
    search = AlgorithmX(sm.matrix, policy, timeout_s=timeout_s)
    t_search_start = time.time()
    try:
        search.run()
        status = SOLVED
    except Exhausted:
        status = EXHAUSTED
    except SearchTimeout:
        status = TIMEOUT
    t_search_end = time.time()

    # 3. Extract + receipts
    grid = None
    grids: List[Grid] = []
    if status == SOLVED:
        grid = extract_grid(search, size)
        grids = [placements_to_grid(s, size) for s in search.solutions]

    stats = search.stats.to_dict()
    recs = make_receipts(name, status, stats, puzzle=g, solved=grid)
    metadata = {
        "matrix": {"columns": sm.matrix.num_columns,
                   "rows": sm.matrix.num_rows,
                   "nodes": sm.matrix.num_nodes,
                   "givens": sm.num_givens},
        "policy": policy.name,
        "search": stats,
        "timing_ms": {"build": int((t_build_end - t_build_start) * 1000),
                      "search": int((t_search_end - t_search_start) * 1000),
                      "total": int((time.time() - t_start) * 1000)},
    }
    return SudokuResult(name, status, g, grid, grids, recs, metadata)

def count_solutions(puzzle, *, box: Optional[int] = None, limit: int = DEFAULT_SOLUTION_LIMIT) -> int:
    """
    Number of solutions, counting at most `limit`.

    Raises:
        ConflictingGivens: givens already violate a constraint
    """
    sm = build_matrix(puzzle, box)
    search = AlgorithmX(sm.matrix, SolutionLimit(limit))
    try:
        return len(search.run())
    except Exhausted:
        return 0

def is_unique(puzzle, *, box: Optional[int] = None) -> bool:
    """True if the puzzle has exactly one solution."""
    return count_solutions(puzzle, box=box, limit=2) == 1
