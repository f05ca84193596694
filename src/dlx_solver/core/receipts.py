#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DLX Solver - Receipts & Verification
=====================================

Every solve carries a receipt:
- Residual: number of givens the output disagrees with (0 = all kept)
- Search bill: rows tried, backtracks, dead ends, deepest level
- Summary: one line tying the outcome to the numbers above

Discipline:
- A solved grid must have residual 0 against its givens
- Receipts are written for every outcome, including failures
"""

import numpy as np
from dataclasses import dataclass, asdict
from typing import Dict, Optional

from .types import Grid, EMPTY

# =============================================================================
# Receipts Dataclass
# =============================================================================

@dataclass
class Receipts:
    """Record of how a puzzle outcome was reached."""
    status: str                    # solved / conflicting_givens / exhausted / timeout
    residual: int                  # givens changed by the output (-1 = no output)
    rows_tried: int                # rows pushed onto the solution stack
    backtracks: int                # frames popped after exhausting their rows
    dead_ends: int                 # columns found with no live row
    max_depth: int                 # deepest search level reached
    solutions: int                 # exact covers found
    summary: str                   # one-line explanation

    def to_dict(self) -> Dict:
        return asdict(self)

# =============================================================================
# Residual Computation
# =============================================================================

def residual(predicted: Grid, target: Grid) -> int:
    """
    Hamming distance (# mismatched cells) between two grids.

    Shape mismatch counts every cell of both grids.
    """
    if predicted.shape != target.shape:
        return predicted.size + target.size

    return int((predicted != target).sum())

def givens_residual(puzzle: Grid, solved: Grid) -> int:
    """
    Number of given cells whose value differs in `solved`.

    Returns:
        0 if every given is preserved
    """
    if puzzle.shape != solved.shape:
        return puzzle.size + solved.size
    mask = puzzle != EMPTY
    return int(np.logical_and(mask, puzzle != solved).sum())

# =============================================================================
# Summary Generation
# =============================================================================

def generate_summary(name: str, status: str, stats: Dict, detail: Optional[str] = None) -> str:
    """
    One-line explanation of a solve.

    Args:
        name: Puzzle identifier
        status: Outcome status
        stats: Search stats dict (may be empty when no search ran)
        detail: Extra text (e.g. the conflicting givens)
    """
    if status == "solved":
        text = (f"[{name}] Exact cover found after {stats.get('rows_tried', 0)} row attempts "
                f"({stats.get('backtracks', 0)} backtracks, depth {stats.get('max_depth', 0)}).")
    elif status == "exhausted":
        text = (f"[{name}] No exact cover: search exhausted after {stats.get('rows_tried', 0)} "
                f"row attempts ({stats.get('dead_ends', 0)} dead ends).")
    elif status == "conflicting_givens":
        text = f"[{name}] Rejected before search: givens conflict."
    elif status == "timeout":
        text = f"[{name}] Interrupted after {stats.get('rows_tried', 0)} row attempts."
    else:
        text = f"[{name}] {status}"
    if detail:
        text += f" {detail}"
    return text

def make_receipts(name: str,
                  status: str,
                  stats: Dict,
                  puzzle: Optional[Grid] = None,
                  solved: Optional[Grid] = None,
                  detail: Optional[str] = None) -> Receipts:
    """Assemble Receipts from search stats and (optionally) the output grid."""
    res = givens_residual(puzzle, solved) if puzzle is not None and solved is not None else -1
    return Receipts(
        status=status,
        residual=res,
        rows_tried=stats.get("rows_tried", 0),
        backtracks=stats.get("backtracks", 0),
        dead_ends=stats.get("dead_ends", 0),
        max_depth=stats.get("max_depth", 0),
        solutions=stats.get("solutions", 0),
        summary=generate_summary(name, status, stats, detail),
    )
