#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DLX Solver - Type Definitions
==============================

Core types used throughout the solver:
- Grid: 2D integer array (0 = empty cell, 1..N = value)
- Placement: one candidate (cell, value) pair, the tag of an exact-cover row
- Tag: any hashable row identity carried through the search
"""

import numpy as np
from dataclasses import dataclass
from typing import Hashable, Tuple

# =============================================================================
# Core Types
# =============================================================================

Grid = np.ndarray          # dtype=int, shape (N, N)
Tag = Hashable             # opaque row identity

EMPTY = 0

@dataclass(frozen=True, order=True)
class Placement:
    """Value `value` written into cell (row, col)."""
    row: int
    col: int
    value: int

    @property
    def cell(self) -> Tuple[int, int]:
        return (self.row, self.col)

# =============================================================================
# Type Utilities
# =============================================================================

def G(lst) -> Grid:
    """Helper to build a grid from nested lists."""
    return np.array(lst, dtype=int)

def copy_grid(g: Grid) -> Grid:
    """Create a copy of a grid."""
    return np.array(g, dtype=int)

def assert_grid(g: Grid):
    """Validate that g is a proper square Grid."""
    if not (isinstance(g, np.ndarray) and g.ndim == 2 and np.issubdtype(g.dtype, np.integer)):
        raise ValueError("Grid must be 2D int ndarray.")
    if g.shape[0] != g.shape[1]:
        raise ValueError(f"Grid must be square, got shape {g.shape}.")
