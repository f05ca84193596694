#!/usr/bin/env python3
"""DLX Solver - Solution Extractor"""

import numpy as np
from typing import Sequence

from ..core.types import Grid, Placement, EMPTY
from ..core.errors import IncompleteSolution
from ..core.search import AlgorithmX, DONE

def placements_to_grid(placements: Sequence[Placement], size: int) -> Grid:
    """
    Write placements into a fresh size x size grid.

    Raises:
        IncompleteSolution: a cell is left empty or written twice
    """
    out = np.zeros((size, size), dtype=int)
    for p in placements:
        if out[p.row, p.col] != EMPTY:
            raise IncompleteSolution(f"Cell ({p.row},{p.col}) placed twice")
        out[p.row, p.col] = p.value
    missing = np.argwhere(out == EMPTY)
    if missing.size:
        r, c = missing[0]
        raise IncompleteSolution(f"{len(missing)} cells left empty, first at ({r},{c})")
    return out

def extract_grid(search: AlgorithmX, size: int, index: int = 0) -> Grid:
    """Filled grid for the index-th solution of a finished search. Never touches the matrix."""
    if search.state != DONE:
        raise IncompleteSolution(f"Search has not reached a solution (state: {search.state})")
    return placements_to_grid(search.solutions[index], size)
