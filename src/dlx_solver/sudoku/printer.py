#!/usr/bin/env python3
"""DLX Solver - Text Printer"""

from typing import Optional

from ..core.types import Grid, EMPTY
from .builder import prepare_grid

def format_grid(grid: Grid, box: Optional[int] = None, blank: str = ".") -> str:
    """
    Render a grid as text, boxes separated by '|' and dashed lines.

    Example (9x9, first rows):
        4 1 5|8 3 .|. 9 .
        . . 3|. . 9|1 . 4
    """
    g, size, box = prepare_grid(grid, box)
    width = len(str(size))
    lines = []
    for r in range(size):
        parts = []
        for c in range(size):
            v = int(g[r, c])
            parts.append((blank if v == EMPTY else str(v)).rjust(width))
            if c == size - 1:
                break
            parts.append("|" if c % box == box - 1 else " ")
        line = "".join(parts)
        lines.append(line)
        if r % box == box - 1 and r != size - 1:
            lines.append("-" * len(line))
    return "\n".join(lines)

def print_grid(grid: Grid, box: Optional[int] = None):
    print(format_grid(grid, box))
