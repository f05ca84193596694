"""DLX Solver - Core Exact-Cover Engine"""

from .types import Grid, Tag, Placement, EMPTY, G, copy_grid, assert_grid
from .errors import (
    DancingLinksError,
    RowIndexError,
    InvalidRowError,
    ConflictingGivens,
    Exhausted,
    IncompleteSolution,
    SearchTimeout,
)
from .matrix import DancingMatrix, ROOT
from .search import (
    SEARCHING, DONE, EXHAUSTED, INTERRUPTED,
    SearchPolicy,
    FirstSolution,
    AllSolutions,
    SolutionLimit,
    SearchFrame,
    SearchStats,
    AlgorithmX,
    make_policy,
    solve_exact_cover,
)
from .receipts import (
    Receipts,
    residual,
    givens_residual,
    generate_summary,
    make_receipts,
)

__all__ = [
    # Types
    'Grid', 'Tag', 'Placement', 'EMPTY', 'G', 'copy_grid', 'assert_grid',
    # Errors
    'DancingLinksError', 'RowIndexError', 'InvalidRowError',
    'ConflictingGivens', 'Exhausted', 'IncompleteSolution', 'SearchTimeout',
    # Matrix
    'DancingMatrix', 'ROOT',
    # Search
    'SEARCHING', 'DONE', 'EXHAUSTED', 'INTERRUPTED',
    'SearchPolicy', 'FirstSolution', 'AllSolutions', 'SolutionLimit',
    'SearchFrame', 'SearchStats', 'AlgorithmX', 'make_policy', 'solve_exact_cover',
    # Receipts
    'Receipts', 'residual', 'givens_residual', 'generate_summary', 'make_receipts',
]
