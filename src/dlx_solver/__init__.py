"""
DLX Solver - Exact Cover by Dancing Links

Algorithm X over an index-addressed toroidal matrix, with a Sudoku encoding
on top of it.
"""

from .core import (
    Grid, Tag, Placement, EMPTY, G, copy_grid, assert_grid,
    DancingLinksError, RowIndexError, InvalidRowError,
    ConflictingGivens, Exhausted, IncompleteSolution, SearchTimeout,
    DancingMatrix,
    SEARCHING, DONE, INTERRUPTED,
    SearchPolicy, FirstSolution, AllSolutions, SolutionLimit,
    SearchStats, AlgorithmX, solve_exact_cover,
    Receipts, residual, givens_residual,
)
from .sudoku import (
    SudokuMatrix, build_matrix, validate_givens,
    placements_to_grid, extract_grid,
    unit_violations, is_complete_solution, verify_solution,
    solve_backtracking,
    format_grid, print_grid,
    SudokuResult, solve_sudoku, count_solutions, is_unique,
)
from .utils import (
    grid_to_list, puzzle_sha, solution_sha, log_receipt, build_receipt_record
)

__version__ = "0.1.0"

__all__ = [
    # Types
    'Grid', 'Tag', 'Placement', 'EMPTY', 'G', 'copy_grid', 'assert_grid',

    # Errors
    'DancingLinksError', 'RowIndexError', 'InvalidRowError',
    'ConflictingGivens', 'Exhausted', 'IncompleteSolution', 'SearchTimeout',

    # Engine
    'DancingMatrix',
    'SEARCHING', 'DONE', 'INTERRUPTED',
    'SearchPolicy', 'FirstSolution', 'AllSolutions', 'SolutionLimit',
    'SearchStats', 'AlgorithmX', 'solve_exact_cover',

    # Receipts
    'Receipts', 'residual', 'givens_residual',

    # Sudoku
    'SudokuMatrix', 'build_matrix', 'validate_givens',
    'placements_to_grid', 'extract_grid',
    'unit_violations', 'is_complete_solution', 'verify_solution',
    'solve_backtracking',
    'format_grid', 'print_grid',
    'SudokuResult', 'solve_sudoku', 'count_solutions', 'is_unique',

    # Utils
    'grid_to_list', 'puzzle_sha', 'solution_sha', 'log_receipt', 'build_receipt_record',
]
