"""DLX Solver - Sudoku Encoding"""

from .builder import (
    DEFAULT_BOX_SIZE,
    SudokuMatrix,
    CandidateMask,
    infer_box,
    prepare_grid,
    box_index,
    iter_units,
    validate_givens,
    constraint_columns,
    constraint_names,
    build_matrix,
)
from .extractor import placements_to_grid, extract_grid
from .validator import unit_violations, is_complete_solution, verify_solution
from .backtrack import solve_backtracking
from .printer import format_grid, print_grid
from .solver import (
    SOLVED, CONFLICTING_GIVENS, EXHAUSTED, TIMEOUT,
    SudokuResult,
    solve_sudoku,
    count_solutions,
    is_unique,
)

__all__ = [
    # Builder
    'DEFAULT_BOX_SIZE', 'SudokuMatrix', 'CandidateMask', 'infer_box', 'prepare_grid',
    'box_index', 'iter_units', 'validate_givens', 'constraint_columns',
    'constraint_names', 'build_matrix',
    # Extractor
    'placements_to_grid', 'extract_grid',
    # Validator
    'unit_violations', 'is_complete_solution', 'verify_solution',
    # Reference solver
    'solve_backtracking',
    # Printer
    'format_grid', 'print_grid',
    # Solver
    'SOLVED', 'CONFLICTING_GIVENS', 'EXHAUSTED', 'TIMEOUT',
    'SudokuResult', 'solve_sudoku', 'count_solutions', 'is_unique',
]
