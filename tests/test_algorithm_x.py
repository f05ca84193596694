"""
Tests for Algorithm X over a DancingMatrix.

Covers:
- First-solution and enumerate-all policies
- Deterministic row order
- Matrix restored after every outcome (solved, exhausted, timeout)
- Rows committed before the search
"""

import numpy as np
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from dlx_solver.core.matrix import DancingMatrix
from dlx_solver.core.search import (
    AlgorithmX, FirstSolution, AllSolutions, SolutionLimit,
    DONE, EXHAUSTED, INTERRUPTED, SEARCHING, solve_exact_cover, make_policy
)
from dlx_solver.core.errors import Exhausted, IncompleteSolution, SearchTimeout


# ==============================================================================
# Helper Functions
# ==============================================================================

def make_small_matrix() -> DancingMatrix:
    """R1={1,2}, R2={3,4}, R3={1,3}, R4={2,4}; exact covers {R1,R2} and {R3,R4}."""
    return DancingMatrix(4, [[0, 1], [2, 3], [0, 2], [1, 3]])


def make_knuth_matrix() -> DancingMatrix:
    """Seven columns, rows given per column; unique cover is rows {1, 3, 5}."""
    return DancingMatrix.from_constraints([
        [0, 1], [4, 5], [3, 4], [0, 1, 2], [2, 3], [3, 4], [0, 2, 4, 5],
    ])


# ==============================================================================
# Policies
# ==============================================================================

def test_first_solution():
    m = make_small_matrix()
    search = AlgorithmX(m, record_trace=True)
    solutions = search.run()

    assert solutions == [(0, 1)], f"Expected [(0, 1)], got {solutions}"
    assert search.solution == (0, 1)
    assert search.state == DONE
    assert search.trace == [0, 1], f"Only R1 then R2 should be tried, got {search.trace}"


def test_all_solutions_in_search_order():
    m = make_small_matrix()
    search = AlgorithmX(m, AllSolutions(), record_trace=True)
    solutions = search.run()

    assert solutions == [(0, 1), (2, 3)], f"Unexpected solutions {solutions}"
    assert search.trace == [0, 1, 2, 3]
    assert search.stats.solutions == 2
    assert search.stats.rows_tried == 4


def test_solution_limit():
    search = AlgorithmX(make_small_matrix(), SolutionLimit(1))
    assert search.run() == [(0, 1)]

    search = AlgorithmX(make_small_matrix(), SolutionLimit(5))
    assert len(search.run()) == 2, "Limit above the total just enumerates everything"

    with pytest.raises(ValueError):
        SolutionLimit(0)


def test_policy_reused_across_searches():
    policy = AllSolutions()
    assert AlgorithmX(make_small_matrix(), policy).run() == [(0, 1), (2, 3)]

    search = AlgorithmX(DancingMatrix(3, [[0, 1], [1, 2]]), policy)
    with pytest.raises(Exhausted):
        search.run()
    assert search.state == EXHAUSTED, "Earlier covers must not count for a new search"
    assert policy.solutions == []


def test_solution_limit_reused():
    policy = SolutionLimit(1)
    for _ in range(2):
        search = AlgorithmX(make_small_matrix(), policy)
        assert search.run() == [(0, 1)], f"Got {search.solutions}"


def test_trace_off_by_default():
    search = AlgorithmX(make_small_matrix(), AllSolutions())
    search.run()
    assert search.trace == [], "Rows are only recorded with record_trace=True"
    assert search.stats.rows_tried == 4


def test_make_policy():
    assert isinstance(make_policy(), FirstSolution)
    assert isinstance(make_policy(find_all=True), AllSolutions)
    assert isinstance(make_policy(find_all=True, limit=3), SolutionLimit)


def test_solve_exact_cover():
    solutions, stats = solve_exact_cover(make_small_matrix(), find_all=True)
    assert solutions == [(0, 1), (2, 3)]
    assert stats["solutions"] == 2 and stats["max_depth"] == 2


def test_knuth_example():
    search = AlgorithmX(make_knuth_matrix())
    search.run()
    assert sorted(search.solution) == [1, 3, 5], f"Got {search.solution}"


# ==============================================================================
# Restoration and Determinism
# ==============================================================================

def test_matrix_restored_after_success():
    m = make_knuth_matrix()
    before = m.snapshot()
    AlgorithmX(m, AllSolutions()).run()
    assert np.array_equal(before, m.snapshot()), "Search must leave the matrix untouched"


def test_repeated_runs_identical():
    m = make_knuth_matrix()
    runs = []
    for _ in range(5):
        search = AlgorithmX(m, AllSolutions(), record_trace=True)
        search.run()
        runs.append((list(search.trace), search.solutions))
    assert all(r == runs[0] for r in runs), "Same matrix should give the same trace every run"


def test_search_cannot_run_twice():
    search = AlgorithmX(make_small_matrix())
    search.run()
    with pytest.raises(RuntimeError):
        search.run()


# ==============================================================================
# Failure Outcomes
# ==============================================================================

def test_no_cover_raises_exhausted():
    m = DancingMatrix(3, [[0, 1], [1, 2]])
    before = m.snapshot()
    search = AlgorithmX(m)

    with pytest.raises(Exhausted) as exc:
        search.run()

    assert search.state == EXHAUSTED
    assert exc.value.stats["solutions"] == 0
    assert np.array_equal(before, m.snapshot()), "Matrix must be restored after exhaustion"
    with pytest.raises(IncompleteSolution):
        search.solution


def test_empty_column_is_dead_end():
    search = AlgorithmX(DancingMatrix(2, [[0]]))
    with pytest.raises(Exhausted):
        search.run()
    assert search.stats.dead_ends == 1
    assert search.stats.rows_tried == 0, "Column with no rows should fail before any row"


def test_solution_before_run():
    search = AlgorithmX(make_small_matrix())
    assert search.state == SEARCHING
    with pytest.raises(IncompleteSolution):
        search.solution


def test_timeout_restores_matrix():
    m = make_knuth_matrix()
    before = m.snapshot()
    search = AlgorithmX(m, timeout_s=0.0)

    with pytest.raises(SearchTimeout) as exc:
        search.run()

    assert search.state == INTERRUPTED
    assert exc.value.stats["rows_tried"] == 0
    assert search.depth == 0
    assert np.array_equal(before, m.snapshot()), "Timeout must unwind every cover"


def test_empty_matrix_has_empty_solution():
    search = AlgorithmX(DancingMatrix(0, []))
    assert search.run() == [()]


# ==============================================================================
# Committed Rows
# ==============================================================================

def test_committed_row_leads_solution():
    m = make_knuth_matrix()
    m.select_row(3)
    search = AlgorithmX(m)
    search.run()

    assert search.solution[0] == 3, "Committed rows come first"
    assert sorted(search.solution) == [1, 3, 5]
    assert m.partial_solution == [3], "Search must not consume committed rows"


def test_committed_rows_complete_cover():
    m = make_small_matrix()
    m.select_row(2)
    m.select_row(3)
    search = AlgorithmX(m, record_trace=True)
    assert search.run() == [(2, 3)]
    assert search.trace == [], "Nothing left to try"


def test_reset_then_commit_other_row():
    m = make_small_matrix()
    before = m.snapshot()
    m.select_row(0)
    m.select_row(1)
    m.reset()
    m.select_row(2)
    search = AlgorithmX(m)
    assert search.run() == [(2, 3)]
    m.reset()
    assert np.array_equal(before, m.snapshot())


# ==============================================================================
# Main
# ==============================================================================

def run_all_tests():
    tests = [(name, fn) for name, fn in globals().items() if name.startswith("test_") and callable(fn)]
    for name, fn in tests:
        fn()
        print(f"✓ {name} passed")
    print(f"\nAll {len(tests)} tests passed")


if __name__ == "__main__":
    run_all_tests()
