"""
Structural tests for the Dancing Links matrix.

Properties:
1. Construction: header ring, column rings and row rings in insertion order
2. Reversibility: uncover(cover(c)) restores every link bit-for-bit
3. Column choice: minimum size, ties to the first column in ring order
4. Row selection: bounds and liveness checks, exact reset
"""

import numpy as np
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from dlx_solver.core.matrix import DancingMatrix, ROOT
from dlx_solver.core.errors import RowIndexError, InvalidRowError, DancingLinksError


# ==============================================================================
# Helper Functions
# ==============================================================================

def make_small_matrix() -> DancingMatrix:
    """
    Universe {1,2,3,4} as columns 0..3:
    R1={1,2}, R2={3,4}, R3={1,3}, R4={2,4}
    """
    return DancingMatrix(4, [[0, 1], [2, 3], [0, 2], [1, 3]])


def column_rows(m: DancingMatrix, header: int):
    return [m.row_index(i) for i in m.iter_column(header)]


# ==============================================================================
# Construction
# ==============================================================================

def test_header_ring_in_column_order():
    m = make_small_matrix()
    assert m.live_columns() == [1, 2, 3, 4], f"Unexpected ring {m.live_columns()}"
    assert m.left[ROOT] == 4 and m.right[ROOT] == 1, "Root must close the header ring"
    assert m.num_columns == 4 and m.num_rows == 4 and m.num_nodes == 8


def test_column_rings_in_row_order():
    m = make_small_matrix()
    assert column_rows(m, m.header(0)) == [0, 2]
    assert column_rows(m, m.header(1)) == [0, 3]
    assert column_rows(m, m.header(2)) == [1, 2]
    assert column_rows(m, m.header(3)) == [1, 3]
    assert [m.size(h) for h in m.live_columns()] == [2, 2, 2, 2]


def test_row_ring_follows_listed_columns():
    m = DancingMatrix(3, [[2, 0, 1]])
    head = m.row_heads[0]
    cols = [m.column_name(m.col[j]) for j in m.iter_row(head)]
    assert cols == ["2", "0", "1"], f"Row ring out of order: {cols}"
    assert m.left[head] == list(m.iter_row(head))[-1], "Row ring must be circular"


def test_tags_and_names():
    m = DancingMatrix(2, [[0], [1]], tags=["a", "b"], names=["x", "y"])
    assert m.row_tag(m.row_heads[1]) == "b"
    assert m.column_name(m.header(0)) == "x"


def test_empty_column_is_self_linked():
    m = DancingMatrix(2, [[0]])
    h = m.header(1)
    assert m.up[h] == h and m.down[h] == h and m.size(h) == 0


def test_malformed_rows_rejected():
    with pytest.raises(ValueError):
        DancingMatrix(2, [[0, 0]])
    with pytest.raises(ValueError):
        DancingMatrix(2, [[2]])
    with pytest.raises(ValueError):
        DancingMatrix(2, [[0]], tags=["a", "b"])
    with pytest.raises(ValueError):
        DancingMatrix(2, [[0]], names=["only-one"])


def test_from_constraints_matches_row_major():
    by_column = DancingMatrix.from_constraints([[0, 2], [0, 3], [1, 2], [1, 3]])
    by_row = make_small_matrix()
    assert by_column.num_rows == 4
    assert np.array_equal(by_column.snapshot(), by_row.snapshot()), \
        "Column-major and row-major input should build the same structure"


# ==============================================================================
# Cover / Uncover
# ==============================================================================

def test_cover_removes_column_and_clashing_rows():
    m = make_small_matrix()
    m.cover(m.header(0))

    assert m.live_columns() == [2, 3, 4]
    # R1 leaves column 1, R3 leaves column 2
    assert column_rows(m, m.header(1)) == [3]
    assert column_rows(m, m.header(2)) == [1]
    assert column_rows(m, m.header(3)) == [1, 3]
    assert [m.size(h) for h in m.live_columns()] == [1, 1, 2]
    # Nodes of the covered column itself stay linked
    assert column_rows(m, m.header(0)) == [0, 2]


def test_cover_uncover_is_exact_for_every_column():
    m = make_small_matrix()
    for h in range(1, m.num_columns + 1):
        before = m.snapshot()
        m.cover(h)
        assert not np.array_equal(before, m.snapshot()), f"cover({h}) changed nothing"
        m.uncover(h)
        assert np.array_equal(before, m.snapshot()), f"uncover({h}) did not restore links"


def test_nested_cover_uncover_is_exact():
    m = DancingMatrix.from_constraints([
        [0, 1], [4, 5], [3, 4], [0, 1, 2], [2, 3], [3, 4], [0, 2, 4, 5],
    ])
    before = m.snapshot()
    order = [1, 4, 7]
    for h in order:
        m.cover(h)
    for h in reversed(order):
        m.uncover(h)
    assert np.array_equal(before, m.snapshot()), "Nested cover/uncover must restore every link"


def test_cover_everything_empties_ring():
    m = make_small_matrix()
    before = m.snapshot()
    for h in [1, 2, 3, 4]:
        m.cover(h)
    assert m.is_empty()
    assert m.choose_column() is None, "Only the root left means every constraint is satisfied"
    for h in [4, 3, 2, 1]:
        m.uncover(h)
    assert np.array_equal(before, m.snapshot())


# ==============================================================================
# Column Choice
# ==============================================================================

def test_choose_column_ties_break_by_ring_order():
    m = make_small_matrix()
    assert m.choose_column() == 1, "All sizes equal: first column in ring order"
    m.cover(1)
    assert m.choose_column() == 2, f"Expected header 2, got {m.choose_column()}"


def test_choose_column_prefers_smallest():
    m = DancingMatrix(3, [[0, 1], [0, 2], [0], [1]])
    # sizes: col0=3, col1=2, col2=1
    assert m.choose_column() == m.header(2)


def test_choose_column_reports_empty_column():
    m = DancingMatrix(2, [[0]])
    h = m.choose_column()
    assert h == m.header(1) and m.size(h) == 0


# ==============================================================================
# Row Selection
# ==============================================================================

def test_select_row_out_of_bounds():
    m = make_small_matrix()
    with pytest.raises(RowIndexError):
        m.select_row(4)
    with pytest.raises(IndexError):
        m.select_row(-1)


def test_select_row_clash_rejected():
    m = make_small_matrix()
    m.select_row(0)
    assert m.partial_solution == [0]
    with pytest.raises(InvalidRowError):
        m.select_row(2)      # shares column 0 with R1
    with pytest.raises(DancingLinksError):
        m.select_row(0)      # already taken


def test_select_empty_row_rejected():
    m = DancingMatrix(2, [[0], []])
    with pytest.raises(InvalidRowError):
        m.select_row(1)


def test_select_row_covers_its_columns():
    m = make_small_matrix()
    m.select_row(0)
    assert m.live_columns() == [3, 4]
    assert column_rows(m, 3) == [1] and column_rows(m, 4) == [1]
    m.select_row(1)
    assert m.is_empty() and m.partial_solution == [0, 1]


def test_reset_restores_structure():
    m = make_small_matrix()
    before = m.snapshot()
    m.select_row(2)
    m.select_row(3)
    m.reset()
    assert m.partial_solution == []
    assert np.array_equal(before, m.snapshot()), "reset() must undo every selection exactly"


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
