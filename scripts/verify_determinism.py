#!/usr/bin/env python3
"""
Determinism verification for the exact-cover engine.

Tests:
1. Same puzzle → same row trace and same grid across runs on one matrix
2. Matrix left bit-for-bit unchanged by every run
3. Fresh matrices built from the same puzzle → same trace

Usage:
    PYTHONPATH=src python scripts/verify_determinism.py
"""

import sys
import os
import numpy as np

# Add src to path if not already there
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from dlx_solver import G, AlgorithmX, build_matrix, extract_grid, format_grid

PUZZLE = "415830090003009104002150006900783000200000381500012400004900063380500040009307500"
RUNS = 10


def puzzle_grid():
    return G([[int(ch) for ch in PUZZLE[r * 9:(r + 1) * 9]] for r in range(9)])


def test_same_matrix():
    """Test: Repeated searches on one matrix agree and leave it untouched."""
    print("Test 1: Repeated search on one matrix")

    sm = build_matrix(puzzle_grid())
    before = sm.matrix.snapshot()

    traces, grids = [], []
    for i in range(RUNS):
        search = AlgorithmX(sm.matrix, record_trace=True)
        search.run()
        traces.append(list(search.trace))
        grids.append(extract_grid(search, sm.size))

    same_trace = all(t == traces[0] for t in traces)
    same_grid = all(np.array_equal(grids[0], g) for g in grids)
    restored = np.array_equal(before, sm.matrix.snapshot())

    print(f"  {RUNS} runs trace: {'PASS - identical' if same_trace else 'FAIL - different'}")
    print(f"  {RUNS} runs grid:  {'PASS - identical' if same_grid else 'FAIL - different'}")
    print(f"  matrix restored: {'PASS' if restored else 'FAIL'}")
    if same_grid:
        print(format_grid(grids[0]))
    return same_trace and same_grid and restored


def test_fresh_matrices():
    """Test: Independently built matrices give the same trace."""
    print("\nTest 2: Fresh matrix per run")

    traces = []
    for i in range(RUNS):
        search = AlgorithmX(build_matrix(puzzle_grid()).matrix, record_trace=True)
        search.run()
        traces.append(list(search.trace))

    same = all(t == traces[0] for t in traces)
    print(f"  {RUNS} runs: {'PASS - identical' if same else 'FAIL - different'}")
    print(f"  rows tried per run: {len(traces[0])}")
    return same


def main():
    results = [test_same_matrix(), test_fresh_matrices()]
    print("\n" + ("ALL PASS" if all(results) else "FAILURES"))
    sys.exit(0 if all(results) else 1)


if __name__ == "__main__":
    main()
