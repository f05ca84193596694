#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DLX Solver - Algorithm X
=========================

Depth-first backtracking over a DancingMatrix:

1. No live column left       → success, hand the solution to the policy
2. Pick the smallest column  → size 0 means a dead end, backtrack
3. Try each row of it in ring order: cover the row's other columns,
   push its tag, descend; on return pop and uncover right-to-left
4. Rows exhausted            → uncover the column, backtrack one level

Recursion is reified as an explicit stack of SearchFrame, so depth is bounded
by memory rather than the interpreter's recursion limit. Whatever the outcome,
the frames are unwound before returning and the matrix ends up exactly as it
was handed in.
"""

import time
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Tuple

from .errors import Exhausted, IncompleteSolution, SearchTimeout
from .matrix import DancingMatrix
from .types import Tag

# Search states
SEARCHING = "searching"
DONE = "done"
EXHAUSTED = "exhausted"
INTERRUPTED = "interrupted"

Solution = Tuple[Tag, ...]


# =============================================================================
# Continuation Policies
# =============================================================================

class SearchPolicy:
    """
    Decides what happens when an exact cover is found.

    on_solution() records the solution and returns True to stop the search,
    False to treat the success as a failed branch and keep going. Each
    AlgorithmX.run() starts by calling reset(), so one policy object can be
    handed to several searches.
    """
    name = "policy"

    def __init__(self):
        self.solutions: List[Solution] = []

    def reset(self):
        self.solutions = []

    def on_solution(self, solution: Solution) -> bool:
        self.solutions.append(solution)
        return self.should_stop()

    def should_stop(self) -> bool:
        raise NotImplementedError("Subclass must implement should_stop()")


class FirstSolution(SearchPolicy):
    """Stop at the first exact cover (default)."""
    name = "first"

    def should_stop(self) -> bool:
        return True


class AllSolutions(SearchPolicy):
    """Enumerate every exact cover."""
    name = "all"

    def should_stop(self) -> bool:
        return False


class SolutionLimit(SearchPolicy):
    """Stop once `limit` exact covers have been found."""
    name = "limit"

    def __init__(self, limit: int):
        super().__init__()
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")
        self.limit = limit

    def should_stop(self) -> bool:
        return len(self.solutions) >= self.limit


# =============================================================================
# Search State
# =============================================================================

@dataclass
class SearchFrame:
    """One level of the search: chosen column and the row currently applied."""
    column: int
    row: int      # == column while no row of the column is applied


@dataclass
class SearchStats:
    """Counters for one run."""
    rows_tried: int = 0
    backtracks: int = 0
    dead_ends: int = 0
    max_depth: int = 0
    solutions: int = 0
    elapsed_ms: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


class AlgorithmX:
    """
    Knuth's Algorithm X over a DancingMatrix.

    Usage:
        search = AlgorithmX(matrix)              # first solution
        search = AlgorithmX(matrix, AllSolutions())
        solutions = search.run()                 # raises Exhausted if none
        AlgorithmX(matrix, record_trace=True)    # also keep every row tried

    Rows committed with matrix.select_row() before run() appear first in
    every solution.
    """

    def __init__(self,
                 matrix: DancingMatrix,
                 policy: Optional[SearchPolicy] = None,
                 *,
                 timeout_s: Optional[float] = None,
                 record_trace: bool = False):
        self.matrix = matrix
        self.policy = policy if policy is not None else FirstSolution()
        self.timeout_s = timeout_s
        self.record_trace = record_trace
        self.state = SEARCHING
        self.stats = SearchStats()
        self.trace: List[Tag] = []        # every row attempted, only with record_trace
        self._stack: List[SearchFrame] = []
        self._solution: List[Tag] = []
        self._deadline: Optional[float] = None

    @property
    def solutions(self) -> List[Solution]:
        return self.policy.solutions

    @property
    def solution(self) -> Solution:
        """First solution found. Raises IncompleteSolution unless state is DONE."""
        if self.state != DONE or not self.solutions:
            raise IncompleteSolution(f"No solution available (search state: {self.state})")
        return self.solutions[0]

    @property
    def depth(self) -> int:
        return len(self._stack)

    # =========================================================================
    # Driver
    # =========================================================================

    def run(self) -> List[Solution]:
        """
        Search until the policy stops it or the tree is exhausted.

        Returns:
            Solutions found, each a tuple of row tags (committed rows first)

        Raises:
            Exhausted: no exact cover exists
            SearchTimeout: timeout_s elapsed (checked between row attempts)
        """
        if self.state != SEARCHING:
            raise RuntimeError(f"Search already ran (state: {self.state}); build a new AlgorithmX")

        t_start = time.time()
        if self.timeout_s is not None:
            self._deadline = t_start + self.timeout_s
        self.policy.reset()
        self._solution = list(self.matrix.partial_solution)

        try:
            while True:
                if self._expand():
                    break
                if not self._advance():
                    break
        except SearchTimeout:
            self.state = INTERRUPTED
            raise
        finally:
            self._unwind()
            self.stats.elapsed_ms = int((time.time() - t_start) * 1000)

        self.state = DONE if self.stats.solutions else EXHAUSTED
        if self.state == EXHAUSTED:
            raise Exhausted(self.stats.to_dict())
        return self.solutions

    def _expand(self) -> bool:
        """
        Visit the current search node. Returns True if the policy asks to stop.
        """
        m = self.matrix
        if m.is_empty():
            self.stats.solutions += 1
            return self.policy.on_solution(tuple(self._solution))

        c = m.choose_column()
        if m.size(c) == 0:
            # Live constraint no remaining row can satisfy
            self.stats.dead_ends += 1
            return False

        m.cover(c)
        self._stack.append(SearchFrame(column=c, row=c))
        self.stats.max_depth = max(self.stats.max_depth, len(self._stack))
        return False

    def _advance(self) -> bool:
        """
        Move to the next untried row, backtracking through exhausted frames.
        Returns False once the whole tree has been explored.
        """
        m = self.matrix
        while self._stack:
            frame = self._stack[-1]
            if frame.row != frame.column:
                self._undo_row(frame.row)

            nxt = m.down[frame.row]
            if nxt == frame.column:
                m.uncover(frame.column)
                self._stack.pop()
                self.stats.backtracks += 1
                continue

            # Safe point: no cover/uncover pair is in flight here
            frame.row = frame.column
            self._check_deadline()
            frame.row = nxt
            self._apply_row(nxt)
            return True
        return False

    def _apply_row(self, r: int):
        m = self.matrix
        for j in list(m.iter_row(r))[1:]:
            m.cover(m.col[j])
        tag = m.row_tag(r)
        self._solution.append(tag)
        if self.record_trace:
            self.trace.append(tag)
        self.stats.rows_tried += 1

    def _undo_row(self, r: int):
        m = self.matrix
        self._solution.pop()
        j = m.left[r]
        while j != r:
            m.uncover(m.col[j])
            j = m.left[j]

    def _unwind(self):
        """Pop every frame, restoring the matrix to its pre-search state."""
        while self._stack:
            frame = self._stack.pop()
            if frame.row != frame.column:
                self._undo_row(frame.row)
            self.matrix.uncover(frame.column)

    def _check_deadline(self):
        if self._deadline is not None and time.time() >= self._deadline:
            raise SearchTimeout(self.timeout_s, self.stats.to_dict())


# =============================================================================
# Convenience
# =============================================================================

def make_policy(find_all: bool = False, limit: Optional[int] = None) -> SearchPolicy:
    """Pick a continuation policy from flags."""
    if limit is not None:
        return SolutionLimit(limit)
    return AllSolutions() if find_all else FirstSolution()


def solve_exact_cover(matrix: DancingMatrix,
                      *,
                      find_all: bool = False,
                      limit: Optional[int] = None,
                      timeout_s: Optional[float] = None) -> Tuple[List[Solution], Dict]:
    """
    Run Algorithm X on a matrix.

    Returns:
        (solutions, stats) - raises Exhausted when there is none
    """
    search = AlgorithmX(matrix, make_policy(find_all, limit), timeout_s=timeout_s)
    solutions = search.run()
    return solutions, search.stats.to_dict()
