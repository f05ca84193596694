#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
DLX Solver - Dancing Links Matrix
==================================

Toroidal sparse 0/1 matrix for exact cover, stored as an arena of nodes
addressed by integer index:

- index 0            : root header (anchors the header ring, never a constraint)
- 1 .. num_columns   : column headers (one per constraint)
- num_columns+1 ..   : row nodes, one per 1-entry of the matrix

Each node has four links (left, right, up, down) held in parallel lists, plus
its column header and its row index. Column headers also carry a live-node
count. Links are indices, so cover/uncover are O(1) splices on lists of ints
and nothing is ever deallocated during the search.

Columns are addressed by their header index throughout (column i of the
input is header i + 1).
"""

import numpy as np
from typing import Iterator, List, Optional, Sequence

from .errors import RowIndexError, InvalidRowError
from .types import Tag

ROOT = 0


class DancingMatrix:
    """
    Exact-cover matrix with Dancing Links cover/uncover.

    Rows are inserted at the bottom of each column ring in input order, and a
    row's nodes are linked left-to-right in the order its columns are listed.
    Together with the fixed header order this makes every traversal, and so
    every search, deterministic.
    """

    def __init__(self,
                 num_columns: int,
                 rows: Sequence[Sequence[int]],
                 tags: Optional[Sequence[Tag]] = None,
                 names: Optional[Sequence[str]] = None):
        """
        Build the structure.

        Args:
            num_columns: Number of constraints (columns)
            rows: For each row, the column indices (0-based) it covers
            tags: Opaque identity per row (default: the row index)
            names: Printable name per column (default: its index)
        """
        if num_columns < 0:
            raise ValueError(f"num_columns must be >= 0, got {num_columns}")
        rows = [list(r) for r in rows]
        if tags is None:
            tags = list(range(len(rows)))
        elif len(tags) != len(rows):
            raise ValueError(f"Got {len(tags)} tags for {len(rows)} rows")
        if names is None:
            names = [str(i) for i in range(num_columns)]
        elif len(names) != num_columns:
            raise ValueError(f"Got {len(names)} names for {num_columns} columns")

        self.num_columns = num_columns
        self.tags: List[Tag] = list(tags)
        self.names: List[str] = list(names)

        # Headers: circular left/right ring, each vertically self-linked
        n = num_columns + 1
        self.left = [(i - 1) % n for i in range(n)]
        self.right = [(i + 1) % n for i in range(n)]
        self.up = list(range(n))
        self.down = list(range(n))
        self.col = list(range(n))
        self.row = [-1] * n
        self.sizes = [0] * n

        # First node of each row (-1 for rows with no columns)
        self.row_heads: List[int] = [self._append_row(r, cols) for r, cols in enumerate(rows)]

        # Rows committed with select_row, bottom of the solution stack
        self.partial_solution: List[Tag] = []
        self._selected: List[List[int]] = []

    @classmethod
    def from_constraints(cls,
                         constraints: Sequence[Sequence[int]],
                         tags: Optional[Sequence[Tag]] = None,
                         names: Optional[Sequence[str]] = None) -> 'DancingMatrix':
        """
        Build from column-major input: constraints[j] lists the rows that
        satisfy constraint j. The number of rows is max(row index) + 1.
        """
        constraints = [list(c) for c in constraints]
        num_rows = max((max(c) for c in constraints if c), default=-1) + 1
        rows: List[List[int]] = [[] for _ in range(num_rows)]
        for j, members in enumerate(constraints):
            for r in members:
                if r < 0:
                    raise ValueError(f"Constraint {j} lists negative row {r}")
                rows[r].append(j)
        return cls(len(constraints), rows, tags=tags, names=names)

    def _append_row(self, r: int, cols: List[int]) -> int:
        """Link a new row below every column it covers. Returns its first node."""
        if len(set(cols)) != len(cols):
            raise ValueError(f"Row {r} lists a column twice: {cols}")
        for c in cols:
            if not 0 <= c < self.num_columns:
                raise ValueError(f"Row {r} references column {c}, matrix has {self.num_columns}")

        first = -1
        for c in cols:
            h = c + 1
            x = len(self.left)

            # Vertical: insert just above the header (bottom of the ring)
            self.up.append(self.up[h])
            self.down.append(h)
            self.down[self.up[h]] = x
            self.up[h] = x
            self.col.append(h)
            self.row.append(r)
            self.sizes[h] += 1

            # Horizontal: insert to the left of the first node (end of the ring)
            if first < 0:
                self.left.append(x)
                self.right.append(x)
                first = x
            else:
                last = self.left[first]
                self.left.append(last)
                self.right.append(first)
                self.right[last] = x
                self.left[first] = x
        return first

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def num_rows(self) -> int:
        return len(self.tags)

    @property
    def num_nodes(self) -> int:
        """Row nodes only (headers excluded)."""
        return len(self.left) - self.num_columns - 1

    def header(self, column: int) -> int:
        """Header index of 0-based input column `column`."""
        return column + 1

    def size(self, header: int) -> int:
        return self.sizes[header]

    def column_name(self, header: int) -> str:
        return self.names[header - 1]

    def row_tag(self, node: int) -> Tag:
        return self.tags[self.row[node]]

    def row_index(self, node: int) -> int:
        return self.row[node]

    def is_empty(self) -> bool:
        """True when every column is covered (only the root is left)."""
        return self.right[ROOT] == ROOT

    def live_columns(self) -> List[int]:
        """Headers currently in the header ring, in ring order."""
        out = []
        c = self.right[ROOT]
        while c != ROOT:
            out.append(c)
            c = self.right[c]
        return out

    def iter_column(self, header: int) -> Iterator[int]:
        """Live nodes of a column, top to bottom."""
        i = self.down[header]
        while i != header:
            yield i
            i = self.down[i]

    def iter_row(self, node: int) -> Iterator[int]:
        """Nodes of the row through `node`, starting with `node`, left to right."""
        yield node
        j = self.right[node]
        while j != node:
            yield j
            j = self.right[j]

    def snapshot(self) -> np.ndarray:
        """
        Every link and every column size as one flat array.

        Two snapshots are equal iff the structures are identical
        node-for-node, ring order included.
        """
        return np.concatenate([
            np.asarray(self.left, dtype=np.int64),
            np.asarray(self.right, dtype=np.int64),
            np.asarray(self.up, dtype=np.int64),
            np.asarray(self.down, dtype=np.int64),
            np.asarray(self.sizes, dtype=np.int64),
        ])

    # =========================================================================
    # Cover / Uncover
    # =========================================================================

    def cover(self, c: int):
        """
        Remove column c from the header ring, and every row that has a node
        in c from all of that row's other columns.
        """
        L, R, U, D, C, S = self.left, self.right, self.up, self.down, self.col, self.sizes
        R[L[c]] = R[c]
        L[R[c]] = L[c]
        i = D[c]
        while i != c:
            j = R[i]
            while j != i:
                D[U[j]] = D[j]
                U[D[j]] = U[j]
                S[C[j]] -= 1
                j = R[j]
            i = D[i]

    def uncover(self, c: int):
        """Exact inverse of cover(c): replays the removals bottom-to-top, right-to-left."""
        L, R, U, D, C, S = self.left, self.right, self.up, self.down, self.col, self.sizes
        i = U[c]
        while i != c:
            j = L[i]
            while j != i:
                S[C[j]] += 1
                D[U[j]] = j
                U[D[j]] = j
                j = L[j]
            i = U[i]
        R[L[c]] = c
        L[R[c]] = c

    def choose_column(self) -> Optional[int]:
        """
        Live column with the fewest live nodes (ties: first in ring order).
        Returns None when every constraint is satisfied.
        """
        R, S = self.right, self.sizes
        best = None
        best_size = 0
        c = R[ROOT]
        while c != ROOT:
            if best is None or S[c] < best_size:
                best = c
                best_size = S[c]
                if best_size == 0:
                    break
            c = R[c]
        return best

    # =========================================================================
    # Pre-selected rows
    # =========================================================================

    def _is_live(self, node: int) -> bool:
        """Row still selectable: every column live and every node still linked."""
        for j in self.iter_row(node):
            h = self.col[j]
            if self.right[self.left[h]] != h:
                return False
            if self.down[self.up[j]] != j:
                return False
        return True

    def select_row(self, r: int):
        """
        Commit row r to the solution before searching.

        Covers every column of the row, so rows that clash with it disappear
        from the structure, and pushes its tag onto partial_solution.

        Raises:
            RowIndexError: r is not a row of this matrix
            InvalidRowError: the row is empty, or clashes with a committed row
        """
        if not 0 <= r < self.num_rows:
            raise RowIndexError(r, self.num_rows)
        x = self.row_heads[r]
        if x < 0:
            raise InvalidRowError(r, "row covers no column")
        if not self._is_live(x):
            raise InvalidRowError(r, "row clashes with an already selected row")

        nodes = list(self.iter_row(x))
        for j in nodes:
            self.cover(self.col[j])
        self._selected.append(nodes)
        self.partial_solution.append(self.tags[r])

    def reset(self):
        """Undo every select_row, latest first."""
        while self._selected:
            nodes = self._selected.pop()
            for j in reversed(nodes):
                self.uncover(self.col[j])
        self.partial_solution.clear()

    def __repr__(self):
        return (f"DancingMatrix(columns={self.num_columns}, rows={self.num_rows}, "
                f"nodes={self.num_nodes}, live_columns={len(self.live_columns())})")
