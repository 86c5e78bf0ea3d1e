"""Utility helpers for the modified N-Queens search project.

This module provides reusable, low-level primitives that the problem model and
the search engine depend upon. In particular, it includes two implementations
to count the number of conflicting queen pairs in a given configuration.

Representation
--------------
States are encoded as a tuple of ``(row, col)`` pairs, one per queen, where
the position in the tuple is the queen's identity. Unlike the classic
``board[col] = row`` encoding, two queens may share a column (or even a cell),
so every kind of conflict has to be counted explicitly.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence, Tuple

Position = Tuple[int, int]
State = Tuple[Position, ...]


def conflicts(state: Sequence[Position]) -> int:
    """Compute the number of conflicting (unordered) queen pairs in O(N).

    Uses hash maps to count occupancy per row, column and both diagonals.
    Two distinct cells can share at most one of these lines, so summing the
    per-line pair counts is exact for queens on distinct cells. Queens stacked
    on the same cell share all four lines; the surplus is subtracted so that
    such a pair still counts once, as in ``conflicts_on2``.
    """
    row_count: Counter[int] = Counter()
    col_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()
    cells: Counter[Position] = Counter()

    for row, col in state:
        row_count[row] += 1
        col_count[col] += 1
        diag1[row - col] += 1
        diag2[row + col] += 1
        cells[(row, col)] += 1

    def _pairs(counter: Counter) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    stacked = _pairs(cells)
    return _pairs(row_count) + _pairs(col_count) + _pairs(diag1) + _pairs(diag2) - 3 * stacked


def conflicts_on2(state: Sequence[Position]) -> int:
    """Compute the number of conflicting queen pairs in O(N^2).

    Reference implementation for validation and benchmarking. Prefer
    ``conflicts`` in performance-sensitive contexts.
    """
    n = len(state)
    conflicts_count = 0
    for i in range(n):
        r1, c1 = state[i]
        for j in range(i + 1, n):
            r2, c2 = state[j]
            if r1 == r2 or c1 == c2 or abs(r1 - r2) == abs(c1 - c2):
                conflicts_count += 1
    return conflicts_count


def state_key(state: Sequence[Position]) -> State:
    """Return the canonical visited-set key for ``state``.

    The key is the ordered tuple of ``(row, col)`` pairs in queen-index order,
    so two states are the same only when every queen sits on the same cell.
    Permuting queens among the same cells yields a different key.
    """
    return tuple((row, col) for row, col in state)


def state_to_string(state: Sequence[Position]) -> str:
    """Encode ``state`` as ``"row,col;"`` per queen (e.g. ``"0,0;1,2;"``)."""
    return "".join(f"{row},{col};" for row, col in state)


def state_from_string(encoded: str) -> State:
    """Inverse of ``state_to_string``. Raises ValueError on malformed input."""
    state = []
    for cell in encoded.split(";"):
        if not cell:
            continue
        row, col = cell.split(",")
        state.append((int(row), int(col)))
    return tuple(state)


def is_valid_solution(state: Sequence[Position], size: int) -> bool:
    """Return True if ``state`` is a goal configuration for an N x N board.

    Contract
    - Input: sequence of ``size`` pairs ``(row, col)`` (0-based indices)
    - Valid if: all coordinates in range, exactly one queen per row and no
      pairs of queens attacking each other
    """
    if size <= 0 or len(state) != size:
        return False
    for row, col in state:
        if not isinstance(row, int) or not isinstance(col, int):
            return False
        if not (0 <= row < size and 0 <= col < size):
            return False
    rows = Counter(row for row, _ in state)
    if any(rows[row] != 1 for row in range(size)):
        return False
    return conflicts(state) == 0


def render_board(state: Sequence[Position], size: int) -> str:
    """Render ``state`` as a ``size`` x ``size`` grid of ``Q`` and ``.`` cells."""
    grid = [["."] * size for _ in range(size)]
    for row, col in state:
        grid[row][col] = "Q"
    return "\n".join(" ".join(line) for line in grid)
