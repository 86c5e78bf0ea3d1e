"""Problem model for the modified N-Queens puzzle.

The puzzle starts with N queens lined up on the top row and lets a single
queen slide one cell Up, Down, Left or Right per move. A configuration is a
goal when every row holds exactly one queen and no two queens attack each
other along a row, column or diagonal.

Contract (public API)
---------------------
- ``ModifiedNQueens(size)`` with ``size >= 1``; other values are rejected.
- ``initial_state()``, ``is_goal(state)``, ``actions(state)``,
  ``result(state, action)``, ``heuristic(state)`` define the state space used
  by ``nqueens_search.search``.
- ``render_state`` / ``print_state`` are presentation helpers only.

Determinism
-----------
``actions`` enumerates queens in index order and, for each queen, directions
in the fixed order U, D, L, R. Search procedures rely on this order for their
tie-breaking, so it must not change.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, NamedTuple, Sequence, Tuple

from .utils import Position, State, conflicts, render_board

DIRECTIONS: Tuple[str, ...] = ("U", "D", "L", "R")

_DELTAS: Dict[str, Tuple[int, int]] = {
    "U": (-1, 0),
    "D": (1, 0),
    "L": (0, -1),
    "R": (0, 1),
}


class Action(NamedTuple):
    """Move queen ``queen`` one cell in ``direction`` (one of U, D, L, R)."""

    queen: int
    direction: str


class ModifiedNQueens:
    """State space of the modified N-Queens puzzle on an N x N board.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 1). Fixed for the lifetime of the instance.

    Raises
    ------
    TypeError
        If ``size`` is not an integer.
    ValueError
        If ``size`` is not positive.
    """

    def __init__(self, size: int):
        if isinstance(size, bool) or not isinstance(size, int):
            raise TypeError(f"Board size must be an integer, got {type(size).__name__}")
        if size <= 0:
            raise ValueError(f"Board size must be a positive integer, got {size}")
        self._size = size

    @property
    def size(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return f"ModifiedNQueens(size={self._size})"

    def initial_state(self) -> State:
        """Return all queens on row 0, queen ``i`` in column ``i``."""
        return tuple((0, col) for col in range(self._size))

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._size and 0 <= col < self._size

    def _destination(self, position: Position, direction: str) -> Position:
        try:
            d_row, d_col = _DELTAS[direction]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {direction!r}. Allowed: U, D, L, R") from exc
        return position[0] + d_row, position[1] + d_col

    def is_goal(self, state: Sequence[Position]) -> bool:
        """Return True when each row holds exactly one queen and no queens conflict.

        Both conditions are checked. A duplicated row is itself a conflict, so
        a zero heuristic already implies distinct rows; the row count is kept
        as an explicit first check.
        """
        row_count = Counter(row for row, _ in state)
        for row in range(self._size):
            if row_count[row] != 1:
                return False
        return self.heuristic(state) == 0

    def actions(self, state: Sequence[Position]) -> List[Action]:
        """Enumerate legal single-step moves from ``state``.

        A move is legal when the destination is on the board and not occupied
        by any queen in ``state``. Order: queen 0..N-1, then U, D, L, R.
        """
        occupied = set(state)
        moves: List[Action] = []
        for queen, position in enumerate(state):
            for direction in DIRECTIONS:
                row, col = self._destination(position, direction)
                if not self.in_bounds(row, col):
                    continue
                if (row, col) in occupied:
                    continue
                moves.append(Action(queen, direction))
        return moves

    def result(self, state: Sequence[Position], action: Tuple[int, str]) -> State:
        """Apply ``action`` and return the successor state.

        The input is never modified. When the destination is off the board or
        already occupied, ``state`` is returned unchanged.
        """
        queen, direction = action
        row, col = self._destination(state[queen], direction)
        if not self.in_bounds(row, col) or (row, col) in state:
            return state if isinstance(state, tuple) else tuple(state)
        successor = list(state)
        successor[queen] = (row, col)
        return tuple(successor)

    def heuristic(self, state: Sequence[Position]) -> int:
        """Return the number of ordered conflicting queen pairs.

        Every attacking pair (row, column or diagonal) is counted once from
        each side, so the value is twice ``conflicts(state)`` and always even.
        """
        return 2 * conflicts(state)

    def render_state(self, state: Sequence[Position]) -> str:
        return render_board(state, self._size)

    def print_state(self, state: Sequence[Position]) -> None:
        """Print the board with ``Q`` on occupied cells and ``.`` elsewhere."""
        print(self.render_state(state))
