"""Graph-search procedures for the modified N-Queens problem.

This module implements three graph searches over the state space defined by
``nqueens_search.problem.ModifiedNQueens`` and provides these entry points:

- bfs_search(problem): breadth-first search with a FIFO frontier; states are
    marked visited when they are generated.
- ucs_search(problem): uniform-cost search with a binary heap ordered by path
    cost g; states are marked visited when they are popped (lazy deletion).
- astar_search(problem): A* with a binary heap ordered by f = g + h, where h is
    the conflict heuristic; visited at pop time, and successors already
    visited are not pushed at all.

All functions are non-recursive and return a ``SearchResult``.

Implementation overview
-----------------------
- Frontier: ``collections.deque`` for BFS, ``heapq`` lists for UCS and A*.
    Heap entries carry an insertion counter right after the priority so that
    ties are resolved in insertion order and states are never compared.
- Visited set: canonical keys from ``nqueens_search.utils.state_key``. Keys
    depend on queen identity, not only on the occupied cells.
- Step cost: every move costs 1.

Contract (public API)
---------------------
- Input: a problem object exposing ``initial_state``, ``is_goal``,
    ``actions``, ``result`` and ``heuristic``.
- Output: ``SearchResult`` where
    - ``solution`` is the goal state, or ``None`` when the frontier empties.
    - ``nodes_expanded`` counts states that were goal-tested.
    - ``frontier_size`` is the frontier length when the goal is found, 0 on
      failure.
    - ``elapsed`` is wall-clock time measured via ``perf_counter()``.
- Determinism: results are deterministic for equal inputs.

Statistics quirk
----------------
UCS pushes every successor and filters stale entries when popping, while A*
additionally refuses to push successors that were already expanded. The
difference shows up in ``frontier_size``; it is kept so that the reported
statistics stay comparable with earlier runs.
"""

from __future__ import annotations

import heapq
from collections import deque
from dataclasses import dataclass
from itertools import count
from time import perf_counter
from typing import Callable, Deque, Dict, List, Optional, Set, Tuple

from .problem import ModifiedNQueens
from .utils import State, state_key

SEARCH_ALGORITHMS: Tuple[str, ...] = ("BFS", "UCS", "ASTAR")


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search invocation."""

    solution: Optional[State]
    nodes_expanded: int
    frontier_size: int
    success: bool
    algorithm: str = ""
    elapsed: float = 0.0


def bfs_search(problem: ModifiedNQueens) -> SearchResult:
    """Breadth-first search with mark-on-generation duplicate detection.

    The initial state is marked visited before the loop starts, and every
    successor is marked when it is enqueued, so each state enters the queue
    at most once. With unit move costs the goal is found at minimum depth.
    """
    start = perf_counter()
    initial = problem.initial_state()
    frontier: Deque[State] = deque([initial])
    visited: Set[State] = {state_key(initial)}
    expanded = 0

    while frontier:
        state = frontier.popleft()
        expanded += 1

        if problem.is_goal(state):
            return SearchResult(state, expanded, len(frontier), True, "BFS", perf_counter() - start)

        for action in problem.actions(state):
            successor = problem.result(state, action)
            key = state_key(successor)
            if key not in visited:
                visited.add(key)
                frontier.append(successor)

    return SearchResult(None, expanded, 0, False, "BFS", perf_counter() - start)


def ucs_search(problem: ModifiedNQueens) -> SearchResult:
    """Uniform-cost search with lazy deletion of stale heap entries.

    A state may be pushed several times; only the first pop of its key is
    expanded, later pops are discarded without being counted.
    """
    start = perf_counter()
    tie = count()
    frontier: List[Tuple[int, int, State]] = [(0, next(tie), problem.initial_state())]
    visited: Set[State] = set()
    expanded = 0

    while frontier:
        cost, _, state = heapq.heappop(frontier)
        key = state_key(state)
        if key in visited:
            continue
        visited.add(key)
        expanded += 1

        if problem.is_goal(state):
            return SearchResult(state, expanded, len(frontier), True, "UCS", perf_counter() - start)

        for action in problem.actions(state):
            successor = problem.result(state, action)
            heapq.heappush(frontier, (cost + 1, next(tie), successor))

    return SearchResult(None, expanded, 0, False, "UCS", perf_counter() - start)


def astar_search(problem: ModifiedNQueens) -> SearchResult:
    """A* search ordered by f = g + h with the conflict-count heuristic.

    Successors whose key is already expanded are filtered before pushing;
    duplicates that are still waiting in the heap are removed lazily on pop.
    """
    start = perf_counter()
    tie = count()
    initial = problem.initial_state()
    frontier: List[Tuple[int, int, int, State]] = [(problem.heuristic(initial), next(tie), 0, initial)]
    visited: Set[State] = set()
    expanded = 0

    while frontier:
        _, _, cost, state = heapq.heappop(frontier)
        key = state_key(state)
        if key in visited:
            continue
        visited.add(key)
        expanded += 1

        if problem.is_goal(state):
            return SearchResult(state, expanded, len(frontier), True, "ASTAR", perf_counter() - start)

        for action in problem.actions(state):
            successor = problem.result(state, action)
            if state_key(successor) in visited:
                continue
            g_new = cost + 1
            f_new = g_new + problem.heuristic(successor)
            heapq.heappush(frontier, (f_new, next(tie), g_new, successor))

    return SearchResult(None, expanded, 0, False, "ASTAR", perf_counter() - start)


def get_search_function(name: str) -> Callable[[ModifiedNQueens], SearchResult]:
    """Return a search procedure by label.

    Parameters
    ----------
    name : str
        One of "BFS", "UCS", "ASTAR" (case-insensitive; "A*" is accepted).

    Returns
    -------
    Callable[[ModifiedNQueens], SearchResult]
        The corresponding search function.
    """
    mapping: Dict[str, Callable[[ModifiedNQueens], SearchResult]] = {
        "BFS": bfs_search,
        "UCS": ucs_search,
        "ASTAR": astar_search,
        "A*": astar_search,
    }
    try:
        return mapping[name.strip().upper()]
    except KeyError as exc:
        raise ValueError(f"Unknown search algorithm: {name}. Allowed: BFS, UCS, ASTAR") from exc


def solve(size: int, algorithm: str = "BFS") -> SearchResult:
    """Build a ``size`` x ``size`` problem and run ``algorithm`` on it."""
    problem = ModifiedNQueens(size)
    return get_search_function(algorithm)(problem)
