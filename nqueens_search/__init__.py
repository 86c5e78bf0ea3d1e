"""Modified N-Queens problem model and search algorithms."""

from .problem import DIRECTIONS, Action, ModifiedNQueens
from .search import (
    SEARCH_ALGORITHMS,
    SearchResult,
    astar_search,
    bfs_search,
    get_search_function,
    solve,
    ucs_search,
)
from .utils import conflicts, conflicts_on2, is_valid_solution, state_key, state_to_string

__all__ = [
    "ModifiedNQueens",
    "Action",
    "DIRECTIONS",
    "SearchResult",
    "SEARCH_ALGORITHMS",
    "bfs_search",
    "ucs_search",
    "astar_search",
    "get_search_function",
    "solve",
    "conflicts",
    "conflicts_on2",
    "is_valid_solution",
    "state_key",
    "state_to_string",
]
