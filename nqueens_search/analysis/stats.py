"""Typed result shapes and statistics helpers for the analysis pipeline.

Defines ``TypedDict`` structures for experiment outputs and provides utilities
to compute aggregate statistics across repeated search runs.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, TypedDict

import numpy as np


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class SearchRecord(TypedDict):
    algorithm: str
    n: int
    success: bool
    nodes_expanded: int
    frontier_size: int
    time: float
    solution: str


class SearchResultEntry(TypedDict, total=False):
    success: bool
    nodes_expanded: int
    frontier_size: int
    solution: str
    total_runs: int
    deterministic: bool
    all_time: StatsSummary
    all_nodes_expanded: StatsSummary
    all_frontier_size: StatsSummary
    raw_runs: List[SearchRecord]


# algorithm label -> N -> aggregated entry
ExperimentResults = Dict[str, Dict[int, SearchResultEntry]]

_METRICS = ("time", "nodes_expanded", "frontier_size")


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, 25th/75th
    percentiles and range. On empty input every numeric field is ``None`` and
    ``count`` is 0, which keeps CSV columns stable.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    arr = np.asarray(values, dtype=float)
    q25, q75 = np.percentile(arr, [25, 75])
    return {
        "count": int(arr.size),
        "mean": float(arr.mean()),
        "median": float(np.median(arr)),
        "std": float(arr.std()) if arr.size > 1 else 0.0,
        "min": float(arr.min()),
        "max": float(arr.max()),
        "q25": float(q25),
        "q75": float(q75),
        "range": float(arr.max() - arr.min()),
    }


def summarize_runs(runs: List[SearchRecord]) -> SearchResultEntry:
    """Aggregate repeated runs of one algorithm at one board size.

    Search statistics are deterministic, so the first run provides the
    reported ``nodes_expanded``, ``frontier_size`` and ``solution``;
    ``deterministic`` tells whether every run agreed with it.
    """
    if not runs:
        return {"success": False, "nodes_expanded": 0, "frontier_size": 0, "solution": "", "total_runs": 0,
                "deterministic": True, "raw_runs": []}

    first = runs[0]
    deterministic = all(
        (r["success"], r["nodes_expanded"], r["frontier_size"], r["solution"])
        == (first["success"], first["nodes_expanded"], first["frontier_size"], first["solution"])
        for r in runs
    )
    entry: Dict[str, Any] = {
        "success": first["success"],
        "nodes_expanded": first["nodes_expanded"],
        "frontier_size": first["frontier_size"],
        "solution": first["solution"],
        "total_runs": len(runs),
        "deterministic": deterministic,
    }
    for metric in _METRICS:
        entry[f"all_{metric}"] = compute_detailed_statistics([float(r[metric]) for r in runs])
    entry["raw_runs"] = list(runs)
    return entry  # type: ignore[return-value]
