"""Experiment runners for BFS/UCS/A* (sequential and parallel).

These routines execute repeatable batches of searches for a set of board sizes
and algorithm labels. Outputs are structured dictionaries suitable for CSV
export and plotting. Validation hooks optionally check solution correctness,
run-to-run determinism and agreement with stored reference statistics.
"""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from . import settings
from .stats import ExperimentResults, ProgressPrinter, SearchRecord, summarize_runs
from nqueens_search.problem import ModifiedNQueens
from nqueens_search.search import get_search_function
from nqueens_search.utils import is_valid_solution, state_from_string, state_to_string


# Reusable workers -----------------------------------------------------------

def run_single_search(params: Tuple[str, int]) -> SearchRecord:
    """Worker wrapper to invoke a single search (for parallel mapping)."""
    algorithm, N = params
    problem = ModifiedNQueens(N)
    result = get_search_function(algorithm)(problem)
    return {
        "algorithm": algorithm,
        "n": N,
        "success": result.success,
        "nodes_expanded": result.nodes_expanded,
        "frontier_size": result.frontier_size,
        "time": result.elapsed,
        "solution": state_to_string(result.solution) if result.solution is not None else "",
    }


def _validate_runs(algorithm: str, N: int, runs: List[SearchRecord]) -> None:
    """Raise AssertionError when a run is inconsistent or invalid."""
    for idx, run in enumerate(runs):
        if run["success"]:
            if not is_valid_solution(state_from_string(run["solution"]), N):
                raise AssertionError(f"Invalid {algorithm} solution produced for N={N}, run {idx}: {run['solution']}")
        elif run["frontier_size"] != 0:
            raise AssertionError(
                f"{algorithm} validation failed for N={N}, run {idx}: failure with frontier_size={run['frontier_size']}"
            )
    entry = summarize_runs(runs)
    if not entry["deterministic"]:
        raise AssertionError(f"{algorithm} produced different statistics across runs for N={N}")


def _empty_results(algorithms: List[str]) -> ExperimentResults:
    return {algorithm: {} for algorithm in algorithms}


# Sequential runner ----------------------------------------------------------

def run_experiments(
    N_values: List[int],
    algorithms: Optional[List[str]] = None,
    runs: int = 1,
    progress_label: Optional[str] = None,
    validate: bool = False,
) -> ExperimentResults:
    """Run every selected algorithm ``runs`` times for each N, in order.

    Returns a mapping ``algorithm -> N -> SearchResultEntry``.
    """
    algorithms = algorithms or list(settings.ALGORITHMS)
    results = _empty_results(algorithms)
    progress = ProgressPrinter(len(N_values), progress_label) if progress_label else None

    for index, N in enumerate(N_values, start=1):
        if progress:
            progress.update(index, f"N={N}")
        print(f"=== N = {N}, {'+'.join(algorithms)} ===")

        for algorithm in algorithms:
            records = [run_single_search((algorithm, N)) for _ in range(max(1, runs))]
            if validate:
                _validate_runs(algorithm, N, records)
            results[algorithm][N] = summarize_runs(records)
            first = records[0]
            print(
                f"  {algorithm}: success={first['success']}, nodes={first['nodes_expanded']}, "
                f"frontier={first['frontier_size']}, time={first['time']:.4f}s"
            )

    return results


# Parallel runner ------------------------------------------------------------

def run_experiments_parallel(
    N_values: List[int],
    algorithms: Optional[List[str]] = None,
    runs: int = 1,
    progress_label: Optional[str] = None,
    validate: bool = False,
) -> ExperimentResults:
    """Parallel variant of ``run_experiments``.

    Each ``(algorithm, N, run)`` job is an independent search executed in a
    worker process; a single search is never split across workers. Records
    are regrouped in submission order, so the aggregated output matches the
    sequential runner apart from timings.
    """
    algorithms = algorithms or list(settings.ALGORITHMS)
    results = _empty_results(algorithms)
    jobs: List[Tuple[str, int]] = [
        (algorithm, N) for N in N_values for algorithm in algorithms for _ in range(max(1, runs))
    ]
    progress = ProgressPrinter(len(jobs), progress_label) if progress_label else None

    records: List[SearchRecord] = []
    with ProcessPoolExecutor(max_workers=settings.NUM_PROCESSES) as executor:
        for index, record in enumerate(executor.map(run_single_search, jobs), start=1):
            records.append(record)
            if progress:
                progress.update(index, f"{record['algorithm']} N={record['n']}")

    grouped: Dict[Tuple[str, int], List[SearchRecord]] = {}
    for record in records:
        grouped.setdefault((record["algorithm"], record["n"]), []).append(record)

    for N in N_values:
        for algorithm in algorithms:
            batch = grouped.get((algorithm, N), [])
            if validate:
                _validate_runs(algorithm, N, batch)
            results[algorithm][N] = summarize_runs(batch)

    return results


# Reference statistics -------------------------------------------------------

def extract_reference_statistics(results: ExperimentResults) -> Dict[str, Dict[int, Dict[str, Any]]]:
    """Reduce results to the deterministic statistics worth persisting."""
    reference: Dict[str, Dict[int, Dict[str, Any]]] = {}
    for algorithm, per_n in results.items():
        reference[algorithm] = {
            N: {
                "success": entry["success"],
                "nodes_expanded": entry["nodes_expanded"],
                "frontier_size": entry["frontier_size"],
            }
            for N, entry in per_n.items()
        }
    return reference


def compare_with_reference(
    results: ExperimentResults,
    reference: Dict[str, Dict[Any, Dict[str, Any]]],
) -> List[str]:
    """Return human-readable mismatches between ``results`` and ``reference``.

    Reference keys for N may be strings (as stored in JSON). Sizes with no
    reference entry are skipped.
    """
    mismatches: List[str] = []
    for algorithm, per_n in results.items():
        stored = {int(k): v for k, v in reference.get(algorithm, {}).items()}
        for N, entry in per_n.items():
            expected = stored.get(N)
            if not expected:
                continue
            for field in ("success", "nodes_expanded", "frontier_size"):
                if field in expected and expected[field] != entry[field]:
                    mismatches.append(
                        f"{algorithm} N={N}: {field} expected {expected[field]}, got {entry[field]}"
                    )
    return mismatches
