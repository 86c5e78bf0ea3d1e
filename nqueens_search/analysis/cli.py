"""Command-line interface and high-level pipelines for N-Queens search runs.

This module wires together configuration loading, single searches (either
interactive, through the classic "enter N, pick an algorithm" menu, or driven
by flags) and the benchmark pipeline that runs BFS/UCS/A* over several board
sizes. It isolates I/O, argument parsing and progress reporting from the core
algorithmic modules so that the rest of the codebase remains easy to test
programmatically.
"""
from __future__ import annotations

import argparse
import os
import tempfile
from pathlib import Path
from time import perf_counter
from typing import Callable, List, Optional, Sequence, Tuple

from . import settings
from .experiments import (
    compare_with_reference,
    extract_reference_statistics,
    run_experiments,
    run_experiments_parallel,
)
from .plots import plot_and_save
from .reporting import save_nodes_comparison, save_raw_data_to_csv, save_results_to_csv
from .stats import ExperimentResults
from config_manager import ConfigManager
from nqueens_search.problem import ModifiedNQueens
from nqueens_search.search import SEARCH_ALGORITHMS, SearchResult, get_search_function

MENU_CHOICES = {"1": "BFS", "2": "UCS", "3": "ASTAR"}
DISPLAY_NAMES = {"BFS": "BFS", "UCS": "UCS", "ASTAR": "A*"}


# ------------- Utils --------------------------------------------------------

def normalize_algorithm(token: str) -> str:
    """Map a user token (BFS, ucs, A*, 3, ...) to a canonical algorithm label."""
    token = token.strip().upper()
    if token in MENU_CHOICES:
        return MENU_CHOICES[token]
    if token == "A*":
        return "ASTAR"
    if token not in SEARCH_ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{token}'. Allowed: BFS, UCS, ASTAR (or 1, 2, 3)")
    return token


def parse_algorithm_filters(alg_args: Optional[List[str]]) -> Optional[List[str]]:
    """Normalize algorithm filter CLI inputs into a list of labels.

    Accepts repeated flags and comma-separated lists. Returns None when no
    filter is provided (meaning all are enabled).
    """
    if not alg_args:
        return None
    selected: List[str] = []
    for entry in alg_args:
        for token in entry.split(","):
            if token.strip():
                selected.append(normalize_algorithm(token))
    unique = list(dict.fromkeys(selected))  # preserve order, remove dups
    return unique or None


def apply_configuration(
    config_path: str, algorithm_filter: Optional[List[str]] = None
) -> Tuple[ConfigManager, List[str]]:
    """Load configuration and apply optional algorithm filtering.

    This function updates the global ``settings`` module in-place to reflect
    values from ``config.json`` (or a user-specified path). It returns the
    ``ConfigManager`` used and the list of selected algorithms.
    """
    config_mgr = ConfigManager(config_path)

    experiment_settings = config_mgr.get_experiment_settings()
    if experiment_settings:
        settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)
        settings.RUN_TAG = experiment_settings.get("run_tag", settings.RUN_TAG)
        settings.DATE_IN_FILENAMES = bool(experiment_settings.get("date_in_filenames", settings.DATE_IN_FILENAMES))

    configured = [normalize_algorithm(a) for a in config_mgr.get_algorithms()] or list(SEARCH_ALGORITHMS)

    if algorithm_filter:
        unknown = set(algorithm_filter).difference(configured)
        if unknown:
            raise ValueError("Algorithms not enabled in configuration: " + ", ".join(sorted(unknown)))
        selected = [a for a in configured if a in algorithm_filter]
    else:
        selected = configured

    if not selected:
        raise ValueError("No algorithms selected after applying filters.")

    n_values = experiment_settings.get("N_values") if experiment_settings else None
    if n_values is not None and any(int(n) <= 0 for n in n_values):
        raise ValueError(f"N values must be positive integers, got {n_values}")

    settings.set_runs(
        n_values=n_values,
        runs_per_algorithm=experiment_settings.get("runs_per_algorithm") if experiment_settings else None,
        algorithms=selected,
    )
    return config_mgr, selected


def print_result(problem: ModifiedNQueens, result: SearchResult) -> None:
    """Render a search result the way the console front-end always has."""
    if result.success:
        print("\nSolution Found!\n")
        problem.print_state(result.solution)
        print(f"\nNodes Expanded: {result.nodes_expanded}")
        print(f"Frontier Remaining: {result.frontier_size}")
    else:
        print("\nNo solution found.")


def run_single(problem: ModifiedNQueens, algorithm: str) -> SearchResult:
    """Run one search on ``problem`` and print its outcome."""
    print(f"\nRunning {DISPLAY_NAMES[algorithm]}...")
    result = get_search_function(algorithm)(problem)
    print_result(problem, result)
    return result


# ------------- Interactive session ----------------------------------------

def interactive_session(input_fn: Callable[[], str] = input) -> int:
    """Prompt for N and an algorithm, run it and print the result.

    Returns the process exit code: 0 for a completed session (including an
    invalid menu choice), 1 when N is not a positive integer.
    """
    print("Enter value of N: ")
    raw_n = input_fn()
    try:
        problem = ModifiedNQueens(int(raw_n.strip()))
    except ValueError as exc:
        print(f"Invalid value of N ({raw_n.strip()!r}): {exc}")
        return 1

    print("Choose Search Algorithm: ")
    for key, label in MENU_CHOICES.items():
        print(f"{key}. {DISPLAY_NAMES[label]}")
    print("Enter your choice (1-3): ")
    algorithm = MENU_CHOICES.get(input_fn().strip())
    if algorithm is None:
        print("Invalid choice. Please restart program.")
        return 0

    run_single(problem, algorithm)
    return 0


# ------------- Pipeline: benchmark ------------------------------------------

def main_benchmark(
    algorithms: Optional[List[str]] = None,
    mode: str = "sequential",
    config_mgr: Optional[ConfigManager] = None,
    validate: bool = False,
    record: bool = False,
) -> ExperimentResults:
    """Run all selected algorithms over ``settings.N_VALUES`` and export reports.

    With ``validate``, solutions are checked, repeated runs must agree and the
    statistics must match the reference stored in the configuration (sizes
    without a reference are skipped). With ``record``, the observed statistics
    become the new reference.
    """
    os.makedirs(settings.OUT_DIR, exist_ok=True)
    selected = algorithms or list(settings.ALGORITHMS)
    settings.CURRENT_PIPELINE_MODE = mode

    print("\n" + "=" * 60)
    print(f"SEARCH BENCHMARK ({mode.upper()})")
    print("=" * 60)
    print(f"Algorithms: {', '.join(DISPLAY_NAMES[a] for a in selected)}")
    print(f"N values: {settings.N_VALUES}")
    if mode == "parallel":
        print(f"Worker processes: {settings.NUM_PROCESSES}")

    start_total = perf_counter()
    runner = run_experiments_parallel if mode == "parallel" else run_experiments
    results = runner(
        settings.N_VALUES,
        selected,
        runs=settings.RUNS_PER_ALGORITHM,
        progress_label="Search experiments",
        validate=validate,
    )

    if validate and config_mgr is not None:
        mismatches = compare_with_reference(results, config_mgr.get_reference_statistics())
        if mismatches:
            raise AssertionError("Reference statistics mismatch:\n  " + "\n  ".join(mismatches))
        print("Validation passed: solutions valid, runs deterministic, references matched.")

    if record and config_mgr is not None:
        for algorithm, statistics in extract_reference_statistics(results).items():
            config_mgr.save_reference_statistics(algorithm, statistics)

    print("Generating charts and CSV reports...")
    save_results_to_csv(results, settings.N_VALUES, settings.OUT_DIR)
    save_raw_data_to_csv(results, settings.N_VALUES, settings.OUT_DIR)
    save_nodes_comparison(results, settings.N_VALUES, settings.OUT_DIR)
    plot_and_save(results, settings.N_VALUES, settings.OUT_DIR)

    total_time = perf_counter() - start_total
    print(f"\nBenchmark completed in {total_time:.1f}s")
    return results


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test for BFS/UCS/A*.

    Verifies that:
    - N=1 is solved immediately by every algorithm (one node expanded).
    - N=4 is solved by every algorithm with a goal-valid board, and A* does
      not expand more nodes than BFS.
    - The experiment pipeline reports exhausted frontiers for N=3 and
      produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (N=1, N=3, N=4) across all algorithms...")

    for algorithm in SEARCH_ALGORITHMS:
        result = get_search_function(algorithm)(ModifiedNQueens(1))
        if not result.success or result.nodes_expanded != 1 or result.solution != ((0, 0),):
            raise AssertionError(f"{algorithm} failed the trivial N=1 instance: {result}")
    print("  N=1: all algorithms succeed after one expansion")

    expanded = {}
    for algorithm in SEARCH_ALGORITHMS:
        problem = ModifiedNQueens(4)
        result = get_search_function(algorithm)(problem)
        if not result.success or result.solution is None or not problem.is_goal(result.solution):
            raise AssertionError(f"{algorithm} did not return a goal state for N=4: {result}")
        expanded[algorithm] = result.nodes_expanded
        print(
            f"  [{algorithm}] N=4: nodes={result.nodes_expanded}, "
            f"frontier={result.frontier_size}, time={result.elapsed:.4f}s"
        )
    if expanded["ASTAR"] > expanded["BFS"]:
        raise AssertionError(f"A* expanded more nodes than BFS for N=4: {expanded}")

    results = run_experiments(
        [1, 3],
        list(SEARCH_ALGORITHMS),
        runs=2,
        progress_label="Quick regression experiments",
        validate=True,
    )
    for algorithm in SEARCH_ALGORITHMS:
        if results[algorithm][3]["success"] or results[algorithm][3]["frontier_size"] != 0:
            raise AssertionError(f"{algorithm} should exhaust the frontier for N=3")

    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_results_to_csv(results, [1, 3], tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Results CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Solve the modified N-Queens puzzle with BFS, UCS or A*. "
        "Without arguments an interactive menu is shown."
    )
    parser.add_argument("-n", "--size", type=int, help="Board size N for a single search.")
    parser.add_argument(
        "--alg",
        "-a",
        action="append",
        help="Algorithm(s): BFS, UCS, ASTAR (or A*, 1, 2, 3); comma-separated or multiple flags.",
    )
    parser.add_argument("--benchmark", action="store_true", help="Run the experiment pipeline over the configured N values.")
    parser.add_argument(
        "--mode",
        choices=["sequential", "parallel"],
        default="sequential",
        help="Benchmark execution mode (default: sequential).",
    )
    parser.add_argument("--config", default="config.json", help="Path to configuration file (default: config.json).")
    parser.add_argument("--validate", action="store_true", help="Validate solutions, determinism and stored reference statistics.")
    parser.add_argument("--record", action="store_true", help="Store benchmark statistics as the new reference in the config file.")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests and exit.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen mode."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        alg_filter = parse_algorithm_filters(args.alg)
    except ValueError as exc:
        parser.error(str(exc))

    if args.benchmark:
        try:
            config_mgr, selected = apply_configuration(args.config, alg_filter)
        except FileNotFoundError as exc:
            print(f"Configuration file not found: {exc}")
            raise SystemExit(1) from exc
        except ValueError as exc:
            print(f"Configuration error: {exc}")
            raise SystemExit(1) from exc

        try:
            main_benchmark(selected, mode=args.mode, config_mgr=config_mgr, validate=args.validate, record=args.record)
        except KeyboardInterrupt:
            print("\nExecution interrupted by user. Cleaning up workers...")
            raise SystemExit(130) from None
        except (ValueError, AssertionError) as exc:
            print(f"Execution error: {exc}")
            raise SystemExit(1) from exc
        return

    if args.size is None:
        if alg_filter:
            parser.error("--size is required when --alg is given without --benchmark")
        try:
            exit_code = interactive_session()
        except (EOFError, KeyboardInterrupt):
            print("\nInput aborted.")
            raise SystemExit(1) from None
        if exit_code:
            raise SystemExit(exit_code)
        return

    try:
        problem = ModifiedNQueens(args.size)
    except ValueError as exc:
        print(f"Invalid value of N: {exc}")
        raise SystemExit(1) from exc

    for algorithm in alg_filter or ["BFS"]:
        run_single(problem, algorithm)
