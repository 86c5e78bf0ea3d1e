"""CSV export utilities for experiment outputs (aggregates and raw runs).

These helpers materialize concise CSV summaries, full per-run raw data and a
nodes-expanded comparison table for downstream analysis or spreadsheet
inspection. Filenames carry an optional run tag and datestamp suffix.
"""
from __future__ import annotations

import csv
import os
from typing import List

import pandas as pd

from . import settings
from .stats import ExperimentResults


def build_filename_suffix() -> str:
    """Build an optional filename suffix from RUN_TAG and the datestamp setting.

    Returns an empty string if no suffixing is configured.
    """
    parts: List[str] = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def results_to_frame(results: ExperimentResults, N_values: List[int]) -> pd.DataFrame:
    """Flatten aggregated results into one row per (algorithm, N).

    Columns: algorithm, n, success, nodes_expanded, frontier_size, runs,
    time_mean, time_median, time_std.
    """
    rows = []
    for algorithm, per_n in results.items():
        for N in N_values:
            entry = per_n.get(N)
            if not entry:
                continue
            time_stats = entry.get("all_time", {})
            rows.append({
                "algorithm": algorithm,
                "n": N,
                "success": bool(entry["success"]),
                "nodes_expanded": entry["nodes_expanded"],
                "frontier_size": entry["frontier_size"],
                "runs": entry.get("total_runs", 0),
                "time_mean": time_stats.get("mean"),
                "time_median": time_stats.get("median"),
                "time_std": time_stats.get("std"),
            })
    columns = ["algorithm", "n", "success", "nodes_expanded", "frontier_size", "runs",
               "time_mean", "time_median", "time_std"]
    return pd.DataFrame(rows, columns=columns)


def save_results_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write compact per-N aggregate metrics, one column group per algorithm.

    Column names follow lowercase snake_case with algorithm prefixes
    (bfs_*, ucs_*, astar_*). Returns the written path.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"results_search{build_filename_suffix()}.csv")
    algorithms = list(results.keys())

    header = ["n"]
    for algorithm in algorithms:
        prefix = algorithm.lower()
        header.extend([
            f"{prefix}_success",
            f"{prefix}_nodes_expanded",
            f"{prefix}_frontier_size",
            f"{prefix}_time_mean",
            f"{prefix}_time_median",
            f"{prefix}_solution",
        ])

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for N in N_values:
            row: List[object] = [N]
            for algorithm in algorithms:
                entry = results[algorithm].get(N, {})
                time_stats = entry.get("all_time", {})
                row.extend([
                    int(bool(entry.get("success", False))),
                    entry.get("nodes_expanded", ""),
                    entry.get("frontier_size", ""),
                    time_stats.get("mean", ""),
                    time_stats.get("median", ""),
                    entry.get("solution", ""),
                ])
            writer.writerow(row)

    print(f"CSV saved: {filename}")
    return filename


def save_raw_data_to_csv(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write every individual run (one line per run) to a raw CSV file."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"raw_runs_search{build_filename_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["algorithm", "n", "run", "success", "nodes_expanded", "frontier_size", "time_seconds",
                         "solution"])
        for algorithm, per_n in results.items():
            for N in N_values:
                entry = per_n.get(N)
                if not entry:
                    continue
                for run_index, run in enumerate(entry.get("raw_runs", []), start=1):
                    writer.writerow([
                        algorithm,
                        N,
                        run_index,
                        int(run["success"]),
                        run["nodes_expanded"],
                        run["frontier_size"],
                        run["time"],
                        run["solution"],
                    ])

    print(f"Raw CSV saved: {filename}")
    return filename


def save_nodes_comparison(results: ExperimentResults, N_values: List[int], out_dir: str) -> str:
    """Write a pivot table of nodes expanded (rows: N, columns: algorithm).

    When both BFS and ASTAR are present, an ``astar_vs_bfs_ratio`` column
    shows how much of the uninformed effort the heuristic search needed.
    """
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"nodes_expanded_comparison{build_filename_suffix()}.csv")

    frame = results_to_frame(results, N_values)
    if frame.empty:
        pd.DataFrame(columns=["n"]).to_csv(filename, index=False)
        return filename
    pivot = frame.pivot_table(index="n", columns="algorithm", values="nodes_expanded", aggfunc="first")
    pivot = pivot.reindex(columns=[a for a in results.keys() if a in pivot.columns])
    if "BFS" in pivot.columns and "ASTAR" in pivot.columns:
        pivot["astar_vs_bfs_ratio"] = pivot["ASTAR"] / pivot["BFS"]
    pivot.to_csv(filename)

    print(f"Nodes comparison saved: {filename}")
    return filename
