"""Visualization utilities for analysis outputs.

Overview
--------
This module generates PNG charts from the aggregated experiment results
produced by the analysis pipeline. Charts are rendered off-screen (Agg
backend) so the pipeline also runs on headless machines.

Inputs and data contract
------------------------
- The primary input is an ``ExperimentResults`` mapping
    ``algorithm -> N -> SearchResultEntry``.
- Functions also accept an ordered list of ``N_values`` that determines the
    x-axis for most charts.

Chart map
---------
- 01_nodes_expanded_vs_N.png: nodes expanded per algorithm (log scale).
    Hardware-independent effort; the gap between BFS/UCS and A* shows the
    effect of the conflict heuristic.
- 02_frontier_size_vs_N.png: frontier length when the search stopped
    (symlog scale, failed searches report 0).
- 03_time_vs_N_log_scale.png: mean wall-clock time with a ±1σ band.
- 04_success_heatmap.png: success (1) / exhausted frontier (0) per
    algorithm and N.
"""
from __future__ import annotations

import os
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import seaborn as sns  # noqa: E402

from .reporting import build_filename_suffix, results_to_frame  # noqa: E402
from .stats import ExperimentResults  # noqa: E402


def _save(fig, out_dir: str, name: str) -> str:
    fname = os.path.join(out_dir, f"{name}{build_filename_suffix()}.png")
    fig.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close(fig)
    return fname


def plot_and_save(results: ExperimentResults, N_values: List[int], out_dir: str) -> List[str]:
    """Render the standard chart set into ``out_dir``.

    Returns
    -------
    List[str]
        Paths of the written PNG files (empty when there is nothing to plot).
    """
    os.makedirs(out_dir, exist_ok=True)
    frame = results_to_frame(results, N_values)
    if frame.empty:
        print("No results to plot.")
        return []

    sns.set_theme(style="whitegrid")
    written: List[str] = []

    fig, ax = plt.subplots(figsize=(8, 5))
    sns.lineplot(data=frame, x="n", y="nodes_expanded", hue="algorithm", marker="o", ax=ax)
    ax.set_yscale("log")
    ax.set_xticks(N_values)
    ax.set_xlabel("N (board size)")
    ax.set_ylabel("Nodes expanded (log scale)")
    ax.set_title("Nodes expanded vs N")
    written.append(_save(fig, out_dir, "01_nodes_expanded_vs_N"))

    fig, ax = plt.subplots(figsize=(8, 5))
    sns.lineplot(data=frame, x="n", y="frontier_size", hue="algorithm", marker="s", ax=ax)
    ax.set_yscale("symlog")
    ax.set_xticks(N_values)
    ax.set_xlabel("N (board size)")
    ax.set_ylabel("Frontier size at termination")
    ax.set_title("Remaining frontier vs N")
    written.append(_save(fig, out_dir, "02_frontier_size_vs_N"))

    fig, ax = plt.subplots(figsize=(8, 5))
    for algorithm, group in frame.groupby("algorithm", sort=False):
        group = group.sort_values("n")
        x = group["n"].to_numpy()
        mean = group["time_mean"].to_numpy(dtype=float)
        std = np.nan_to_num(group["time_std"].to_numpy(dtype=float))
        ax.plot(x, mean, marker="o", label=algorithm)
        ax.fill_between(x, np.clip(mean - std, 1e-9, None), mean + std, alpha=0.2)
    ax.set_yscale("log")
    ax.set_xticks(N_values)
    ax.set_xlabel("N (board size)")
    ax.set_ylabel("Mean time [s] (log scale)")
    ax.set_title("Search time vs N")
    ax.legend()
    written.append(_save(fig, out_dir, "03_time_vs_N_log_scale"))

    success = frame.pivot_table(index="algorithm", columns="n", values="success", aggfunc="first").astype(float)
    fig, ax = plt.subplots(figsize=(1.2 * len(N_values) + 3, 3))
    sns.heatmap(success, annot=True, fmt=".0f", cmap="RdYlGn", vmin=0, vmax=1, cbar=False, ax=ax)
    ax.set_xlabel("N (board size)")
    ax.set_ylabel("Algorithm")
    ax.set_title("Goal reached (1) or frontier exhausted (0)")
    written.append(_save(fig, out_dir, "04_success_heatmap"))

    for fname in written:
        print(f"Chart saved: {fname}")
    return written
