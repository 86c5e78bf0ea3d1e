"""Global settings for the N-Queens search analysis pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`nqueens_search.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import List, Optional

# Board sizes to evaluate (ascending). The state space grows roughly as N^2!/(N^2-N)!,
# so uninformed searches become impractical quickly beyond N=4.
N_VALUES: List[int] = [1, 2, 3, 4]

# Search algorithms to run, in reporting order
ALGORITHMS: List[str] = ["BFS", "UCS", "ASTAR"]

# Repetitions per (algorithm, N). Searches are deterministic, so extra runs only
# refine the timing statistics (and feed the determinism check under --validate).
RUNS_PER_ALGORITHM: int = 3

# Output directory for CSV and charts
OUT_DIR: str = "results_nqueens_search"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots will include a datestamp suffix (e.g., _20251113-142530)
# applied consistently across all artifacts produced within the same run.
DATE_IN_FILENAMES: bool = False

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run labeling to avoid overwriting outputs
RUN_TAG: Optional[str] = None

# Current pipeline mode: 'sequential' | 'parallel'
CURRENT_PIPELINE_MODE: str = "sequential"


def set_runs(
        n_values: Optional[List[int]] = None,
        runs_per_algorithm: Optional[int] = None,
        algorithms: Optional[List[str]] = None,
) -> None:
        """Configure the experiment grid and print a concise summary.

        Parameters
        - n_values: board sizes to evaluate (None keeps the current list).
        - runs_per_algorithm: repetitions per (algorithm, N), at least 1.
        - algorithms: labels among BFS, UCS, ASTAR (None keeps the current list).

        Side effects
        - Updates module-level globals and prints a summary to stdout so the
            active grid is explicit at run start.
        """
        global N_VALUES, RUNS_PER_ALGORITHM, ALGORITHMS
        if n_values is not None:
                N_VALUES = [int(n) for n in n_values]
        if runs_per_algorithm is not None:
                RUNS_PER_ALGORITHM = max(1, int(runs_per_algorithm))
        if algorithms is not None:
                ALGORITHMS = [a.upper() for a in algorithms]

        print("Experiment settings configured:")
        print(f"   - N values: {N_VALUES}")
        print(f"   - Algorithms: {', '.join(ALGORITHMS)}")
        print(f"   - Runs per algorithm: {RUNS_PER_ALGORITHM}")
