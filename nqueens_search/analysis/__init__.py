"""
Analysis and orchestration package for N-Queens search experiments.

This package contains:
- settings: global knobs (sizes, algorithms, runs, output naming)
- stats: typed summaries and aggregation helpers
- experiments: sequential/parallel runners, validation and reference checks
- reporting: CSV exports and raw-data writers
- plots: chart generation
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    SearchRecord,
    SearchResultEntry,
    ExperimentResults,
    compute_detailed_statistics,
    summarize_runs,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "SearchRecord",
    "SearchResultEntry",
    "ExperimentResults",
    # utils
    "compute_detailed_statistics",
    "summarize_runs",
    "ProgressPrinter",
    # settings module
    "settings",
]
