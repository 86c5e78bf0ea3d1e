"""Configuration management for the N-Queens search experiment suite.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize experiment settings, the algorithm selection, and persisted
reference statistics per algorithm.

File format (high-level)
------------------------
- experiment_settings: N values, runs per algorithm, output directory, run tag.
- algorithms: list of algorithm labels to run (e.g., ["BFS", "UCS", "ASTAR"]).
- reference_statistics: mapping algorithm -> { N: {success, nodes_expanded,
  frontier_size} } recorded from a previous run and used by --validate.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration and reference statistics.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, "r") as f:
            return json.load(f)

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, "w") as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Return high-level experiment settings (sizes, runs, output dir)."""
        return self.config.get("experiment_settings", {})

    def get_algorithms(self):
        """Return the list of algorithm labels to run (default: BFS, UCS, ASTAR)."""
        return self.config.get("algorithms", ["BFS", "UCS", "ASTAR"])

    def get_reference_statistics(self, algorithm=None):
        """Return stored reference statistics.

        Parameters
        ----------
        algorithm : str | None
            If provided, return the per-N mapping for that algorithm only;
            otherwise return the entire mapping.
        """
        reference = self.config.get("reference_statistics", {})
        if algorithm:
            return reference.get(algorithm, {})
        return reference

    def save_reference_statistics(self, algorithm, statistics):
        """Persist reference statistics for one algorithm.

        Parameters
        ----------
        algorithm : str
            Algorithm label (e.g., "BFS").
        statistics : dict
            Mapping ``{N: {success, nodes_expanded, frontier_size}}``. Keys are
            stored as strings, as JSON requires.
        """
        if "reference_statistics" not in self.config:
            self.config["reference_statistics"] = {}

        self.config["reference_statistics"][algorithm] = {str(n): stats for n, stats in statistics.items()}
        self.save_config()
        print(f"Reference statistics for {algorithm} saved to {self.config_path}")

    def has_reference_statistics(self, algorithm):
        """Return True if reference statistics exist for ``algorithm``."""
        reference = self.config.get("reference_statistics", {})
        return algorithm in reference and bool(reference[algorithm])

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
