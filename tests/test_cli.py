"""Tests for the command-line front-end."""

from contextlib import redirect_stdout
from io import StringIO
import json
import os
from pathlib import Path
import sys
import tempfile
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqueens_search.analysis import cli, settings

_SETTINGS_FIELDS = ("N_VALUES", "ALGORITHMS", "RUNS_PER_ALGORITHM", "OUT_DIR", "RUN_TAG", "DATE_IN_FILENAMES",
                    "CURRENT_PIPELINE_MODE")


def _feed(*answers):
    replies = iter(answers)
    return lambda: next(replies)


class AlgorithmParsingTests(unittest.TestCase):
    def test_filters_accept_labels_menu_numbers_and_lists(self):
        self.assertEqual(cli.parse_algorithm_filters(["bfs,3", "1", "A*"]), ["BFS", "ASTAR"])
        self.assertEqual(cli.parse_algorithm_filters(["2"]), ["UCS"])
        self.assertIsNone(cli.parse_algorithm_filters(None))

    def test_unknown_algorithm(self):
        with self.assertRaises(ValueError):
            cli.parse_algorithm_filters(["DFS"])


class InteractiveSessionTests(unittest.TestCase):
    def run_session(self, *answers):
        buffer = StringIO()
        with redirect_stdout(buffer):
            code = cli.interactive_session(_feed(*answers))
        return code, buffer.getvalue()

    def test_menu_run(self):
        code, output = self.run_session("1", "3")
        self.assertEqual(code, 0)
        self.assertIn("1. BFS", output)
        self.assertIn("3. A*", output)
        self.assertIn("Running A*...", output)
        self.assertIn("Solution Found!", output)
        self.assertIn("Nodes Expanded: 1", output)
        self.assertIn("Frontier Remaining: 0", output)

    def test_unsolvable_size(self):
        code, output = self.run_session("2", "1")
        self.assertEqual(code, 0)
        self.assertIn("No solution found.", output)

    def test_invalid_choice(self):
        code, output = self.run_session("4", "7")
        self.assertEqual(code, 0)
        self.assertIn("Invalid choice. Please restart program.", output)
        self.assertNotIn("Running", output)

    def test_invalid_size(self):
        for raw in ("0", "-2", "four"):
            code, output = self.run_session(raw)
            self.assertEqual(code, 1)
            self.assertIn("Invalid value of N", output)


class MainEntryTests(unittest.TestCase):
    def setUp(self):
        self._saved = {name: getattr(settings, name) for name in _SETTINGS_FIELDS}

    def tearDown(self):
        for name, value in self._saved.items():
            setattr(settings, name, value)

    def test_single_search_from_flags(self):
        buffer = StringIO()
        with redirect_stdout(buffer):
            cli.main(["-n", "1", "--alg", "UCS,A*"])
        output = buffer.getvalue()
        self.assertIn("Running UCS...", output)
        self.assertIn("Running A*...", output)
        self.assertEqual(output.count("Solution Found!"), 2)

    def test_invalid_size_flag_exits(self):
        with redirect_stdout(StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["-n", "0"])
        self.assertEqual(ctx.exception.code, 1)

    def test_missing_config_exits(self):
        with redirect_stdout(StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["--benchmark", "--config", os.path.join(tempfile.gettempdir(), "missing-nq.json")])
        self.assertEqual(ctx.exception.code, 1)

    def test_benchmark_records_and_validates(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            out_dir = os.path.join(tmpdir, "out")
            config_path = os.path.join(tmpdir, "config.json")
            with open(config_path, "w") as f:
                json.dump(
                    {
                        "experiment_settings": {"N_values": [1, 2], "runs_per_algorithm": 1, "output_dir": out_dir},
                        "algorithms": ["BFS", "UCS", "ASTAR"],
                        "reference_statistics": {},
                    },
                    f,
                )

            with redirect_stdout(StringIO()):
                cli.main(["--benchmark", "--config", config_path, "--alg", "BFS,ASTAR", "--record"])
            with open(config_path) as f:
                stored = json.load(f)["reference_statistics"]
            self.assertEqual(set(stored), {"BFS", "ASTAR"})
            self.assertEqual(stored["BFS"]["1"], {"success": True, "nodes_expanded": 1, "frontier_size": 0})
            self.assertTrue(os.path.exists(os.path.join(out_dir, "results_search.csv")))
            self.assertTrue(os.path.exists(os.path.join(out_dir, "01_nodes_expanded_vs_N.png")))

            buffer = StringIO()
            with redirect_stdout(buffer):
                cli.main(["--benchmark", "--config", config_path, "--alg", "BFS,ASTAR", "--validate"])
            self.assertIn("Validation passed", buffer.getvalue())

            stored["BFS"]["1"]["nodes_expanded"] = 99
            with open(config_path, "w") as f:
                json.dump({"experiment_settings": {"N_values": [1], "runs_per_algorithm": 1, "output_dir": out_dir},
                           "reference_statistics": stored}, f)
            with redirect_stdout(StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(["--benchmark", "--config", config_path, "--validate"])
            self.assertEqual(ctx.exception.code, 1)

    def test_filter_outside_configuration(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = os.path.join(tmpdir, "config.json")
            with open(config_path, "w") as f:
                json.dump({"algorithms": ["BFS"]}, f)
            with redirect_stdout(StringIO()):
                with self.assertRaises(ValueError):
                    cli.apply_configuration(config_path, ["UCS"])
                _, selected = cli.apply_configuration(config_path, None)
            self.assertEqual(selected, ["BFS"])
            self.assertEqual(settings.ALGORITHMS, ["BFS"])


if __name__ == "__main__":
    unittest.main()
