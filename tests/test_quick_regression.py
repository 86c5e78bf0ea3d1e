"""Quick regression tests for the N-Queens search suite."""

from contextlib import redirect_stdout
from io import StringIO
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqueens_search.analysis.cli import run_quick_regression_tests


class QuickRegressionTests(unittest.TestCase):
    """Verify that the lightweight regression checks pass."""

    def test_algorithms_and_csv_generation(self):
        """Ensure BFS, UCS, A* and CSV export succeed on N=1, 3 and 4."""
        buffer = StringIO()
        with redirect_stdout(buffer):
            run_quick_regression_tests()
        self.assertIn("Quick regression tests passed.", buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
