"""Entry point for the modified N-Queens search suite.

Run without arguments for the interactive menu, or see ``--help`` for single
searches (``-n 4 --alg ASTAR``), the benchmark pipeline (``--benchmark``) and
the quick regression check (``--quick-test``).
"""

from nqueens_search.analysis.cli import main


if __name__ == "__main__":
    main()
