"""Tests for the modified N-Queens problem model."""

from contextlib import redirect_stdout
from io import StringIO
from itertools import permutations
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from nqueens_search.problem import DIRECTIONS, Action, ModifiedNQueens

SOLUTION_4 = ((1, 0), (3, 1), (0, 2), (2, 3))


def ordered_conflict_pairs(state):
    """Literal ordered-pair count used to cross-check ``heuristic``."""
    total = 0
    for i, (r1, c1) in enumerate(state):
        for j, (r2, c2) in enumerate(state):
            if i == j:
                continue
            if r1 == r2 or c1 == c2 or abs(r1 - r2) == abs(c1 - c2):
                total += 1
    return total


class ConstructionTests(unittest.TestCase):
    def test_rejects_non_positive_sizes(self):
        for size in (0, -1, -8):
            with self.assertRaises(ValueError):
                ModifiedNQueens(size)

    def test_rejects_non_integer_sizes(self):
        for size in ("4", 4.0, True, None):
            with self.assertRaises(TypeError):
                ModifiedNQueens(size)

    def test_size_is_exposed(self):
        self.assertEqual(ModifiedNQueens(5).size, 5)


class InitialStateTests(unittest.TestCase):
    def test_queens_start_on_row_zero(self):
        for n in range(1, 9):
            state = ModifiedNQueens(n).initial_state()
            self.assertEqual(len(state), n)
            self.assertEqual(state, tuple((0, col) for col in range(n)))


class ActionTests(unittest.TestCase):
    def test_initial_state_only_allows_moving_down(self):
        problem = ModifiedNQueens(4)
        self.assertEqual(problem.actions(problem.initial_state()), [Action(i, "D") for i in range(4)])

    def test_single_queen_board_has_no_moves(self):
        problem = ModifiedNQueens(1)
        self.assertEqual(problem.actions(problem.initial_state()), [])

    def test_order_is_queen_then_up_down_left_right(self):
        problem = ModifiedNQueens(3)
        state = ((1, 1), (0, 0), (2, 2))
        expected = [
            (0, "U"), (0, "D"), (0, "L"), (0, "R"),
            (1, "D"), (1, "R"),
            (2, "U"), (2, "L"),
        ]
        self.assertEqual(problem.actions(state), [Action(*a) for a in expected])

    def test_every_action_moves_exactly_one_queen_to_a_free_cell(self):
        problem = ModifiedNQueens(4)
        states = [problem.initial_state(), SOLUTION_4, ((1, 1), (1, 2), (2, 1), (3, 3))]
        for state in states:
            for action in problem.actions(state):
                successor = problem.result(state, action)
                changed = [i for i in range(len(state)) if state[i] != successor[i]]
                self.assertEqual(changed, [action.queen])
                row, col = successor[action.queen]
                self.assertTrue(problem.in_bounds(row, col))
                self.assertNotIn((row, col), state)


class ResultTests(unittest.TestCase):
    def setUp(self):
        self.problem = ModifiedNQueens(4)
        self.initial = self.problem.initial_state()

    def test_moves_queen_and_keeps_input(self):
        successor = self.problem.result(self.initial, Action(2, "D"))
        self.assertEqual(successor, ((0, 0), (0, 1), (1, 2), (0, 3)))
        self.assertEqual(self.initial, ((0, 0), (0, 1), (0, 2), (0, 3)))

    def test_out_of_bounds_move_is_ignored(self):
        self.assertEqual(self.problem.result(self.initial, Action(0, "U")), self.initial)
        self.assertEqual(self.problem.result(self.initial, Action(0, "L")), self.initial)
        self.assertEqual(self.problem.result(self.initial, Action(3, "R")), self.initial)

    def test_occupied_destination_is_ignored(self):
        self.assertEqual(self.problem.result(self.initial, Action(0, "R")), self.initial)
        self.assertEqual(self.problem.result(self.initial, Action(2, "L")), self.initial)

    def test_unknown_direction_raises(self):
        with self.assertRaises(ValueError):
            self.problem.result(self.initial, (0, "X"))

    def test_directions_constant(self):
        self.assertEqual(DIRECTIONS, ("U", "D", "L", "R"))


class HeuristicTests(unittest.TestCase):
    def setUp(self):
        self.problem = ModifiedNQueens(4)

    def test_counts_ordered_pairs(self):
        self.assertEqual(self.problem.heuristic(self.problem.initial_state()), 12)
        self.assertEqual(self.problem.heuristic(SOLUTION_4), 0)
        state = ((1, 1), (1, 2), (2, 1), (3, 3))
        self.assertEqual(self.problem.heuristic(state), ordered_conflict_pairs(state))

    def test_even_and_symmetric_under_queen_permutation(self):
        state = ((1, 1), (0, 3), (2, 1), (3, 3))
        expected = self.problem.heuristic(state)
        self.assertEqual(expected % 2, 0)
        for perm in permutations(state):
            self.assertEqual(self.problem.heuristic(perm), expected)


class GoalTests(unittest.TestCase):
    def test_known_solution_is_goal(self):
        problem = ModifiedNQueens(4)
        self.assertTrue(problem.is_goal(SOLUTION_4))
        self.assertFalse(problem.is_goal(problem.initial_state()))

    def test_single_queen_is_goal(self):
        problem = ModifiedNQueens(1)
        self.assertTrue(problem.is_goal(problem.initial_state()))

    def test_one_queen_per_row_with_diagonal_conflict(self):
        problem = ModifiedNQueens(4)
        state = ((0, 0), (1, 1), (2, 3), (3, 2))
        self.assertGreater(problem.heuristic(state), 0)
        self.assertFalse(problem.is_goal(state))

    def test_duplicate_row_never_has_zero_heuristic(self):
        problem = ModifiedNQueens(4)
        state = ((0, 0), (0, 2), (2, 1), (3, 3))
        self.assertGreater(problem.heuristic(state), 0)
        self.assertFalse(problem.is_goal(state))

    def test_goal_matches_row_and_heuristic_conditions(self):
        problem = ModifiedNQueens(4)
        candidates = [SOLUTION_4, ((2, 0), (0, 1), (3, 2), (1, 3)), ((0, 0), (1, 1), (2, 3), (3, 2)),
                      problem.initial_state(), ((1, 0), (3, 1), (0, 2), (1, 3))]
        for state in candidates:
            rows_exclusive = sorted(r for r, _ in state) == list(range(4))
            expected = rows_exclusive and problem.heuristic(state) == 0
            self.assertEqual(problem.is_goal(state), expected, state)


class RenderingTests(unittest.TestCase):
    def test_print_state(self):
        problem = ModifiedNQueens(3)
        buffer = StringIO()
        with redirect_stdout(buffer):
            problem.print_state(problem.initial_state())
        self.assertEqual(buffer.getvalue(), "Q Q Q\n. . .\n. . .\n")


if __name__ == "__main__":
    unittest.main()
