import unittest

from wordgrid.core.constants import CellStatus, Outcome
from wordgrid.core.exceptions import PuzzleFinished
from wordgrid.engine.projector import project
from wordgrid.engine.state import PuzzleStateMachine, cell_status
from wordgrid.engine.topology import get_topology

#   C A T
#   O . A
#   W E B
ANSWER = project(["CAT", "WEB", "COW", "TAB"], get_topology(3))

# Corners rotated one step: each corner holds the letter of the next one.
ROTATED = [["T", "A", "B"], ["O", None, "A"], ["C", "E", "W"]]
ROTATED_CELLS = {(0, 0), (0, 2), (2, 0), (2, 2)}


def two_swapped() -> PuzzleStateMachine:
    play = [["T", "A", "C"], ["O", None, "A"], ["W", "E", "B"]]
    return PuzzleStateMachine(ANSWER, play, {(0, 0), (0, 2)})


class CellStatusTests(unittest.TestCase):
    def test_statuses(self) -> None:
        play = [["T", "A", "E"], ["C", None, "A"], ["W", "E", "B"]]
        self.assertEqual(cell_status(play, ANSWER, (0, 1)), CellStatus.CORRECT)
        # T is in the answer's row 0.
        self.assertEqual(cell_status(play, ANSWER, (0, 0)), CellStatus.MISPLACED)
        # C is in the answer's column 0.
        self.assertEqual(cell_status(play, ANSWER, (1, 0)), CellStatus.MISPLACED)
        # E is neither in answer row 0 (C A T) nor column 2 (T A B).
        self.assertEqual(cell_status(play, ANSWER, (0, 2)), CellStatus.WRONG)
        self.assertIsNone(cell_status(play, ANSWER, (1, 1)))

    def test_board_lists_non_empty_cells(self) -> None:
        machine = two_swapped()
        board = machine.board()
        self.assertEqual(len(board), 8)
        by_coord = {(v.row, v.col): v for v in board}
        self.assertEqual(by_coord[(0, 0)].letter, "T")
        self.assertEqual(by_coord[(0, 0)].status, CellStatus.MISPLACED)
        self.assertTrue(by_coord[(0, 0)].swappable)
        self.assertFalse(by_coord[(2, 1)].swappable)


class SwapGateTests(unittest.TestCase):
    def test_gate(self) -> None:
        machine = PuzzleStateMachine(ANSWER, ROTATED, ROTATED_CELLS)
        self.assertTrue(machine.is_swap_allowed((0, 0), (2, 2)))
        self.assertFalse(machine.is_swap_allowed((0, 0), (0, 0)))
        self.assertFalse(machine.is_swap_allowed((0, 0), (0, 1)))  # (0,1) is correct
        self.assertFalse(machine.is_swap_allowed((0, 0), (1, 1)))  # empty
        self.assertFalse(machine.is_swap_allowed((0, 0), (5, 5)))  # off the grid

    def test_gate_rejects_equal_letters(self) -> None:
        play = [["A", "C", "A"], ["O", None, "T"], ["W", "E", "B"]]
        machine = PuzzleStateMachine(ANSWER, play, {(0, 0), (0, 1), (0, 2), (1, 2)})
        self.assertTrue(machine.is_swap_allowed((0, 0), (0, 1)))
        self.assertFalse(machine.is_swap_allowed((0, 0), (0, 2)))

    def test_machine_owns_its_grid(self) -> None:
        play = [["T", "A", "C"], ["O", None, "A"], ["W", "E", "B"]]
        machine = PuzzleStateMachine(ANSWER, play, {(0, 0), (0, 2)})
        play[0][0] = "Z"
        self.assertEqual(machine.letter((0, 0)), "T")
        machine.play_grid[0][0] = "Z"
        self.assertEqual(machine.letter((0, 0)), "T")


class TransitionTests(unittest.TestCase):
    def test_initial_state(self) -> None:
        state = two_swapped().state
        self.assertEqual(state.remaining_swaps, 15)
        self.assertEqual(state.outcome, Outcome.IN_PROGRESS)
        self.assertEqual(state.unresolved_cells, frozenset({(0, 0), (0, 2)}))

    def test_resolving_last_cells_wins(self) -> None:
        machine = two_swapped()
        state = machine.apply_swap((0, 0), (0, 2))
        self.assertEqual(state.outcome, Outcome.WON)
        self.assertEqual(state.remaining_swaps, 14)
        self.assertEqual(state.unresolved_cells, frozenset())
        self.assertEqual(machine.play_grid, [list(row) for row in ANSWER])

    def test_running_out_of_swaps_loses(self) -> None:
        machine = PuzzleStateMachine(ANSWER, ROTATED, ROTATED_CELLS)
        for move in range(15):
            self.assertTrue(machine.is_swap_allowed((0, 0), (2, 2)))
            state = machine.apply_swap((0, 0), (2, 2))
            if move < 14:
                self.assertEqual(state.outcome, Outcome.IN_PROGRESS)
        self.assertEqual(state.outcome, Outcome.LOST)
        self.assertEqual(state.remaining_swaps, 0)
        self.assertEqual(state.unresolved_cells, frozenset(ROTATED_CELLS))
        self.assertFalse(machine.is_swap_allowed((0, 0), (2, 2)))
        with self.assertRaises(PuzzleFinished):
            machine.apply_swap((0, 0), (2, 2))
        self.assertEqual(machine.state.remaining_swaps, 0)

    def test_win_takes_priority_on_last_swap(self) -> None:
        play = [["T", "A", "C"], ["O", None, "A"], ["W", "E", "B"]]
        machine = PuzzleStateMachine(ANSWER, play, {(0, 0), (0, 2)}, swap_budget=1)
        self.assertEqual(machine.apply_swap((0, 0), (0, 2)).outcome, Outcome.WON)

    def test_resolved_cells_stay_resolved(self) -> None:
        machine = PuzzleStateMachine(ANSWER, ROTATED, ROTATED_CELLS)
        seen_resolved = set()
        moves = [((0, 0), (2, 0)), ((2, 0), (0, 2)), ((2, 0), (2, 2))]
        for first, second in moves:
            state = machine.apply_swap(first, second)
            seen_resolved |= ROTATED_CELLS - state.unresolved_cells
            self.assertFalse(seen_resolved & state.unresolved_cells)
        self.assertEqual(state.outcome, Outcome.WON)
        self.assertEqual(state.remaining_swaps, 12)

    def test_swap_that_resolves_nothing_still_costs(self) -> None:
        machine = PuzzleStateMachine(ANSWER, ROTATED, ROTATED_CELLS, swap_budget=5)
        state = machine.apply_swap((0, 0), (2, 2))
        self.assertEqual(state.remaining_swaps, 4)
        self.assertEqual(len(state.unresolved_cells), 4)

    def test_negative_budget_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PuzzleStateMachine(ANSWER, ROTATED, ROTATED_CELLS, swap_budget=-1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
