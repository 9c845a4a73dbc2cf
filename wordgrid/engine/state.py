"""Swap bookkeeping and win/loss transitions for one puzzle."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from ..core.constants import DEFAULT_SWAP_BUDGET, CellStatus, Coord, Outcome
from ..core.exceptions import PuzzleFinished
from ..core.models import AnswerGrid, CellView, PlayGrid, PuzzleState, copy_grid
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def cell_status(
    play: Sequence[Sequence[Optional[str]]],
    answer: Sequence[Sequence[Optional[str]]],
    coord: Coord,
) -> Optional[CellStatus]:
    """Display status of ``coord``; ``None`` for empty cells."""

    row, col = coord
    letter = play[row][col]
    if letter is None:
        return None
    if letter == answer[row][col]:
        return CellStatus.CORRECT
    if any(answer_row[col] == letter for answer_row in answer):
        return CellStatus.MISPLACED
    if letter in answer[row]:
        return CellStatus.MISPLACED
    return CellStatus.WRONG


class PuzzleStateMachine:
    """Tracks the play grid, swap budget and unresolved cells of one game.

    The machine owns copies of everything it is given. Swap validity is the
    input layer's job (see :meth:`is_swap_allowed`); :meth:`apply_swap` only
    refuses to run once the game is over.
    """

    def __init__(
        self,
        answer: AnswerGrid,
        play: Sequence[Sequence[Optional[str]]],
        unresolved: Iterable[Coord],
        swap_budget: int = DEFAULT_SWAP_BUDGET,
    ) -> None:
        if swap_budget < 0:
            raise ValueError("Swap budget must be non-negative")
        self.answer: AnswerGrid = tuple(tuple(row) for row in answer)
        self._play: PlayGrid = copy_grid(play)
        self._unresolved: Set[Coord] = set(unresolved)
        self.remaining_swaps = swap_budget
        self.outcome = Outcome.IN_PROGRESS

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def state(self) -> PuzzleState:
        return PuzzleState(
            remaining_swaps=self.remaining_swaps,
            unresolved_cells=frozenset(self._unresolved),
            outcome=self.outcome,
        )

    @property
    def play_grid(self) -> PlayGrid:
        return copy_grid(self._play)

    def letter(self, coord: Coord) -> Optional[str]:
        row, col = coord
        return self._play[row][col]

    def status(self, coord: Coord) -> Optional[CellStatus]:
        return cell_status(self._play, self.answer, coord)

    def _in_bounds(self, coord: Coord) -> bool:
        row, col = coord
        return 0 <= row < len(self._play) and 0 <= col < len(self._play[row])

    def is_swappable(self, coord: Coord) -> bool:
        if not self._in_bounds(coord):
            return False
        status = self.status(coord)
        return status is not None and status != CellStatus.CORRECT

    def is_swap_allowed(self, first: Coord, second: Coord) -> bool:
        """Gate the input layer must pass before calling :meth:`apply_swap`."""

        if self.outcome.is_terminal or self.remaining_swaps <= 0 or first == second:
            return False
        if not (self.is_swappable(first) and self.is_swappable(second)):
            return False
        return self.letter(first) != self.letter(second)

    def board(self) -> List[CellView]:
        """Every non-empty cell with its current letter and status."""
        views: List[CellView] = []
        for r, row in enumerate(self._play):
            for c, letter in enumerate(row):
                if letter is None:
                    continue
                status = cell_status(self._play, self.answer, (r, c))
                views.append(CellView(row=r, col=c, letter=letter, status=status))
        return views

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def apply_swap(self, first: Coord, second: Coord) -> PuzzleState:
        if self.outcome.is_terminal:
            raise PuzzleFinished(f"Game already finished ({self.outcome.value})")
        if self.remaining_swaps <= 0:
            raise PuzzleFinished("No swaps remaining")

        (r1, c1), (r2, c2) = first, second
        self._play[r1][c1], self._play[r2][c2] = self._play[r2][c2], self._play[r1][c1]

        for coord in (first, second):
            if self.status(coord) == CellStatus.CORRECT:
                self._unresolved.discard(coord)

        self.remaining_swaps -= 1
        if not self._unresolved:
            self.outcome = Outcome.WON
        elif self.remaining_swaps == 0:
            self.outcome = Outcome.LOST

        LOGGER.debug(
            "Swapped %s <-> %s: %d unresolved, %d swaps left, %s",
            first,
            second,
            len(self._unresolved),
            self.remaining_swaps,
            self.outcome.value,
        )
        return self.state
