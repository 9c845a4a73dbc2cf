"""Randomised scrambling of a solved grid."""

from __future__ import annotations

import random
from typing import Optional, Sequence, Set

from ..core.constants import DEFAULT_MAX_SCRAMBLE_ATTEMPTS, Coord
from ..core.models import ScrambleResult, copy_grid
from ..utils.logger import get_logger
from .projector import non_empty_cells

LOGGER = get_logger(__name__)


class Scrambler:
    """Swap random letter pairs until the grid is shuffled enough.

    A swap is accepted only when both letters differ and neither letter is
    the answer at the cell it moves to, so no scrambled cell starts out
    looking solved.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        max_attempts: int = DEFAULT_MAX_SCRAMBLE_ATTEMPTS,
    ) -> None:
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts

    def scramble(self, answer: Sequence[Sequence[Optional[str]]], swap_count: int) -> ScrambleResult:
        grid = copy_grid(answer)
        unresolved: Set[Coord] = set()
        cells = non_empty_cells(answer)
        if swap_count <= 0 or len(cells) < 2:
            return ScrambleResult(grid=grid, unresolved=unresolved, swaps_made=0, attempts=0)

        swaps_made = 0
        attempts = 0
        while swaps_made < swap_count and attempts < self.max_attempts:
            attempts += 1
            (r1, c1) = self.rng.choice(cells)
            (r2, c2) = self.rng.choice(cells)
            first, second = grid[r1][c1], grid[r2][c2]
            if first is None or second is None:
                continue
            if first == second:
                continue
            if first == answer[r2][c2] or second == answer[r1][c1]:
                continue
            grid[r1][c1], grid[r2][c2] = second, first
            unresolved.add((r1, c1))
            unresolved.add((r2, c2))
            swaps_made += 1

        if swaps_made < swap_count:
            LOGGER.warning(
                "Max attempts (%d) reached - only %d of %d swaps were made",
                self.max_attempts,
                swaps_made,
                swap_count,
            )
        else:
            LOGGER.debug("Scrambled grid with %d swaps in %d attempts", swaps_made, attempts)
        return ScrambleResult(
            grid=grid, unresolved=unresolved, swaps_made=swaps_made, attempts=attempts
        )


def scramble(
    answer: Sequence[Sequence[Optional[str]]],
    swap_count: int,
    max_attempts: int = DEFAULT_MAX_SCRAMBLE_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> ScrambleResult:
    return Scrambler(rng=rng, max_attempts=max_attempts).scramble(answer, swap_count)
