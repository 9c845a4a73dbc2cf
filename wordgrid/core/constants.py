"""Shared constants and enumerations for the word grid engine."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

Coord = Tuple[int, int]

MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 7
DEFAULT_SWAP_BUDGET = 15
DEFAULT_MAX_SCRAMBLE_ATTEMPTS = 1000


class Difficulty(str, Enum):
    """Scramble difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Number of scramble swaps applied for each difficulty.
DIFFICULTY_SWAPS: Dict[Difficulty, int] = {
    Difficulty.EASY: 6,
    Difficulty.MEDIUM: 8,
    Difficulty.HARD: 10,
}


class Orientation(str, Enum):
    """Word orientations supported by the grid."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"


class CellStatus(str, Enum):
    """Per-cell display status derived from the play and answer grids."""

    CORRECT = "CORRECT"
    MISPLACED = "MISPLACED"
    WRONG = "WRONG"


class Outcome(str, Enum):
    """Game outcome; WON and LOST are terminal."""

    IN_PROGRESS = "IN_PROGRESS"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self is not Outcome.IN_PROGRESS


class Strategy(str, Enum):
    """Word assignment strategies."""

    BACKTRACKING = "backtracking"
    CPSAT = "cpsat"
