"""Data models supporting the word grid engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Sequence, Tuple

from .constants import CellStatus, Coord, Orientation, Outcome

AnswerGrid = Tuple[Tuple[Optional[str], ...], ...]
PlayGrid = List[List[Optional[str]]]


@dataclass(frozen=True)
class SlotPlacement:
    """Where a slot's word sits in the grid."""

    orientation: Orientation
    line: int

    def cells(self, grid_size: int) -> List[Coord]:
        """Coordinates of each character of the slot's word, in word order."""
        if self.orientation == Orientation.HORIZONTAL:
            return [(self.line, i) for i in range(grid_size)]
        return [(i, self.line) for i in range(grid_size)]


@dataclass(frozen=True)
class AssignmentResult:
    """Outcome of a word assignment search."""

    words: Tuple[Optional[str], ...]
    success: bool
    steps: int = 0


@dataclass
class ScrambleResult:
    grid: PlayGrid
    unresolved: set
    swaps_made: int
    attempts: int


@dataclass(frozen=True)
class PuzzleState:
    """Immutable snapshot of a game's progress."""

    remaining_swaps: int
    unresolved_cells: FrozenSet[Coord]
    outcome: Outcome = Outcome.IN_PROGRESS


@dataclass(frozen=True)
class CellView:
    """A non-empty cell as handed to the render sink."""

    row: int
    col: int
    letter: str
    status: CellStatus

    @property
    def swappable(self) -> bool:
        return self.status != CellStatus.CORRECT


@dataclass
class Meaning:
    part_of_speech: str
    definition: str


@dataclass
class WordDefinition:
    """Definition lookup result for one grid word."""

    word: str
    audio_url: str = ""
    meanings: List[Meaning] = field(default_factory=list)

    @classmethod
    def missing(cls, word: str) -> "WordDefinition":
        return cls(word=word, meanings=[Meaning(part_of_speech="", definition="No definition found")])


@dataclass
class Puzzle:
    """A generated puzzle: the solution plus its scrambled starting grid."""

    word_length: int
    difficulty: str
    words: Tuple[str, ...]
    answer: AnswerGrid
    play: PlayGrid
    unresolved: set
    swaps_requested: int
    swaps_made: int
    seed: Optional[int] = None

    def to_jsonable(self) -> dict:
        return {
            "word_length": self.word_length,
            "difficulty": self.difficulty,
            "words": list(self.words),
            "answer": [list(row) for row in self.answer],
            "grid": [list(row) for row in self.play],
            "unresolved": [list(coord) for coord in sorted(self.unresolved)],
            "swaps_requested": self.swaps_requested,
            "swaps_made": self.swaps_made,
            "seed": self.seed,
        }


def copy_grid(grid: Sequence[Sequence[Optional[str]]]) -> PlayGrid:
    """Return a mutable row-by-row copy of ``grid``."""
    return [list(row) for row in grid]
