"""Pretty-print helpers for puzzle boards."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Sequence

from ..core.constants import CellStatus, Outcome

if TYPE_CHECKING:
    from ..core.models import CellView, PuzzleState, WordDefinition


class RenderSink(Protocol):
    def render(self, board: Sequence["CellView"], state: "PuzzleState") -> None:
        """Draw the full board; may raise any exception."""


BRACKETS = {
    CellStatus.CORRECT: ("[", "]"),
    CellStatus.MISPLACED: ("(", ")"),
    CellStatus.WRONG: (" ", " "),
}

COLORS = {
    CellStatus.CORRECT: "\033[92m",
    CellStatus.MISPLACED: "\033[93m",
    CellStatus.WRONG: "\033[2m",
}
RESET = "\033[0m"


def cell_symbol(view: "CellView", color: bool = False) -> str:
    left, right = BRACKETS[view.status]
    text = f"{left}{view.letter.upper()}{right}"
    if color:
        return f"{COLORS[view.status]}{text}{RESET}"
    return text


def format_board(board: Sequence["CellView"], grid_size: int, color: bool = False) -> str:
    """Text grid: ``[A]`` correct, ``(A)`` misplaced, `` A `` wrong, ``   `` empty."""

    by_coord: Dict[tuple, "CellView"] = {(v.row, v.col): v for v in board}
    lines = ["   " + "".join(f" {c} " for c in range(grid_size))]
    for r in range(grid_size):
        row_cells = []
        for c in range(grid_size):
            view = by_coord.get((r, c))
            row_cells.append(cell_symbol(view, color) if view else "   ")
        lines.append(f"{r:>2} " + "".join(row_cells))
    return "\n".join(lines)


def format_state(state: "PuzzleState") -> str:
    if state.outcome == Outcome.WON:
        swaps = "1 swap" if state.remaining_swaps == 1 else f"{state.remaining_swaps} swaps"
        return f"Solved with {swaps} to spare!"
    if state.outcome == Outcome.LOST:
        return f"Out of swaps - {len(state.unresolved_cells)} cells left unresolved."
    return f"Swaps remaining: {state.remaining_swaps}"


class TextRenderer:
    """Render sink writing the board and swap counter to a text stream."""

    def __init__(self, grid_size: int, stream=None, color: bool = False) -> None:
        self.grid_size = grid_size
        self.stream = stream or sys.stdout
        self.color = color

    def render(self, board: Sequence["CellView"], state: "PuzzleState") -> None:
        print(format_board(board, self.grid_size, self.color), file=self.stream)
        print(format_state(state), file=self.stream)


def format_definitions(definitions: Sequence["WordDefinition"]) -> str:
    lines: List[str] = ["Definitions", "-----------"]
    for entry in definitions:
        heading = entry.word
        if entry.audio_url:
            heading += f"  ({entry.audio_url})"
        lines.append(heading)
        for meaning in entry.meanings:
            prefix = f"{meaning.part_of_speech}: " if meaning.part_of_speech else ""
            lines.append(f"    {prefix}{meaning.definition}")
    return "\n".join(lines)


def print_definitions(definitions: Sequence["WordDefinition"], *, stream=None) -> None:
    stream = stream or sys.stdout
    print(format_definitions(definitions), file=stream)


def format_answer(rows: Sequence[Sequence[Optional[str]]]) -> str:
    return "\n".join(" ".join((ch or ".").upper() for ch in row) for row in rows)
