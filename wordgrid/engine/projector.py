"""Projection of assigned words onto the answer grid."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.constants import Coord
from ..core.models import AnswerGrid
from .topology import GridTopology


def project(words: Sequence[str], topology: GridTopology) -> AnswerGrid:
    """Render ``words`` into a ``grid_size`` square, ``None`` where uncovered.

    Horizontal words fill their whole row. Vertical words are written from
    row 1 down; their first letter is shared with the horizontal word on
    row 0.
    """

    if len(words) != topology.slot_count:
        raise ValueError(
            f"Expected {topology.slot_count} words for length {topology.word_length}, "
            f"got {len(words)}"
        )

    size = topology.grid_size
    rows: List[List[Optional[str]]] = [[None] * size for _ in range(size)]
    vertical = set(topology.vertical_slots)
    for slot, (word, placement) in enumerate(zip(words, topology.placements)):
        start = 1 if slot in vertical else 0
        for index, (r, c) in enumerate(placement.cells(size)):
            if index < start:
                continue
            rows[r][c] = word[index]
    return tuple(tuple(row) for row in rows)


def non_empty_cells(grid: Sequence[Sequence[Optional[str]]]) -> List[Coord]:
    """Row-major list of coordinates holding a letter."""
    return [
        (r, c)
        for r, row in enumerate(grid)
        for c, letter in enumerate(row)
        if letter is not None
    ]
