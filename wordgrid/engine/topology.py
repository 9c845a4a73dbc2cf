"""Fixed slot layouts and intersection constraints per word length.

Each entry of :data:`TOPOLOGIES` holds both the constraint rows and the
placement lines for one word length, so the assigner and the projector read
the same record. A constraint ``(slot_a, slot_b, pos_a, pos_b)`` requires
``words[slot_a][pos_a] == words[slot_b][pos_b]``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..core.constants import MAX_WORD_LENGTH, MIN_WORD_LENGTH, Orientation
from ..core.exceptions import InvalidWordLength
from ..core.models import SlotPlacement

Constraint = Tuple[int, int, int, int]


@dataclass(frozen=True)
class GridTopology:
    word_length: int
    slot_count: int
    grid_size: int
    word_gap: int
    constraints: Tuple[Constraint, ...]
    placements: Tuple[SlotPlacement, ...]

    @property
    def horizontal_slots(self) -> Tuple[int, ...]:
        return tuple(
            i for i, p in enumerate(self.placements) if p.orientation == Orientation.HORIZONTAL
        )

    @property
    def vertical_slots(self) -> Tuple[int, ...]:
        return tuple(
            i for i, p in enumerate(self.placements) if p.orientation == Orientation.VERTICAL
        )


_SMALL_CONSTRAINTS: Tuple[Constraint, ...] = (
    (0, 2, 0, 0),
    (0, 3, 2, 0),
    (1, 2, 0, 2),
    (1, 3, 2, 2),
)

_MEDIUM_CONSTRAINTS: Tuple[Constraint, ...] = (
    (0, 3, 0, 0),
    (0, 4, 2, 0),
    (0, 5, 4, 0),
    (1, 3, 0, 2),
    (1, 4, 2, 2),
    (1, 5, 4, 2),
    (2, 3, 0, 4),
    (2, 4, 2, 4),
    (2, 5, 4, 4),
)

_LARGE_CONSTRAINTS: Tuple[Constraint, ...] = (
    (0, 3, 0, 0),
    (0, 4, 3, 0),
    (0, 5, 6, 0),
    (1, 3, 0, 3),
    (1, 4, 3, 3),
    (1, 5, 6, 3),
    (2, 3, 0, 6),
    (2, 4, 3, 6),
    (2, 5, 6, 6),
)


def _word_gap(grid_size: int) -> int:
    return (grid_size - 1) // 2 if grid_size >= 5 else 2


def _placements(grid_size: int) -> Tuple[SlotPlacement, ...]:
    """Horizontal then vertical slots on every ``word_gap``-th line."""
    lines = range(0, grid_size, _word_gap(grid_size))
    horizontal = tuple(SlotPlacement(Orientation.HORIZONTAL, line) for line in lines)
    vertical = tuple(SlotPlacement(Orientation.VERTICAL, line) for line in lines)
    return horizontal + vertical


def _entry(length: int, constraints: Tuple[Constraint, ...]) -> GridTopology:
    placements = _placements(length)
    return GridTopology(
        word_length=length,
        slot_count=len(placements),
        grid_size=length,
        word_gap=_word_gap(length),
        constraints=constraints,
        placements=placements,
    )


TOPOLOGIES: Dict[int, GridTopology] = {
    3: _entry(3, _SMALL_CONSTRAINTS),
    4: _entry(4, _SMALL_CONSTRAINTS),
    5: _entry(5, _MEDIUM_CONSTRAINTS),
    6: _entry(6, _MEDIUM_CONSTRAINTS),
    7: _entry(7, _LARGE_CONSTRAINTS),
}


def validate_word_length(word_length: object) -> int:
    """Return ``word_length`` if supported, else raise :class:`InvalidWordLength`."""

    if isinstance(word_length, bool) or not isinstance(word_length, int):
        raise InvalidWordLength(f"Word length must be an integer, got {word_length!r}")
    if word_length < MIN_WORD_LENGTH or word_length > MAX_WORD_LENGTH:
        raise InvalidWordLength(
            f"Invalid word length {word_length} - must be between "
            f"{MIN_WORD_LENGTH} and {MAX_WORD_LENGTH}"
        )
    return word_length


def get_topology(word_length: int) -> GridTopology:
    return TOPOLOGIES[validate_word_length(word_length)]


def grid_size_for(word_length: int) -> int:
    return get_topology(word_length).grid_size
