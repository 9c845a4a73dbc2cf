"""Drag gesture state owned by the input layer."""

from __future__ import annotations

from typing import Optional

from ..core.constants import Coord
from ..core.models import PuzzleState
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


class DragSession:
    """Tracks the tile picked up during one drag and completes the swap.

    ``target`` is anything exposing ``is_swap_allowed`` / ``is_swappable`` and
    ``apply_swap`` (a :class:`~wordgrid.engine.state.PuzzleStateMachine` or a
    :class:`~wordgrid.engine.game.GameSession`).
    """

    def __init__(self, target) -> None:
        self.target = target
        self.origin: Optional[Coord] = None

    @property
    def active(self) -> bool:
        return self.origin is not None

    def start(self, coord: Coord) -> bool:
        if self.active:
            return False
        if not self.target.is_swappable(coord):
            return False
        self.origin = coord
        return True

    def finish(self, drop: Optional[Coord]) -> Optional[PuzzleState]:
        """Drop the dragged tile on ``drop``; returns the new state if swapped."""
        origin, self.origin = self.origin, None
        if origin is None or drop is None:
            return None
        if not self.target.is_swap_allowed(origin, drop):
            LOGGER.debug("Rejected swap %s -> %s", origin, drop)
            return None
        return self.target.apply_swap(origin, drop)

    def cancel(self) -> None:
        self.origin = None
