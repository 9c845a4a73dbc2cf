"""A single game: state machine plus its render and definition collaborators."""

from __future__ import annotations

from typing import List, Optional

from ..core.constants import Coord
from ..core.exceptions import RenderFailure
from ..core.models import Puzzle, PuzzleState, WordDefinition
from ..io.definitions import DefinitionSource
from ..utils.logger import get_logger
from ..utils.pretty import RenderSink
from .generator import PuzzleGenerator
from .state import PuzzleStateMachine

LOGGER = get_logger(__name__)


class GameSession:
    """Drives the render sink and shields engine state from its failures."""

    def __init__(
        self,
        puzzle: Puzzle,
        machine: PuzzleStateMachine,
        render_sink: Optional[RenderSink] = None,
        definition_source: Optional[DefinitionSource] = None,
    ) -> None:
        self.puzzle = puzzle
        self.machine = machine
        self.render_sink = render_sink
        self.definition_source = definition_source
        self.last_render_error: Optional[RenderFailure] = None
        self._definitions: Optional[List[WordDefinition]] = None

    @classmethod
    def start(
        cls,
        generator: PuzzleGenerator,
        render_sink: Optional[RenderSink] = None,
        definition_source: Optional[DefinitionSource] = None,
    ) -> "GameSession":
        """Generate a puzzle and draw its first board.

        Configuration, fetch and assignment errors propagate before any
        session exists.
        """
        puzzle = generator.generate()
        session = cls(
            puzzle,
            generator.new_state_machine(puzzle),
            render_sink=render_sink,
            definition_source=definition_source,
        )
        session.refresh()
        return session

    @property
    def state(self) -> PuzzleState:
        return self.machine.state

    @property
    def finished(self) -> bool:
        return self.machine.outcome.is_terminal

    def is_swappable(self, coord: Coord) -> bool:
        return self.machine.is_swappable(coord)

    def is_swap_allowed(self, first: Coord, second: Coord) -> bool:
        return self.machine.is_swap_allowed(first, second)

    def apply_swap(self, first: Coord, second: Coord) -> PuzzleState:
        state = self.machine.apply_swap(first, second)
        self.refresh()
        if state.outcome.is_terminal:
            LOGGER.info(
                "Game over: %s with %d swaps remaining", state.outcome.value, state.remaining_swaps
            )
        return state

    def refresh(self) -> bool:
        """Send the full board to the render sink; False if drawing failed."""
        if self.render_sink is None:
            return True
        try:
            self.render_sink.render(self.machine.board(), self.machine.state)
        except Exception as exc:  # sink may raise anything
            LOGGER.error("Failed to draw grid: %s", exc)
            self.last_render_error = RenderFailure(str(exc))
            return False
        self.last_render_error = None
        return True

    def definitions(self) -> List[WordDefinition]:
        """Fetch definitions for the grid words once the game is over.

        Raises :class:`~wordgrid.core.exceptions.DefinitionFetchFailed` when
        the batch fails; the game state is unaffected.
        """
        if not self.finished:
            raise RuntimeError("Definitions are only available once the game has ended")
        if self.definition_source is None:
            return []
        if self._definitions is None:
            self._definitions = self.definition_source.fetch_definitions(list(self.puzzle.words))
        return self._definitions
