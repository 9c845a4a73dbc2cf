"""Word grid swap puzzle generator and game engine.

This package exposes the public API surface via:

- ``wordgrid.engine.generator.PuzzleGenerator``: builds scrambled puzzles.
- ``wordgrid.engine.state.PuzzleStateMachine``: swap budget and win/loss tracking.
- ``wordgrid.engine.game.GameSession``: one game wired to render and definition collaborators.
- ``wordgrid.data.words`` sources: candidate word providers.
"""

from .data.words import RandomWordApiSource, StaticWordSource
from .engine.game import GameSession
from .engine.generator import GeneratorConfig, PuzzleGenerator
from .engine.state import PuzzleStateMachine

__all__ = [
    "GameSession",
    "GeneratorConfig",
    "PuzzleGenerator",
    "PuzzleStateMachine",
    "RandomWordApiSource",
    "StaticWordSource",
]

__version__ = "0.1.0"
