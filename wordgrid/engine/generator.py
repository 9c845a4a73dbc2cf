"""Puzzle generation orchestration.

Stages run in order, each on its own copy of the previous output:
  1. Topology lookup for the configured word length.
  2. Word assignment from a freshly fetched candidate pool.
  3. Projection onto the answer grid.
  4. Scrambling into the starting play grid.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Union

from ..core.constants import (
    DEFAULT_MAX_SCRAMBLE_ATTEMPTS,
    DEFAULT_SWAP_BUDGET,
    DIFFICULTY_SWAPS,
    Difficulty,
    Strategy,
)
from ..core.exceptions import AssignmentExhausted, ConfigurationError, UnrecognizedDifficulty
from ..core.models import AssignmentResult, Puzzle
from ..data.words import WordSource
from ..utils.logger import get_logger
from .assigner import WordAssigner
from .projector import project
from .scrambler import Scrambler
from .solver import solve_assignment
from .state import PuzzleStateMachine
from .topology import GridTopology, get_topology

LOGGER = get_logger(__name__)


def resolve_difficulty(difficulty: Union[str, Difficulty]) -> Difficulty:
    try:
        return Difficulty(str(getattr(difficulty, "value", difficulty)).strip().lower())
    except ValueError as exc:
        raise UnrecognizedDifficulty(
            f"Unrecognised difficulty rating {difficulty!r} "
            f"(expected one of {', '.join(d.value for d in Difficulty)})"
        ) from exc


def swap_count_for(difficulty: Union[str, Difficulty]) -> int:
    return DIFFICULTY_SWAPS[resolve_difficulty(difficulty)]


@dataclass
class GeneratorConfig:
    word_length: int
    difficulty: str = Difficulty.MEDIUM.value
    swap_budget: int = DEFAULT_SWAP_BUDGET
    seed: Optional[int] = None
    retry_limit: int = 3
    max_scramble_attempts: int = DEFAULT_MAX_SCRAMBLE_ATTEMPTS
    strategy: str = Strategy.BACKTRACKING.value
    solver_timeout: float = 10.0

    def topology(self) -> GridTopology:
        return get_topology(self.word_length)

    def swap_count(self) -> int:
        return swap_count_for(self.difficulty)

    def validate(self) -> None:
        """Raise a :class:`ConfigurationError` before any work is done."""
        self.topology()
        self.swap_count()
        if self.swap_budget < 1:
            raise ConfigurationError(f"Swap budget must be at least 1, got {self.swap_budget}")
        if self.retry_limit < 1:
            raise ConfigurationError(f"Retry limit must be at least 1, got {self.retry_limit}")
        try:
            Strategy(self.strategy)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown assignment strategy {self.strategy!r}") from exc


class PuzzleGenerator:
    """High-level orchestrator: fetch, assign, project, scramble."""

    def __init__(
        self,
        config: GeneratorConfig,
        word_source: WordSource,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.word_source = word_source
        self.rng = rng or random.Random(config.seed)

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(self) -> Puzzle:
        config = self.config
        config.validate()
        topology = config.topology()
        difficulty = resolve_difficulty(config.difficulty)
        swap_count = DIFFICULTY_SWAPS[difficulty]

        for attempt in range(1, config.retry_limit + 1):
            LOGGER.info(
                "Generation attempt %s/%s (length=%d, difficulty=%s)",
                attempt,
                config.retry_limit,
                config.word_length,
                difficulty.value,
            )
            candidates = self.word_source.fetch_candidates(config.word_length)
            result = self._assign(candidates, topology)
            if not result.success:
                LOGGER.warning(
                    "No grid assignment found in %d candidates (%d placements tried)",
                    len(candidates),
                    result.steps,
                )
                continue

            words = tuple(w for w in result.words if w is not None)
            answer = project(words, topology)
            scrambler = Scrambler(rng=self.rng, max_attempts=config.max_scramble_attempts)
            scrambled = scrambler.scramble(answer, swap_count)
            LOGGER.info(
                "Puzzle ready: %s, %d swaps, %d unresolved cells",
                ", ".join(words),
                scrambled.swaps_made,
                len(scrambled.unresolved),
            )
            return Puzzle(
                word_length=config.word_length,
                difficulty=difficulty.value,
                words=words,
                answer=answer,
                play=scrambled.grid,
                unresolved=scrambled.unresolved,
                swaps_requested=swap_count,
                swaps_made=scrambled.swaps_made,
                seed=config.seed,
            )

        raise AssignmentExhausted(
            f"Unable to build grid after {config.retry_limit} attempts; try a new game"
        )

    def new_state_machine(self, puzzle: Puzzle) -> PuzzleStateMachine:
        return PuzzleStateMachine(
            answer=puzzle.answer,
            play=puzzle.play,
            unresolved=puzzle.unresolved,
            swap_budget=self.config.swap_budget,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _assign(self, candidates, topology: GridTopology) -> AssignmentResult:
        if Strategy(self.config.strategy) == Strategy.CPSAT:
            solver_seed = None
            if self.config.seed is not None:
                solver_seed = self.rng.randint(0, 1_000_000)
            return solve_assignment(
                candidates,
                topology,
                timeout=self.config.solver_timeout,
                random_seed=solver_seed,
            )
        return WordAssigner(topology).assign(candidates)
