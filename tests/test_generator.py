import unittest
from unittest.mock import MagicMock

from wordgrid.core.constants import Outcome
from wordgrid.core.exceptions import (
    AssignmentExhausted,
    CandidateFetchFailed,
    ConfigurationError,
    InvalidWordLength,
    UnrecognizedDifficulty,
)
from wordgrid.data.words import StaticWordSource
from wordgrid.engine.assigner import satisfies
from wordgrid.engine.generator import (
    GeneratorConfig,
    PuzzleGenerator,
    resolve_difficulty,
    swap_count_for,
)
from wordgrid.engine.topology import get_topology

FOUR_LETTER_POOL = ["CARE", "RISE", "CORN", "ROSE", "MILK", "BOAT"]


class DifficultyTests(unittest.TestCase):
    def test_mapping(self) -> None:
        self.assertEqual(swap_count_for("easy"), 6)
        self.assertEqual(swap_count_for("medium"), 8)
        self.assertEqual(swap_count_for("hard"), 10)

    def test_case_insensitive(self) -> None:
        self.assertEqual(swap_count_for("HARD"), 10)
        self.assertEqual(resolve_difficulty(" Easy ").value, "easy")

    def test_unknown_difficulty(self) -> None:
        with self.assertRaises(UnrecognizedDifficulty) as ctx:
            swap_count_for("extreme")
        self.assertIn("extreme", str(ctx.exception))


class GeneratorConfigTests(unittest.TestCase):
    def test_validate_rejects_bad_values(self) -> None:
        bad_configs = [
            GeneratorConfig(word_length=8),
            GeneratorConfig(word_length=4, difficulty="insane"),
            GeneratorConfig(word_length=4, swap_budget=0),
            GeneratorConfig(word_length=4, retry_limit=0),
            GeneratorConfig(word_length=4, strategy="greedy"),
        ]
        for config in bad_configs:
            with self.subTest(config=config):
                with self.assertRaises(ConfigurationError):
                    config.validate()


class PuzzleGeneratorTests(unittest.TestCase):
    def test_generates_four_letter_puzzle(self) -> None:
        config = GeneratorConfig(word_length=4, difficulty="easy", seed=11)
        puzzle = PuzzleGenerator(config, StaticWordSource(FOUR_LETTER_POOL)).generate()
        self.assertEqual(puzzle.words, ("CARE", "RISE", "CORN", "ROSE"))
        self.assertEqual(len(puzzle.answer), 4)
        self.assertTrue(all(len(row) == 4 for row in puzzle.answer))
        self.assertEqual(puzzle.swaps_requested, 6)
        self.assertTrue(puzzle.unresolved)
        for r, c in puzzle.unresolved:
            self.assertNotEqual(puzzle.play[r][c], puzzle.answer[r][c])
        self.assertTrue(satisfies(puzzle.words, get_topology(4)))

    def test_same_seed_same_puzzle(self) -> None:
        config = GeneratorConfig(word_length=4, difficulty="hard", seed=5)
        first = PuzzleGenerator(config, StaticWordSource(FOUR_LETTER_POOL)).generate()
        second = PuzzleGenerator(config, StaticWordSource(FOUR_LETTER_POOL)).generate()
        self.assertEqual(first.to_jsonable(), second.to_jsonable())

    def test_unknown_difficulty_fails_before_fetch(self) -> None:
        source = MagicMock()
        config = GeneratorConfig(word_length=4, difficulty="impossible")
        with self.assertRaises(UnrecognizedDifficulty):
            PuzzleGenerator(config, source).generate()
        source.fetch_candidates.assert_not_called()

    def test_invalid_length_fails_before_fetch(self) -> None:
        source = MagicMock()
        with self.assertRaises(InvalidWordLength):
            PuzzleGenerator(GeneratorConfig(word_length=2), source).generate()
        source.fetch_candidates.assert_not_called()

    def test_exhausted_after_retries(self) -> None:
        source = MagicMock()
        source.fetch_candidates.return_value = ["CARE", "RISE", "CORN"]
        config = GeneratorConfig(word_length=4, retry_limit=3)
        with self.assertRaises(AssignmentExhausted) as ctx:
            PuzzleGenerator(config, source).generate()
        self.assertTrue(ctx.exception.retryable)
        self.assertEqual(source.fetch_candidates.call_count, 3)

    def test_retry_uses_fresh_candidates(self) -> None:
        source = MagicMock()
        source.fetch_candidates.side_effect = [["CARE"], FOUR_LETTER_POOL]
        puzzle = PuzzleGenerator(GeneratorConfig(word_length=4, seed=1), source).generate()
        self.assertEqual(puzzle.words[0], "CARE")
        self.assertEqual(source.fetch_candidates.call_count, 2)

    def test_fetch_failure_propagates(self) -> None:
        source = MagicMock()
        source.fetch_candidates.side_effect = CandidateFetchFailed("offline")
        with self.assertRaises(CandidateFetchFailed):
            PuzzleGenerator(GeneratorConfig(word_length=4), source).generate()

    def test_state_machine_uses_swap_budget(self) -> None:
        config = GeneratorConfig(word_length=4, seed=2, swap_budget=9)
        generator = PuzzleGenerator(config, StaticWordSource(FOUR_LETTER_POOL))
        puzzle = generator.generate()
        machine = generator.new_state_machine(puzzle)
        self.assertEqual(machine.state.remaining_swaps, 9)
        self.assertEqual(machine.state.outcome, Outcome.IN_PROGRESS)
        self.assertEqual(set(machine.state.unresolved_cells), puzzle.unresolved)

    def test_to_jsonable(self) -> None:
        config = GeneratorConfig(word_length=4, seed=3)
        payload = PuzzleGenerator(config, StaticWordSource(FOUR_LETTER_POOL)).generate().to_jsonable()
        self.assertEqual(payload["word_length"], 4)
        self.assertEqual(payload["difficulty"], "medium")
        self.assertEqual(payload["answer"][1], ["O", None, "O", None])
        self.assertEqual(payload["seed"], 3)
        self.assertTrue(all(len(coord) == 2 for coord in payload["unresolved"]))


class CpSatStrategyTests(unittest.TestCase):
    def test_cpsat_strategy_builds_valid_puzzle(self) -> None:
        config = GeneratorConfig(word_length=3, strategy="cpsat", seed=4, solver_timeout=5.0)
        source = StaticWordSource(["CAT", "WEB", "COW", "TAB", "DOG", "ZIP"])
        puzzle = PuzzleGenerator(config, source).generate()
        self.assertEqual(len(set(puzzle.words)), 4)
        self.assertTrue(satisfies(puzzle.words, get_topology(3)))

    def test_cpsat_strategy_accepts_large_seed(self) -> None:
        config = GeneratorConfig(word_length=3, strategy="cpsat", seed=2**40, solver_timeout=5.0)
        source = StaticWordSource(["CAT", "WEB", "COW", "TAB", "DOG", "ZIP"])
        first = PuzzleGenerator(config, source).generate()
        second = PuzzleGenerator(config, source).generate()
        self.assertTrue(satisfies(first.words, get_topology(3)))
        self.assertEqual(first.to_jsonable(), second.to_jsonable())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
