"""CLI entrypoint for the word grid swap puzzle."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from wordgrid.core.constants import DEFAULT_SWAP_BUDGET, Difficulty, Strategy
from wordgrid.core.exceptions import (
    AssignmentExhausted,
    CollaboratorError,
    ConfigurationError,
    DefinitionFetchFailed,
)
from wordgrid.data.words import RandomWordApiSource, StaticWordSource, WordSource, parse_words_file
from wordgrid.engine.game import GameSession
from wordgrid.engine.generator import GeneratorConfig, PuzzleGenerator
from wordgrid.io.definitions import DictionaryApiClient
from wordgrid.io.input_session import DragSession
from wordgrid.utils.logger import configure_logging, get_logger
from wordgrid.utils.pretty import TextRenderer, format_answer, format_state, print_definitions

LOGGER = get_logger("wordgrid.cli")

Move = Tuple[Tuple[int, int], Tuple[int, int]]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate and play word grid swap puzzles",
    )
    parser.add_argument(
        "--length",
        type=int,
        default=5,
        help="Word length / grid size (3-7)",
    )
    parser.add_argument(
        "--difficulty",
        type=str,
        default=Difficulty.MEDIUM.value,
        help="Scramble difficulty (easy, medium, hard)",
    )
    parser.add_argument(
        "--swap-budget",
        type=int,
        default=DEFAULT_SWAP_BUDGET,
        help="Number of swaps the player may make",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--retry-limit", type=int, default=3, help="Candidate fetches before giving up")
    parser.add_argument(
        "--strategy",
        type=str,
        choices=[s.value for s in Strategy],
        default=Strategy.BACKTRACKING.value,
        help="Word assignment strategy",
    )
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Explicit candidate words instead of the random word API",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one candidate word per line (# comments and blank lines ignored)",
    )
    parser.add_argument("--play", action="store_true", help="Play the puzzle in the terminal")
    parser.add_argument(
        "--no-definitions",
        action="store_true",
        help="Skip fetching definitions when the game ends",
    )
    parser.add_argument("--color", action="store_true", help="Colour the board with ANSI codes")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_word_source(args: argparse.Namespace) -> WordSource:
    user_words: List[str] = []
    if args.words:
        user_words.extend(args.words)
    if args.words_file:
        user_words.extend(parse_words_file(args.words_file))
    if user_words:
        return StaticWordSource(user_words, shuffle=True, rng=random.Random(args.seed))
    return RandomWordApiSource()


def parse_move(line: str) -> Optional[Move]:
    parts = line.replace(",", " ").split()
    if len(parts) != 4:
        return None
    try:
        r1, c1, r2, c2 = (int(part) for part in parts)
    except ValueError:
        return None
    return (r1, c1), (r2, c2)


def play(
    session: GameSession,
    read: Callable[[str], str] = input,
    stream=None,
    show_definitions: bool = True,
) -> None:
    """Interactive loop: each move is ``row col row col``; ``q`` quits."""

    stream = stream or sys.stdout
    while not session.finished:
        try:
            line = read("Swap (row col row col, q to quit): ")
        except EOFError:
            break
        if line.strip().lower() in {"q", "quit", "exit"}:
            break
        move = parse_move(line)
        if move is None:
            print("Enter two cells as: row col row col", file=stream)
            continue
        drag = DragSession(session)
        drag.start(move[0])
        if drag.finish(move[1]) is None:
            print("That swap is not allowed", file=stream)

    if not session.finished:
        print("Solution:", file=stream)
        print(format_answer(session.puzzle.answer), file=stream)
        return

    print(format_state(session.state), file=stream)
    if show_definitions:
        try:
            print_definitions(session.definitions(), stream=stream)
        except DefinitionFetchFailed as exc:
            LOGGER.error("Unable to fetch definitions: %s", exc)
            print("Unable to fetch definitions. Please check your internet connection.", file=stream)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    config = GeneratorConfig(
        word_length=args.length,
        difficulty=args.difficulty,
        swap_budget=args.swap_budget,
        seed=args.seed,
        retry_limit=args.retry_limit,
        strategy=args.strategy,
    )
    try:
        config.validate()
    except ConfigurationError as exc:
        parser.error(str(exc))

    generator = PuzzleGenerator(config, build_word_source(args))
    render_sink = TextRenderer(config.word_length, color=args.color) if args.play else None
    definition_source = None if args.no_definitions else DictionaryApiClient()

    try:
        session = GameSession.start(
            generator, render_sink=render_sink, definition_source=definition_source
        )
    except AssignmentExhausted as exc:
        print(f"Unable to build grid: {exc}", file=sys.stderr)
        return 2
    except CollaboratorError as exc:
        print(f"Could not fetch words: {exc}", file=sys.stderr)
        return 1

    payload = session.puzzle.to_jsonable()
    if args.output:
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")

    if args.play:
        play(session, show_definitions=not args.no_definitions)
    elif not args.output:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
