"""CLI entrypoint: generate a letter puzzle and optionally lay it out."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict

from letterpuzzle.core.constants import SUPPORTED_DIFFICULTIES
from letterpuzzle.core.exceptions import LexiconLoadError
from letterpuzzle.data.lexicon import LexiconConfig, LexiconIndex
from letterpuzzle.engine.candidates import VowelAdjacencyFilter
from letterpuzzle.engine.generator import GeneratorConfig
from letterpuzzle.engine.layout import LayoutConfig
from letterpuzzle.service import PuzzleService
from letterpuzzle.utils.logger import configure_logging
from letterpuzzle.utils.pretty import pretty_print_layout, print_puzzle_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a letter puzzle and its crossword layout",
    )
    parser.add_argument(
        "--lexicon",
        type=Path,
        required=True,
        help="Word list, one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--difficulty",
        type=int,
        choices=SUPPORTED_DIFFICULTIES,
        default=5,
        help="Number of letters in the puzzle",
    )
    parser.add_argument(
        "--alphabet",
        choices=["turkish", "english"],
        default="turkish",
        help="Permitted alphabet and case rules for the lexicon",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--max-attempts", type=int, default=500, help="Seed words to try")
    parser.add_argument("--layout", action="store_true", help="Also lay the words out as a crossword")
    parser.add_argument(
        "--no-adjacent-vowels",
        action="store_true",
        help="Reject words containing two vowels side by side",
    )
    parser.add_argument(
        "--shuffle-letters",
        action="store_true",
        help="Shuffle the returned letters instead of keeping seed-word order",
    )
    parser.add_argument(
        "--allow-disjoint",
        action="store_true",
        help="Allow words that cross nothing when no connected layout exists",
    )
    parser.add_argument("--pretty", action="store_true", help="Print a readable grid instead of JSON")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    lexicon_config = LexiconConfig.english() if args.alphabet == "english" else LexiconConfig()
    try:
        lexicon = LexiconIndex.from_path(args.lexicon, lexicon_config)
    except LexiconLoadError as exc:
        parser.error(str(exc))

    filters = [VowelAdjacencyFilter(lexicon_config.vowels)] if args.no_adjacent_vowels else []
    service = PuzzleService(
        lexicon,
        generator_config=GeneratorConfig(
            max_attempts=args.max_attempts,
            shuffle_letters=args.shuffle_letters,
            seed=args.seed,
        ),
        layout_config=LayoutConfig(
            allow_disjoint_fallback=args.allow_disjoint,
            case_map=dict(lexicon_config.case_map),
            seed=args.seed,
        ),
        word_filters=filters,
    )

    result = service.generate_puzzle(args.difficulty)
    payload: Dict[str, Any] = {}
    if not result.ok:
        payload["error"] = {"kind": result.error.value, "message": result.message}
    else:
        payload["puzzle"] = result.puzzle.to_jsonable()
        if args.layout:
            layout_result = service.layout_crossword(result.puzzle.words)
            if layout_result.ok:
                payload["layout"] = layout_result.layout.to_jsonable()
            else:
                payload["error"] = {
                    "kind": layout_result.error.value,
                    "message": layout_result.message,
                }
            if args.pretty:
                print_puzzle_stats(result.puzzle)
                if layout_result.ok:
                    pretty_print_layout(layout_result.layout)
        elif args.pretty:
            print_puzzle_stats(result.puzzle)

    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    elif not args.pretty:
        print(output_text)
    return 1 if "error" in payload else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
