"""Facade exposing the two public operations to the network and UI layers.

Engines raise :class:`PuzzleError` subclasses; this module turns them into
explicit result values so callers never have to catch anything.
"""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .core.exceptions import (
    EmptyInputError,
    GenerationExhaustedError,
    InvalidDifficultyError,
    LayoutFailedError,
    NotFoundError,
)
from .core.models import Layout, Puzzle
from .data.lexicon import LexiconIndex
from .engine.candidates import WordFilter, can_form_word
from .engine.generator import GeneratorConfig, PuzzleGenerator
from .engine.layout import CrosswordLayoutEngine, LayoutConfig
from .engine.recency import RecencyCache
from .engine.validator import LayoutValidator
from .utils.logger import get_logger


LOGGER = get_logger(__name__)


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    GENERATION_EXHAUSTED = "generation_exhausted"
    INVALID_DIFFICULTY = "invalid_difficulty"
    LAYOUT_FAILED = "layout_failed"
    EMPTY_INPUT = "empty_input"


@dataclass
class PuzzleResult:
    puzzle: Optional[Puzzle] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.puzzle is not None


@dataclass
class LayoutResult:
    layout: Optional[Layout] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.layout is not None


class PuzzleService:
    """Owns the shared lexicon, recency cache and RNG.

    ``generate_puzzle`` runs under a lock because the RNG and the recency
    cache are shared between calls; ``layout_crossword`` keeps no state
    across calls.
    """

    def __init__(
        self,
        lexicon: LexiconIndex,
        generator_config: Optional[GeneratorConfig] = None,
        layout_config: Optional[LayoutConfig] = None,
        rng: Optional[random.Random] = None,
        recency: Optional[RecencyCache] = None,
        word_filters: Optional[Sequence[WordFilter]] = None,
    ) -> None:
        self.lexicon = lexicon
        self.generator_config = generator_config or GeneratorConfig()
        self.layout_config = layout_config or LayoutConfig(case_map=dict(lexicon.config.case_map))
        self.rng = rng or random.Random(self.generator_config.seed)
        self.recency = recency or RecencyCache(self.generator_config.recency_capacity)
        self.generator = PuzzleGenerator(
            lexicon,
            self.generator_config,
            recency=self.recency,
            rng=self.rng,
            word_filters=word_filters,
        )
        self.layout_validator = LayoutValidator()
        self._lock = threading.Lock()

    def generate_puzzle(self, difficulty: int) -> PuzzleResult:
        with self._lock:
            try:
                return PuzzleResult(puzzle=self.generator.generate(difficulty))
            except InvalidDifficultyError as exc:
                return PuzzleResult(error=ErrorKind.INVALID_DIFFICULTY, message=str(exc))
            except NotFoundError as exc:
                LOGGER.error("Puzzle generation failed: %s", exc)
                return PuzzleResult(error=ErrorKind.NOT_FOUND, message=str(exc))
            except GenerationExhaustedError as exc:
                return PuzzleResult(error=ErrorKind.GENERATION_EXHAUSTED, message=str(exc))

    def layout_crossword(self, words: Sequence[str]) -> LayoutResult:
        engine = CrosswordLayoutEngine(self.layout_config)
        try:
            layout = engine.layout(words)
        except EmptyInputError as exc:
            return LayoutResult(error=ErrorKind.EMPTY_INPUT, message=str(exc))
        except LayoutFailedError as exc:
            return LayoutResult(error=ErrorKind.LAYOUT_FAILED, message=str(exc))

        validation = self.layout_validator.validate(layout)
        if not validation.ok:
            return LayoutResult(
                error=ErrorKind.LAYOUT_FAILED,
                message="; ".join(validation.messages),
            )
        return LayoutResult(layout=layout)

    def check_word(self, puzzle: Puzzle, guess: str) -> int:
        """Points for ``guess``: its length when it is one of the puzzle's words."""

        word = self.lexicon.normalize(guess)
        if word not in puzzle.words or not can_form_word(word, puzzle.letters):
            return 0
        return len(word)
