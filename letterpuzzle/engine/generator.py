"""Puzzle generation: seed drawing, candidate search and selection.

Each attempt draws a fresh seed word of the requested length, enumerates
the words its letters can build, filters them for admissibility and scores
what survives. Once enough candidates are collected (or the budget runs
out) one of the best is picked at random and remembered in the recency
cache.
"""

from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.constants import MAX_DIFFICULTY, MIN_DIFFICULTY
from ..core.exceptions import GenerationExhaustedError, InvalidDifficultyError, NotFoundError
from ..core.models import Puzzle, PuzzleCandidate
from ..data.lexicon import LexiconIndex
from ..data.normalization import signature
from ..utils.logger import get_logger
from .admissibility import AdmissibilityConfig, AdmissibilityFilter
from .candidates import CandidateGenerator, WordFilter
from .recency import RecencyCache
from .scoring import LexiconLetterWeighting, PuzzleScorer, ScoreWeights


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    min_difficulty: int = MIN_DIFFICULTY
    max_difficulty: int = MAX_DIFFICULTY
    max_attempts: int = 500
    time_budget_seconds: Optional[float] = None
    target_candidates: int = 20
    top_k: int = 10
    tie_tolerance: float = 0.5
    recency_capacity: int = 50
    recency_reset_fraction: float = 0.1
    shuffle_letters: bool = False
    admissibility: AdmissibilityConfig = field(default_factory=AdmissibilityConfig)
    score_weights: ScoreWeights = field(default_factory=ScoreWeights)
    seed: Optional[int] = None

    def supports(self, difficulty: int) -> bool:
        return self.min_difficulty <= difficulty <= self.max_difficulty


class PuzzleGenerator:
    """Drives candidate generation, admissibility filtering and selection."""

    def __init__(
        self,
        lexicon: LexiconIndex,
        config: Optional[GeneratorConfig] = None,
        recency: Optional[RecencyCache] = None,
        rng: Optional[random.Random] = None,
        word_filters: Optional[Sequence[WordFilter]] = None,
        scorer: Optional[PuzzleScorer] = None,
    ) -> None:
        self.lexicon = lexicon
        self.config = config or GeneratorConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.recency = recency or RecencyCache(self.config.recency_capacity)
        self.candidates = CandidateGenerator(
            lexicon,
            filters=word_filters,
            min_length=lexicon.config.min_length,
        )
        self.admissibility = AdmissibilityFilter(
            self.config.admissibility, sort_key=lexicon.sort_key
        )
        self.scorer = scorer or PuzzleScorer(
            self.config.score_weights, LexiconLetterWeighting(lexicon)
        )

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, difficulty: int) -> Puzzle:
        if not self.config.supports(difficulty):
            raise InvalidDifficultyError(
                f"Difficulty {difficulty} outside "
                f"[{self.config.min_difficulty}, {self.config.max_difficulty}]"
            )

        pool = self.lexicon.words_of_length(difficulty)
        if not pool:
            raise NotFoundError(f"No lexicon words of length {difficulty}")

        deadline = None
        if self.config.time_budget_seconds is not None:
            deadline = time.monotonic() + self.config.time_budget_seconds

        fresh, recent = self._split_seeds(difficulty, pool)
        collected, attempts = self._collect(difficulty, fresh, deadline, 0)
        if not collected and recent:
            LOGGER.info(
                "No fresh seed worked for difficulty %s; trying %d recent seeds",
                difficulty,
                len(recent),
            )
            collected, attempts = self._collect(difficulty, recent, deadline, attempts)
        if not collected:
            LOGGER.warning(
                "No admissible puzzle for difficulty %s after %d attempts",
                difficulty,
                attempts,
            )
            raise GenerationExhaustedError(
                f"No admissible puzzle of difficulty {difficulty} within {attempts} attempts"
            )

        chosen = self._select(collected)
        self.recency.record(difficulty, signature(chosen.seed_word))
        LOGGER.info(
            "Puzzle found for difficulty %s (%d attempts, %d candidates): letters=%s words=%s",
            difficulty,
            attempts,
            len(collected),
            "".join(chosen.letters),
            ", ".join(chosen.words),
        )
        return Puzzle(
            letters=list(chosen.letters),
            words=list(chosen.words),
            difficulty=difficulty,
            seed_word=chosen.seed_word,
            score=chosen.score,
            attempts=attempts,
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _split_seeds(self, difficulty: int, pool: Sequence[str]) -> Tuple[List[str], List[str]]:
        """Shuffle the pool into fresh seeds and recently used ones.

        When too few fresh seeds remain the recency memory for this
        difficulty is cleared and the whole pool counts as fresh again.
        """

        fresh = [word for word in pool if self.recency.is_fresh(difficulty, signature(word))]
        floor = max(1, math.ceil(len(pool) * self.config.recency_reset_fraction))
        if len(fresh) < floor:
            LOGGER.warning(
                "Only %d/%d fresh seeds left for difficulty %s; resetting recency cache",
                len(fresh),
                len(pool),
                difficulty,
            )
            self.recency.reset(difficulty)
            fresh = list(pool)
        fresh_set = set(fresh)
        recent = [word for word in pool if word not in fresh_set]
        return self.rng.sample(fresh, len(fresh)), self.rng.sample(recent, len(recent))

    def _collect(
        self,
        difficulty: int,
        seeds: Sequence[str],
        deadline: Optional[float],
        attempts: int,
    ) -> Tuple[List[PuzzleCandidate], int]:
        collected: List[PuzzleCandidate] = []
        tried_signatures = set()
        for seed_word in seeds:
            if attempts >= self.config.max_attempts:
                break
            if deadline is not None and time.monotonic() > deadline:
                LOGGER.debug("Time budget exhausted after %d attempts", attempts)
                break
            sig = signature(seed_word)
            if sig in tried_signatures:
                continue
            tried_signatures.add(sig)
            attempts += 1

            candidate = self._attempt(difficulty, seed_word)
            if candidate is None:
                continue
            collected.append(candidate)
            if len(collected) >= self.config.target_candidates:
                break
        return collected, attempts

    def _attempt(self, difficulty: int, seed_word: str) -> Optional[PuzzleCandidate]:
        letters = list(seed_word)
        if self.config.shuffle_letters:
            self.rng.shuffle(letters)

        raw = self.candidates.generate(letters, max_length=difficulty)
        result = self.admissibility.apply(raw)
        if not result.ok:
            LOGGER.debug("Seed %s rejected: %s", seed_word, result.reason)
            return None

        candidate = PuzzleCandidate(letters=letters, words=result.words, seed_word=seed_word)
        candidate.score = self.scorer.score(candidate)
        return candidate

    def _select(self, collected: Sequence[PuzzleCandidate]) -> PuzzleCandidate:
        tolerance = self.config.tie_tolerance

        def rank(candidate: PuzzleCandidate):
            bucket = math.floor(candidate.score / tolerance) if tolerance > 0 else candidate.score
            return (-bucket, -candidate.diversity)

        ranked = sorted(collected, key=rank)
        top = ranked[: max(1, self.config.top_k)]
        return self.rng.choice(top)
