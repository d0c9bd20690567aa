"""Scoring of admissible puzzle candidates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from ..core.models import PuzzleCandidate
from ..data.lexicon import LexiconIndex


class LetterWeighting(Protocol):
    """Rates how distinctive a letter set is, between 0 and 1."""

    def weight(self, letters: Sequence[str]) -> float:  # pragma: no cover - protocol
        ...


class UniformLetterWeighting:
    """Treat every letter alike; disables the rarity term."""

    def weight(self, letters: Sequence[str]) -> float:
        return 0.0


class LexiconLetterWeighting:
    """Rarer letters in the lexicon rate higher.

    Each distinct letter scores ``1 - freq / max_freq``; the weight is the
    mean over the distinct letters.
    """

    def __init__(self, lexicon: LexiconIndex) -> None:
        self.lexicon = lexicon

    def weight(self, letters: Sequence[str]) -> float:
        distinct = set(letters)
        peak = self.lexicon.max_letter_frequency
        if not distinct or peak <= 0.0:
            return 0.0
        rarity = [1.0 - self.lexicon.letter_frequency(char) / peak for char in distinct]
        return sum(rarity) / len(rarity)


@dataclass
class ScoreWeights:
    word_count: float = 1.0
    average_length: float = 1.5
    length_diversity: float = 1.0
    letter_rarity: float = 2.0
    unique_letters: float = 0.5


class PuzzleScorer:
    """Weighted combination of size, length and letter-set terms."""

    def __init__(
        self,
        weights: Optional[ScoreWeights] = None,
        letter_weighting: Optional[LetterWeighting] = None,
    ) -> None:
        self.weights = weights or ScoreWeights()
        self.letter_weighting = letter_weighting or UniformLetterWeighting()

    def score(self, candidate: PuzzleCandidate) -> float:
        words = candidate.words
        if not words:
            return 0.0
        w = self.weights
        average = sum(len(word) for word in words) / len(words)
        total = (
            w.word_count * len(words)
            + w.average_length * average
            + w.length_diversity * candidate.diversity
            + w.letter_rarity * self.letter_weighting.weight(candidate.letters)
            + w.unique_letters * len(set(candidate.letters))
        )
        return round(total, 6)
