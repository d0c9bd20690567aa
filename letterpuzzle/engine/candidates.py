"""Enumerate lexicon words constructible from a letter multiset."""

from __future__ import annotations

from collections import Counter
from itertools import combinations
from typing import FrozenSet, Iterable, List, Optional, Protocol, Sequence, Set

from ..core.constants import MIN_WORD_LENGTH, TURKISH_VOWELS
from ..data.lexicon import LexiconIndex
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def can_form_word(word: str, letters: Sequence[str]) -> bool:
    """Return True when every letter of ``word`` can be taken from ``letters``.

    Letters are consumed one for one from a scratch copy, so a word needing
    two ``E`` is rejected when ``letters`` holds only one.
    """

    available = list(letters)
    for char in word:
        try:
            available.remove(char)
        except ValueError:
            return False
    return True


class WordFilter(Protocol):
    """Pluggable readability rule applied to every candidate word."""

    def accepts(self, word: str) -> bool:  # pragma: no cover - protocol
        ...


class VowelAdjacencyFilter:
    """Reject words with two vowels side by side."""

    def __init__(self, vowels: Iterable[str] = TURKISH_VOWELS) -> None:
        self.vowels: FrozenSet[str] = frozenset(vowels)

    def accepts(self, word: str) -> bool:
        for left, right in zip(word, word[1:]):
            if left in self.vowels and right in self.vowels:
                return False
        return True


class CandidateGenerator:
    """Find every lexicon word buildable from a small letter multiset.

    The multiset holds at most seven distinct letters, so all non-empty
    subsets of them are enumerated and used as keys into the lexicon's
    distinct-letter index. Signatures collapse repeated letters, so each
    hit is confirmed with an exact consumption check.
    """

    def __init__(
        self,
        lexicon: LexiconIndex,
        filters: Optional[Sequence[WordFilter]] = None,
        min_length: int = MIN_WORD_LENGTH,
    ) -> None:
        self.lexicon = lexicon
        self.filters: List[WordFilter] = list(filters or [])
        self.min_length = min_length

    def generate(self, letters: Sequence[str], max_length: Optional[int] = None) -> List[str]:
        if not letters:
            return []
        limit = len(letters) if max_length is None else max_length
        counts = Counter(letters)
        distinct = sorted(counts)

        found: Set[str] = set()
        for size in range(1, len(distinct) + 1):
            for subset in combinations(distinct, size):
                key = "".join(subset)
                for sig in self.lexicon.signatures_for_letter_set(key):
                    if not self.min_length <= len(sig) <= limit:
                        continue
                    if not can_form_word(sig, letters):
                        continue
                    for word in self.lexicon.lookup_by_signature(sig):
                        if self._passes_filters(word):
                            found.add(word)

        words = sorted(found, key=self.lexicon.sort_key)
        LOGGER.debug("Letters %s yield %d candidates", "".join(letters), len(words))
        return words

    def _passes_filters(self, word: str) -> bool:
        return all(rule.accepts(word) for rule in self.filters)
