"""Lexicon normalization and signature indexing."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Set

from ..core.constants import (
    ENGLISH_ALPHABET,
    ENGLISH_VOWELS,
    MIN_WORD_LENGTH,
    TURKISH_ALPHABET,
    TURKISH_CASE_MAP,
    TURKISH_VOWELS,
)
from ..core.exceptions import LexiconLoadError
from ..core.models import LexiconEntry
from ..utils.logger import get_logger
from .normalization import alphabet_sort_key, clean_word, letter_set_key, signature


LOGGER = get_logger(__name__)


@dataclass
class LexiconConfig:
    """Configuration for lexicon normalization."""

    alphabet: str = TURKISH_ALPHABET
    case_map: Mapping[str, str] = field(default_factory=lambda: dict(TURKISH_CASE_MAP))
    vowels: FrozenSet[str] = TURKISH_VOWELS
    min_length: int = MIN_WORD_LENGTH
    max_length: Optional[int] = None

    @classmethod
    def english(cls, **overrides) -> "LexiconConfig":
        values = dict(alphabet=ENGLISH_ALPHABET, case_map={}, vowels=ENGLISH_VOWELS)
        values.update(overrides)
        return cls(**values)


class LexiconIndex:
    """Normalized word list indexed by letter-multiset signature.

    The index is built once and never mutated afterwards, so concurrent
    readers need no locking.
    """

    def __init__(self, words: Iterable[str], config: Optional[LexiconConfig] = None) -> None:
        self.config = config or LexiconConfig()
        self.sort_key = alphabet_sort_key(self.config.alphabet)
        self._entries: Dict[str, LexiconEntry] = {}
        self._by_signature: Dict[str, Set[str]] = defaultdict(set)
        # distinct letters -> signatures built from exactly those letters
        self._by_letter_set: Dict[str, Set[str]] = defaultdict(set)
        self._by_length: Dict[int, List[str]] = {}
        self._letter_frequency: Dict[str, float] = {}
        self._build(words)

    @classmethod
    def from_words(cls, words: Iterable[str], config: Optional[LexiconConfig] = None) -> "LexiconIndex":
        return cls(words, config)

    @classmethod
    def from_path(cls, path: Path | str, config: Optional[LexiconConfig] = None) -> "LexiconIndex":
        """Load a UTF-8 word list, one entry per line.

        Blank lines and ``#`` comments are skipped; only the first
        tab-separated column is read so TSV exports work unchanged.
        """

        source = Path(path)
        if not source.exists():
            raise LexiconLoadError(f"Missing word list: {source}")
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LexiconLoadError(f"Unable to read word list {source}: {exc}") from exc

        words: List[str] = []
        for line in text.splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            words.append(line.split("\t", 1)[0])
        LOGGER.info("Read %d raw entries from %s", len(words), source)
        return cls(words, config)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------
    def _build(self, words: Iterable[str]) -> None:
        lengths: Dict[int, Set[str]] = defaultdict(set)
        histogram: Dict[str, int] = defaultdict(int)
        total_letters = 0
        skipped = 0
        for raw in words:
            word = self.normalize(raw)
            if not self._accepts(word):
                skipped += 1
                continue
            if word in self._entries:
                continue
            entry = LexiconEntry(word=word, signature=signature(word))
            self._entries[word] = entry
            self._by_signature[entry.signature].add(word)
            self._by_letter_set[letter_set_key(word)].add(entry.signature)
            lengths[len(word)].add(word)
            for char in word:
                histogram[char] += 1
                total_letters += 1

        self._by_length = {
            length: sorted(bucket, key=self.sort_key) for length, bucket in lengths.items()
        }
        if total_letters:
            self._letter_frequency = {
                char: count / total_letters for char, count in histogram.items()
            }
        LOGGER.debug(
            "Lexicon indexed: %d words, %d signatures, %d rejected",
            len(self._entries),
            len(self._by_signature),
            skipped,
        )

    def _accepts(self, word: str) -> bool:
        if len(word) < self.config.min_length:
            return False
        if self.config.max_length is not None and len(word) > self.config.max_length:
            return False
        return True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def normalize(self, text: str) -> str:
        return clean_word(text, self.config.alphabet, self.config.case_map)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def contains(self, word: str) -> bool:
        return self.normalize(word) in self._entries

    def get(self, word: str) -> Optional[LexiconEntry]:
        return self._entries.get(self.normalize(word))

    def lookup_by_signature(self, sig: str) -> Set[str]:
        return set(self._by_signature.get(sig, ()))

    def signatures_for_letter_set(self, key: str) -> Set[str]:
        return set(self._by_letter_set.get(key, ()))

    def words_of_length(self, length: int) -> List[str]:
        return list(self._by_length.get(length, []))

    def letter_frequency(self, letter: str) -> float:
        return self._letter_frequency.get(letter, 0.0)

    @property
    def max_letter_frequency(self) -> float:
        return max(self._letter_frequency.values(), default=0.0)
