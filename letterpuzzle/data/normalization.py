"""Shared helpers for locale-aware word normalization."""

from __future__ import annotations

import unicodedata
from typing import Callable, Dict, Iterable, Mapping, Optional, Tuple

from ..core.constants import TURKISH_ALPHABET, TURKISH_CASE_MAP


def to_upper(text: str, case_map: Optional[Mapping[str, str]] = None) -> str:
    """Upper-case ``text`` honouring locale specific mappings.

    ``str.upper`` turns the Turkish dotted ``i`` into ``I`` and leaves the
    dotless ``ı`` as ``I`` as well, so the locale table is applied first.
    """

    mapping = TURKISH_CASE_MAP if case_map is None else case_map
    if mapping:
        text = "".join(mapping.get(char, char) for char in text)
    return text.upper()


def clean_word(
    text: str,
    alphabet: str = TURKISH_ALPHABET,
    case_map: Optional[Mapping[str, str]] = None,
) -> str:
    """Return ``text`` trimmed, upper-cased and stripped to ``alphabet``."""

    if not text:
        return ""
    composed = unicodedata.normalize("NFC", text.strip())
    upper = to_upper(composed, case_map)
    allowed = set(alphabet)
    return "".join(char for char in upper if char in allowed)


def signature(word: str) -> str:
    """Sorted letters of ``word``; anagrams share a signature."""

    return "".join(sorted(word))


def letter_set_key(word: str) -> str:
    """Sorted distinct letters of ``word``."""

    return "".join(sorted(set(word)))


def alphabet_sort_key(alphabet: str = TURKISH_ALPHABET) -> Callable[[str], Tuple[int, Tuple[int, ...]]]:
    """Build a sort key ordering words by length, then by ``alphabet`` order."""

    order: Dict[str, int] = {char: index for index, char in enumerate(alphabet)}
    fallback = len(order)

    def key(word: str) -> Tuple[int, Tuple[int, ...]]:
        return len(word), tuple(order.get(char, fallback + ord(char)) for char in word)

    return key


def sort_words(words: Iterable[str], alphabet: str = TURKISH_ALPHABET) -> list:
    return sorted(words, key=alphabet_sort_key(alphabet))


__all__ = [
    "alphabet_sort_key",
    "clean_word",
    "letter_set_key",
    "signature",
    "sort_words",
    "to_upper",
]
