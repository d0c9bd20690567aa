"""Shared constants and enumerations for the puzzle engines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


MIN_DIFFICULTY = 4
MAX_DIFFICULTY = 7
SUPPORTED_DIFFICULTIES: Tuple[int, ...] = tuple(range(MIN_DIFFICULTY, MAX_DIFFICULTY + 1))

MIN_WORD_LENGTH = 3

# Turkish-extended Latin alphabet. Q, W and X are kept because loan words
# show up in real word lists.
TURKISH_ALPHABET = "ABCÇDEFGĞHIİJKLMNOÖPQRSŞTUÜVWXYZ"
TURKISH_VOWELS = frozenset("AEIİOÖUÜ")
TURKISH_CASE_MAP = {"i": "İ", "ı": "I"}

ENGLISH_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ENGLISH_VOWELS = frozenset("AEIOU")


class Orientation(str, Enum):
    """Axis along which a word is laid out in the grid."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Orientation.HORIZONTAL else (1, 0)

    @property
    def perpendicular(self) -> "Orientation":
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


@dataclass(frozen=True)
class Bounds:
    """Simple rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols
