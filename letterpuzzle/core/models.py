"""Data models shared by the generation and layout engines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .constants import Orientation


@dataclass(frozen=True)
class LexiconEntry:
    """A normalized word together with its sorted-letter signature."""

    word: str
    signature: str

    @property
    def length(self) -> int:
        return len(self.word)


@dataclass
class PuzzleCandidate:
    """One admissible attempt produced while searching for a puzzle."""

    letters: List[str]
    words: List[str]
    seed_word: str
    score: float = 0.0

    @property
    def diversity(self) -> int:
        return len({len(word) for word in self.words})


@dataclass
class Puzzle:
    """The letters handed to players and the words they can build."""

    letters: List[str]
    words: List[str]
    difficulty: int
    seed_word: str = ""
    score: float = 0.0
    attempts: int = 0

    def to_jsonable(self) -> Dict[str, object]:
        return {"letters": list(self.letters), "words": list(self.words)}


@dataclass(frozen=True)
class PlacedWord:
    """A word committed to the grid at a fixed origin and orientation."""

    word: str
    row: int
    col: int
    orientation: Orientation

    @property
    def cells(self) -> List[Tuple[int, int]]:
        dr, dc = self.orientation.step
        return [(self.row + dr * i, self.col + dc * i) for i in range(len(self.word))]

    @property
    def horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    def shifted(self, d_row: int, d_col: int) -> "PlacedWord":
        return PlacedWord(self.word, self.row + d_row, self.col + d_col, self.orientation)

    def to_jsonable(self) -> Dict[str, object]:
        return {
            "word": self.word,
            "row": self.row,
            "col": self.col,
            "orientation": self.orientation.value,
        }


class LayoutStatus(str, Enum):
    """How a layout was obtained."""

    CONNECTED = "connected"
    DISJOINT_FALLBACK = "disjoint_fallback"


@dataclass
class Layout:
    """A cropped crossword grid and the words placed on it."""

    grid: List[List[Optional[str]]]
    placed_words: List[PlacedWord]
    status: LayoutStatus = LayoutStatus.CONNECTED
    disjoint_words: List[str] = field(default_factory=list)

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def fallback_used(self) -> bool:
        return self.status is LayoutStatus.DISJOINT_FALLBACK

    def to_jsonable(self) -> Dict[str, object]:
        return {
            "grid": [list(row) for row in self.grid],
            "placedWords": [placed.to_jsonable() for placed in self.placed_words],
            "status": self.status.value,
            "disjointWords": list(self.disjoint_words),
        }
