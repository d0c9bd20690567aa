"""Crossword layout by intersection search with backtracking.

Words are placed longest first. The first one sits horizontally in the
middle of a large working grid; every following word must cross a word
already on the grid. When a word has no legal crossing the previous
placement is undone and its next alternative tried. Exhausting the search
is reported as :class:`LayoutFailedError`; a partial grid is never
returned.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterator, List, Mapping, Optional, Sequence, Set

from ..core.constants import TURKISH_CASE_MAP, Orientation
from ..core.exceptions import EmptyInputError, LayoutFailedError
from ..core.models import Layout, LayoutStatus, PlacedWord
from ..data.normalization import to_upper
from ..utils.logger import get_logger
from .grid import LayoutGrid


LOGGER = get_logger(__name__)


@dataclass
class LayoutConfig:
    grid_size: int = 40
    margin: int = 1
    max_steps: int = 200_000
    allow_disjoint_fallback: bool = False
    shuffle_anchors: bool = False
    case_map: Mapping[str, str] = field(default_factory=lambda: dict(TURKISH_CASE_MAP))
    seed: Optional[int] = None


class _StepBudgetExceeded(Exception):
    pass


class CrosswordLayoutEngine:
    """Lay an ordered word list out as a connected crossword."""

    def __init__(self, config: Optional[LayoutConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or LayoutConfig()
        self.rng = rng or random.Random(self.config.seed)
        self._steps = 0

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def layout(self, words: Sequence[str]) -> Layout:
        ordered = self._prepare(words)
        if not ordered:
            raise EmptyInputError("No words to lay out")
        longest = ordered[0]
        if len(longest) > self.config.grid_size:
            raise LayoutFailedError(
                f"Word {longest} does not fit a {self.config.grid_size}-cell grid"
            )

        grid, placed = self._seed_grid(longest)
        self._steps = 0
        try:
            solved = self._solve(grid, ordered[1:], placed)
        except _StepBudgetExceeded:
            LOGGER.warning("Layout step budget (%d) exhausted", self.config.max_steps)
            solved = False

        if solved:
            LOGGER.info("Placed %d words after %d trial placements", len(placed), self._steps)
            return self._finalize(grid, placed, LayoutStatus.CONNECTED, [])

        if not self.config.allow_disjoint_fallback:
            LOGGER.warning("Layout infeasible for words: %s", ", ".join(ordered))
            raise LayoutFailedError(
                f"Unable to connect all {len(ordered)} words: {', '.join(ordered)}"
            )
        return self._layout_with_fallback(ordered)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def _prepare(self, words: Sequence[str]) -> List[str]:
        seen: Set[str] = set()
        cleaned: List[str] = []
        for raw in words:
            if not isinstance(raw, str):
                continue
            word = to_upper(raw.strip(), self.config.case_map)
            if not word or word in seen:
                continue
            seen.add(word)
            cleaned.append(word)
        # stable: equal lengths keep caller order
        return sorted(cleaned, key=len, reverse=True)

    def _seed_grid(self, word: str):
        size = self.config.grid_size
        grid = LayoutGrid(size)
        first = PlacedWord(word, size // 2, (size - len(word)) // 2, Orientation.HORIZONTAL)
        grid.place(first)
        return grid, [first]

    def _solve(self, grid: LayoutGrid, remaining: Sequence[str], placed: List[PlacedWord]) -> bool:
        if not remaining:
            return True
        word = remaining[0]
        for option in self._crossing_options(grid, word, placed):
            self._steps += 1
            if self._steps > self.config.max_steps:
                raise _StepBudgetExceeded()
            undo = grid.place_undoable(option)
            placed.append(option)
            if self._solve(grid, remaining[1:], placed):
                return True
            placed.pop()
            undo()
        LOGGER.debug("No crossing for %s with %d words placed; backtracking", word, len(placed))
        return False

    def _crossing_options(
        self, grid: LayoutGrid, word: str, placed: Sequence[PlacedWord]
    ) -> Iterator[PlacedWord]:
        """Yield every legal placement of ``word`` crossing a placed word.

        Legality is checked lazily, against the grid as it is when the
        option is requested.
        """

        anchors = list(placed)
        if self.config.shuffle_anchors:
            self.rng.shuffle(anchors)

        seen: Set[PlacedWord] = set()
        for anchor in anchors:
            orientation = anchor.orientation.perpendicular
            for i, anchor_char in enumerate(anchor.word):
                for j, char in enumerate(word):
                    if anchor_char != char:
                        continue
                    if anchor.horizontal:
                        option = PlacedWord(word, anchor.row - j, anchor.col + i, orientation)
                    else:
                        option = PlacedWord(word, anchor.row + i, anchor.col - j, orientation)
                    if option in seen:
                        continue
                    seen.add(option)
                    if grid.can_place_word(option):
                        yield option

    # ------------------------------------------------------------------
    # Disjoint fallback
    # ------------------------------------------------------------------
    def _layout_with_fallback(self, ordered: Sequence[str]) -> Layout:
        """Greedy placement allowing words that cross nothing.

        Only used when explicitly enabled; the result is labelled so callers
        can tell it apart from a connected crossword.
        """

        grid, placed = self._seed_grid(ordered[0])
        disjoint: List[str] = []
        for word in ordered[1:]:
            option = next(self._crossing_options(grid, word, placed), None)
            if option is None:
                option = self._free_placement(grid, word)
                if option is None:
                    raise LayoutFailedError(f"No free space left for {word}")
                disjoint.append(word)
            grid.place(option)
            placed.append(option)

        status = LayoutStatus.DISJOINT_FALLBACK if disjoint else LayoutStatus.CONNECTED
        if disjoint:
            LOGGER.warning("Disjoint fallback placed without crossing: %s", ", ".join(disjoint))
        return self._finalize(grid, placed, status, disjoint)

    @staticmethod
    def _free_placement(grid: LayoutGrid, word: str) -> Optional[PlacedWord]:
        for row, col in grid.iter_cells_from_center():
            for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
                option = PlacedWord(word, row, col, orientation)
                if grid.can_place_word(option):
                    return option
        return None

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def _finalize(
        self,
        grid: LayoutGrid,
        placed: Sequence[PlacedWord],
        status: LayoutStatus,
        disjoint: List[str],
    ) -> Layout:
        rows, min_row, min_col = grid.crop(placed, self.config.margin)
        shifted = [word.shifted(-min_row, -min_col) for word in placed]
        return Layout(grid=rows, placed_words=shifted, status=status, disjoint_words=list(disjoint))
