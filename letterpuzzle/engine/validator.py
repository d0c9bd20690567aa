"""Deterministic rule validation for generated puzzles and layouts."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from ..core.constants import Orientation
from ..core.exceptions import ValidationError
from ..core.models import Layout, LayoutStatus, Puzzle
from ..data.lexicon import LexiconIndex
from ..utils.logger import get_logger
from .admissibility import AdmissibilityConfig
from .candidates import can_form_word


LOGGER = get_logger(__name__)

Run = Tuple[int, int, Orientation, int]


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class LayoutValidator:
    """Runs deterministic validation over a finished layout."""

    def validate(self, layout: Layout) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_no_duplicate_words(layout)
            self._check_letters_match(layout)
            self._check_no_stray_letters(layout)
            self._check_runs(layout)
            if layout.status is LayoutStatus.CONNECTED:
                self._check_connected(layout)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Layout validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_no_duplicate_words(self, layout: Layout) -> None:
        counts = Counter(placed.word for placed in layout.placed_words)
        for word, count in counts.items():
            if count > 1:
                raise ValidationError(f"Word '{word}' placed {count} times")

    def _check_letters_match(self, layout: Layout) -> None:
        for placed in layout.placed_words:
            for (row, col), char in zip(placed.cells, placed.word):
                if not (0 <= row < layout.rows and 0 <= col < layout.cols):
                    raise ValidationError(f"'{placed.word}' leaves the grid at ({row},{col})")
                if layout.grid[row][col] != char:
                    raise ValidationError(
                        f"'{placed.word}' expects {char} at ({row},{col}), "
                        f"grid holds {layout.grid[row][col]!r}"
                    )

    def _check_no_stray_letters(self, layout: Layout) -> None:
        claimed: Set[Tuple[int, int]] = {
            cell for placed in layout.placed_words for cell in placed.cells
        }
        for r, row in enumerate(layout.grid):
            for c, char in enumerate(row):
                if char is not None and (r, c) not in claimed:
                    raise ValidationError(f"Letter {char} at ({r},{c}) belongs to no word")

    def _check_runs(self, layout: Layout) -> None:
        """Every maximal run of two or more letters must be a placed word.

        This catches parallel words touching each other and words running
        into one another end to end.
        """

        expected: Set[Run] = {
            (p.row, p.col, p.orientation, len(p.word))
            for p in layout.placed_words
            if len(p.word) >= 2
        }
        found = set(self._enumerate_runs(layout))
        unexpected = found - expected
        if unexpected:
            row, col, orientation, length = sorted(unexpected, key=lambda run: (run[0], run[1]))[0]
            raise ValidationError(
                f"Unplanned {orientation.value} run of {length} letters at ({row},{col})"
            )
        missing = expected - found
        if missing:
            row, col, orientation, length = sorted(missing, key=lambda run: (run[0], run[1]))[0]
            raise ValidationError(
                f"Word at ({row},{col}) {orientation.value} is touched by adjacent letters"
            )

    @staticmethod
    def _enumerate_runs(layout: Layout) -> List[Run]:
        runs: List[Run] = []
        grid = layout.grid
        for r in range(layout.rows):
            c = 0
            while c < layout.cols:
                if grid[r][c] is None:
                    c += 1
                    continue
                start = c
                while c < layout.cols and grid[r][c] is not None:
                    c += 1
                if c - start >= 2:
                    runs.append((r, start, Orientation.HORIZONTAL, c - start))
        for c in range(layout.cols):
            r = 0
            while r < layout.rows:
                if grid[r][c] is None:
                    r += 1
                    continue
                start = r
                while r < layout.rows and grid[r][c] is not None:
                    r += 1
                if r - start >= 2:
                    runs.append((start, c, Orientation.VERTICAL, r - start))
        return runs

    def _check_connected(self, layout: Layout) -> None:
        words = layout.placed_words
        if len(words) < 2:
            return
        owners: Dict[Tuple[int, int], List[int]] = {}
        for index, placed in enumerate(words):
            for cell in placed.cells:
                owners.setdefault(cell, []).append(index)

        reached = {0}
        frontier = [0]
        while frontier:
            current = frontier.pop()
            for cell in words[current].cells:
                for other in owners[cell]:
                    if other not in reached:
                        reached.add(other)
                        frontier.append(other)
        if len(reached) != len(words):
            loose = sorted(words[i].word for i in range(len(words)) if i not in reached)
            raise ValidationError(f"Words not connected to the crossword: {', '.join(loose)}")


class PuzzleValidator:
    """Checks that a puzzle honours constructibility and admissibility."""

    def __init__(
        self,
        config: Optional[AdmissibilityConfig] = None,
        lexicon: Optional[LexiconIndex] = None,
    ) -> None:
        self.config = config or AdmissibilityConfig()
        self.lexicon = lexicon

    def validate(self, puzzle: Puzzle) -> ValidationResult:
        try:
            self._check_constructible(puzzle)
            self._check_not_absorbed(puzzle)
            self._check_counts(puzzle)
            self._check_in_lexicon(puzzle)
        except ValidationError as exc:
            LOGGER.error("Puzzle validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _check_constructible(puzzle: Puzzle) -> None:
        for word in puzzle.words:
            if not can_form_word(word, puzzle.letters):
                raise ValidationError(
                    f"'{word}' cannot be built from {''.join(puzzle.letters)}"
                )

    @staticmethod
    def _check_not_absorbed(puzzle: Puzzle) -> None:
        for word in puzzle.words:
            for other in puzzle.words:
                if word != other and word in other:
                    raise ValidationError(f"'{word}' is contained in '{other}'")

    def _check_counts(self, puzzle: Puzzle) -> None:
        count = len(puzzle.words)
        if not self.config.min_words <= count <= self.config.max_words:
            raise ValidationError(f"{count} words outside configured band")
        short = sum(1 for word in puzzle.words if len(word) <= self.config.short_length)
        if short > self.config.max_short_words:
            raise ValidationError(f"{short} short words exceed cap")

    def _check_in_lexicon(self, puzzle: Puzzle) -> None:
        if self.lexicon is None:
            return
        for word in puzzle.words:
            if not self.lexicon.contains(word):
                raise ValidationError(f"'{word}' is not in the lexicon")
