"""Working grid for crossword layout with undoable placements."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..core.constants import Bounds, Orientation
from ..core.exceptions import LayoutFailedError
from ..core.models import PlacedWord


Cell = Tuple[int, int]


class LayoutGrid:
    """A square grid of optional letters.

    Placement works in place: ``place_undoable`` mutates the grid and hands
    back a callable restoring the previous state, so backtracking never
    copies the grid.
    """

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("grid size must be positive")
        self.bounds = Bounds(rows=size, cols=size)
        self.cells: List[List[Optional[str]]] = [[None] * size for _ in range(size)]
        # orientations of the words covering each filled cell
        self._cover: Dict[Cell, List[Orientation]] = {}

    @property
    def size(self) -> int:
        return self.bounds.rows

    def letter(self, row: int, col: int) -> Optional[str]:
        if not self.bounds.contains(row, col):
            return None
        return self.cells[row][col]

    # ------------------------------------------------------------------
    # Placement rules
    # ------------------------------------------------------------------
    def can_place(self, word: str, row: int, col: int, orientation: Orientation) -> bool:
        """Check bounds, letter agreement, no touching and at least one new cell."""

        if not word:
            return False
        dr, dc = orientation.step
        end_row = row + dr * (len(word) - 1)
        end_col = col + dc * (len(word) - 1)
        if not self.bounds.contains(row, col) or not self.bounds.contains(end_row, end_col):
            return False

        # The word must not run into letters right before or after it.
        if self.letter(row - dr, col - dc) is not None:
            return False
        if self.letter(end_row + dr, end_col + dc) is not None:
            return False

        pr, pc = orientation.perpendicular.step
        fills_new_cell = False
        for index, char in enumerate(word):
            r, c = row + dr * index, col + dc * index
            existing = self.cells[r][c]
            if existing is not None:
                if existing != char:
                    return False
                if orientation in self._cover.get((r, c), ()):
                    return False
                continue
            if self.letter(r - pr, c - pc) is not None or self.letter(r + pr, c + pc) is not None:
                return False
            fills_new_cell = True
        # a word lying entirely on existing letters is not a placement
        return fills_new_cell

    def can_place_word(self, placed: PlacedWord) -> bool:
        return self.can_place(placed.word, placed.row, placed.col, placed.orientation)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def place_undoable(self, placed: PlacedWord) -> Callable[[], None]:
        """Place a word and return an undo callable for backtracking."""

        if not self.can_place_word(placed):
            raise LayoutFailedError(
                f"Cannot place {placed.word} at ({placed.row},{placed.col}) {placed.orientation.value}"
            )

        filled: List[Cell] = []
        for (row, col), char in zip(placed.cells, placed.word):
            if self.cells[row][col] is None:
                self.cells[row][col] = char
                filled.append((row, col))
            self._cover.setdefault((row, col), []).append(placed.orientation)

        def undo() -> None:
            for cell in placed.cells:
                covering = self._cover.get(cell)
                if covering:
                    covering.remove(placed.orientation)
                    if not covering:
                        del self._cover[cell]
            for row, col in filled:
                self.cells[row][col] = None

        return undo

    def place(self, placed: PlacedWord) -> None:
        self.place_undoable(placed)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def iter_cells_from_center(self) -> Iterable[Cell]:
        """All cells ordered by distance from the grid centre."""

        center = self.size // 2
        cells = [(r, c) for r in range(self.size) for c in range(self.size)]
        cells.sort(key=lambda rc: (abs(rc[0] - center) + abs(rc[1] - center), rc))
        return cells

    def crop(
        self, placed_words: Iterable[PlacedWord], margin: int = 1
    ) -> Tuple[List[List[Optional[str]]], int, int]:
        """Cut the grid down to the placements' bounding box plus ``margin``.

        Returns the cropped rows and the origin offset that placement
        coordinates must be shifted by.
        """

        coords = [cell for placed in placed_words for cell in placed.cells]
        if not coords:
            return [], 0, 0
        min_row = max(0, min(r for r, _ in coords) - margin)
        max_row = min(self.size - 1, max(r for r, _ in coords) + margin)
        min_col = max(0, min(c for _, c in coords) - margin)
        max_col = min(self.size - 1, max(c for _, c in coords) + margin)
        rows = [list(self.cells[r][min_col : max_col + 1]) for r in range(min_row, max_row + 1)]
        return rows, min_row, min_col
