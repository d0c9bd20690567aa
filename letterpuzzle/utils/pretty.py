"""Pretty-print helpers for puzzles and crossword layouts."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.models import Layout, Puzzle


EMPTY_SYMBOL = "."


def format_layout(layout: Layout) -> str:
    if not layout.grid:
        return "(empty layout)"
    width = layout.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(layout.grid):
        row_render = " ".join(f"{(char or EMPTY_SYMBOL):>2}" for char in row)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def pretty_print_layout(layout: Layout, *, label: str | None = None, stream=None) -> None:
    """Print the crossword grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_layout(layout), file=stream)
    for placed in layout.placed_words:
        print(
            f"  {placed.word:<8} ({placed.row},{placed.col}) {placed.orientation.value}",
            file=stream,
        )
    if layout.disjoint_words:
        print(f"  Disjoint: {', '.join(layout.disjoint_words)}", file=stream)


def print_puzzle_stats(puzzle: Puzzle, *, stream=None) -> None:
    stream = stream or sys.stdout
    lengths = Counter(len(word) for word in puzzle.words)
    dist_parts = [f"{length}:{count}" for length, count in sorted(lengths.items())]
    print("--- Puzzle ---", file=stream)
    print(f"  Letters:       {' '.join(puzzle.letters)}", file=stream)
    print(f"  Words:         {len(puzzle.words)} ({', '.join(puzzle.words)})", file=stream)
    print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)
    print(f"  Score:         {puzzle.score:.2f} after {puzzle.attempts} attempts", file=stream)
