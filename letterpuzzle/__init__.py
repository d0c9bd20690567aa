"""Letter puzzle generation and crossword layout.

This package exposes the public API surface via:

- ``letterpuzzle.service.PuzzleService``: the ``generate_puzzle`` and
  ``layout_crossword`` operations with explicit result values.
- ``letterpuzzle.data.lexicon.LexiconIndex``: normalizes and indexes a word list.
- ``letterpuzzle.engine.generator.PuzzleGenerator`` and
  ``letterpuzzle.engine.layout.CrosswordLayoutEngine``: the raising engines
  behind the facade.
"""

from .data.lexicon import LexiconConfig, LexiconIndex
from .engine.generator import GeneratorConfig, PuzzleGenerator
from .engine.layout import CrosswordLayoutEngine, LayoutConfig
from .service import ErrorKind, LayoutResult, PuzzleResult, PuzzleService

__all__ = [
    "CrosswordLayoutEngine",
    "ErrorKind",
    "GeneratorConfig",
    "LayoutConfig",
    "LayoutResult",
    "LexiconConfig",
    "LexiconIndex",
    "PuzzleGenerator",
    "PuzzleResult",
    "PuzzleService",
]

__version__ = "0.1.0"
