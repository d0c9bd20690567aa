"""Custom exception hierarchy for puzzle generation and layout."""


class PuzzleError(Exception):
    """Base exception for engine failures."""


class LexiconLoadError(PuzzleError):
    """Raised when the word list cannot be read."""


class NotFoundError(PuzzleError):
    """Raised when the lexicon has no usable words for the requested length."""


class GenerationExhaustedError(PuzzleError):
    """Raised when the attempt budget runs out without an admissible puzzle."""


class InvalidDifficultyError(PuzzleError):
    """Raised when a difficulty outside the supported range is requested."""


class EmptyInputError(PuzzleError):
    """Raised when the layout engine receives no words to place."""


class LayoutFailedError(PuzzleError):
    """Raised when backtracking cannot place every word."""


class ValidationError(PuzzleError):
    """Raised when a puzzle or layout integrity check fails."""
