"""Admissibility rules turning raw candidates into a playable word list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class AdmissibilityConfig:
    min_words: int = 4
    max_words: int = 8
    short_length: int = 3
    max_short_words: int = 3

    def __post_init__(self) -> None:
        if self.min_words < 1 or self.min_words > self.max_words:
            raise ValueError(
                f"Invalid word count band [{self.min_words}, {self.max_words}]"
            )


@dataclass
class AdmissibilityResult:
    ok: bool
    words: List[str] = field(default_factory=list)
    reason: str = ""


def remove_absorbed_words(words: Sequence[str]) -> List[str]:
    """Drop every word that appears as a contiguous substring of another.

    Words are visited longest first, so the containing word is always
    already accepted by the time a fragment of it is checked.
    """

    accepted: List[str] = []
    for word in sorted(set(words), key=len, reverse=True):
        if any(word != other and word in other for other in accepted):
            continue
        accepted.append(word)
    return accepted


class AdmissibilityFilter:
    """Apply the anti-redundancy rule, the count band and the short-word cap.

    A candidate failing the band or the cap is rejected outright; nothing is
    trimmed or padded to make it fit.
    """

    def __init__(
        self,
        config: Optional[AdmissibilityConfig] = None,
        sort_key: Optional[Callable[[str], object]] = None,
    ) -> None:
        self.config = config or AdmissibilityConfig()
        self.sort_key = sort_key or (lambda word: (len(word), word))

    def apply(self, candidates: Sequence[str]) -> AdmissibilityResult:
        words = sorted(remove_absorbed_words(candidates), key=self.sort_key)

        count = len(words)
        if count < self.config.min_words or count > self.config.max_words:
            return AdmissibilityResult(
                ok=False,
                words=words,
                reason=(
                    f"{count} words outside band "
                    f"[{self.config.min_words}, {self.config.max_words}]"
                ),
            )

        short = sum(1 for word in words if len(word) <= self.config.short_length)
        if short > self.config.max_short_words:
            return AdmissibilityResult(
                ok=False,
                words=words,
                reason=f"{short} short words exceed cap {self.config.max_short_words}",
            )

        return AdmissibilityResult(ok=True, words=words)
