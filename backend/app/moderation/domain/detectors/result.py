"""Result value shared by the moderation detectors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a single detector run."""

    found: bool
    match_type: str = ""
    word: Optional[str] = None

    @staticmethod
    def none() -> "MatchResult":
        return _NO_MATCH

    @staticmethod
    def hit(match_type: str, word: Optional[str] = None) -> "MatchResult":
        return MatchResult(found=True, match_type=match_type, word=word)

    def __bool__(self) -> bool:
        return self.found


_NO_MATCH = MatchResult(found=False)
