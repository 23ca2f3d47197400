"""Lexicon matching against normalized review tokens."""

from __future__ import annotations

from app.moderation.domain.lexicon import Lexicon
from app.moderation.domain.text import tokenize

from .result import MatchResult

DIRECT_MATCH = "direct_match"
VARIATION_MATCH = "variation_match"
FUZZY_MATCH = "fuzzy_match"
DELETION_MATCH = "deletion_match"

MAX_DISTANCE = 2
MIN_FUZZY_LENGTH = 3
TOO_DIFFERENT = 99


def bounded_distance(first: str, second: str, limit: int = MAX_DISTANCE) -> int:
    """Position-wise mismatch count, or ``TOO_DIFFERENT`` once it exceeds ``limit``.

    Positions past the end of the shorter string count as mismatches. Strings
    whose lengths differ by more than ``limit`` are rejected without scanning.
    """

    if abs(len(first) - len(second)) > limit:
        return TOO_DIFFERENT
    differences = 0
    for idx in range(max(len(first), len(second))):
        left = first[idx] if idx < len(first) else None
        right = second[idx] if idx < len(second) else None
        if left != right:
            differences += 1
            if differences > limit:
                return TOO_DIFFERENT
    return differences


def is_single_deletion(word: str, token: str) -> bool:
    """True when removing exactly one character from ``word`` yields ``token``."""

    if len(word) != len(token) + 1:
        return False
    return any(word[:idx] + word[idx + 1 :] == token for idx in range(len(word)))


def _match_token(word: str, token: str, lexicon: Lexicon) -> str | None:
    if token == word:
        return DIRECT_MATCH
    if token in lexicon.variants(word):
        return VARIATION_MATCH
    if len(token) >= MIN_FUZZY_LENGTH and abs(len(token) - len(word)) <= MAX_DISTANCE:
        if bounded_distance(token, word) <= MAX_DISTANCE:
            return FUZZY_MATCH
    if len(token) >= MIN_FUZZY_LENGTH and len(word) > len(token) and is_single_deletion(word, token):
        return DELETION_MATCH
    return None


def match_lexicon(text: str, lexicon: Lexicon) -> MatchResult:
    """Check every lexicon word against every token; the first hit wins."""

    tokens = tokenize(text)
    if not tokens:
        return MatchResult.none()
    for word in lexicon:
        for token in tokens:
            match_type = _match_token(word, token, lexicon)
            if match_type is not None:
                return MatchResult.hit(match_type, word)
    return MatchResult.none()
