"""Raw-text detection of disguised profanity.

These checks run on the raw text, before normalization, so that the
separators, digits and symbols used to dodge the lexicon are still visible.
"""

from __future__ import annotations

import re

from app.moderation.domain.lexicon import Lexicon

from .result import MatchResult

OBFUSCATED_MATCH = "obfuscated_match"
BOUNDARY_BREAKING = "boundary_breaking"
COMPRESSED_MATCH = "compressed_match"

# Slack allowed between the compressed text length and the matched word
COMPRESSED_LENGTH_SLACK = 3

_SEP = r"[\s.\-_]{0,3}"

# ASCII word classes, so non-Latin letters count as separators
_FLAGS = re.IGNORECASE | re.ASCII

OBFUSCATION_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, _FLAGS)
    for pattern in (
        # separated by any non-word run, vowel optional in "fck"
        r"f[\W_]*u?[\W_]*c[\W_]*k",
        r"s[\W_]*h[\W_]*i[\W_]*t",
        r"b[\W_]*i[\W_]*t[\W_]*c[\W_]*h",
        r"a[\W_]*s[\W_]*s[\W_]*h[\W_]*o[\W_]*l[\W_]*e",
        # leetspeak
        r"f[u@4]*ck",
        r"sh[i1!]t",
        r"[a@4]ss[h#]ole",
        # short separator runs
        rf"f{_SEP}u?{_SEP}c{_SEP}k",
        rf"s{_SEP}h{_SEP}i{_SEP}t",
        # broken across word boundaries
        r"f[\s\w]*ab[\s\w]*itch",
        r"b[\s\w]*itch",
        r"f[\s\w]*uck",
        r"fck\s*u",
        r"f\s*ck",
        # reversed
        r"kcuf",
        r"tihs",
        r"hctib",
    )
)

BOUNDARY_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, _FLAGS)
    for pattern in (
        r"f\s+ab\s+itch",
        r"f\s*\w{0,2}\s*ab\s*\w{0,2}\s*itch",
        r"b\s+itch",
        r"f\s+uck",
        r"sh\s+it\b",
        r"fck\s+u\b",
    )
)

_WHITESPACE_RE = re.compile(r"\s+")


def compress(text: str) -> str:
    return _WHITESPACE_RE.sub("", text or "").lower()


def match_compressed(text: str, lexicon: Lexicon) -> MatchResult:
    """Match lexicon words hidden by spacing, only when the text is about word-sized."""

    compressed = compress(text)
    if not compressed:
        return MatchResult.none()
    for word in lexicon:
        if word in compressed and len(compressed) <= len(word) + COMPRESSED_LENGTH_SLACK:
            return MatchResult.hit(COMPRESSED_MATCH, word)
    return MatchResult.none()


def match_boundary_breaking(text: str, lexicon: Lexicon) -> MatchResult:
    for pattern in BOUNDARY_PATTERNS:
        if pattern.search(text):
            return MatchResult.hit(BOUNDARY_BREAKING)
    return match_compressed(text, lexicon)


def match_obfuscation(text: str, lexicon: Lexicon) -> MatchResult:
    if not text:
        return MatchResult.none()
    for pattern in OBFUSCATION_PATTERNS:
        if pattern.search(text):
            return MatchResult.hit(OBFUSCATED_MATCH)
    return match_boundary_breaking(text, lexicon)
