"""Spam and formatting heuristics: repeated words, character runs, shouting."""

from __future__ import annotations

import re
from functools import lru_cache

from app.moderation.domain.config import CapsConfig, SpamConfig

from .result import MatchResult

REPEATED_WORDS = "repeated_words"
REPEATED_CHARS = "repeated_chars"
EXCESSIVE_CAPS = "excessive_caps"

# Lookahead so that "a a a" counts two repetitions, not one
_REPEATED_WORD_RE = re.compile(r"\b(\w+)\s+(?=\1\b)", re.IGNORECASE)
_UPPER_RE = re.compile(r"[A-Z]")


@lru_cache(maxsize=8)
def _char_run_re(run_length: int) -> re.Pattern[str]:
    return re.compile(r"(.)\1{%d,}" % max(run_length - 1, 0))


def count_word_repeats(text: str) -> int:
    return sum(1 for _ in _REPEATED_WORD_RE.finditer(text or ""))


def match_spam(text: str, config: SpamConfig | None = None) -> MatchResult:
    cfg = config or SpamConfig()
    if not text:
        return MatchResult.none()
    if count_word_repeats(text) > cfg.max_word_repeats:
        return MatchResult.hit(REPEATED_WORDS)
    if _char_run_re(cfg.char_run_length).search(text):
        return MatchResult.hit(REPEATED_CHARS)
    return MatchResult.none()


def caps_ratio(text: str) -> float:
    if not text:
        return 0.0
    return len(_UPPER_RE.findall(text)) / len(text)


def match_caps(text: str, config: CapsConfig | None = None) -> MatchResult:
    cfg = config or CapsConfig()
    if len(text or "") <= cfg.min_length:
        return MatchResult.none()
    if caps_ratio(text) > cfg.ratio:
        return MatchResult.hit(EXCESSIVE_CAPS)
    return MatchResult.none()
