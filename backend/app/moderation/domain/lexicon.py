"""Profanity lexicon loading and variant generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)

SOURCE_PRIMARY = "primary"
SOURCE_FALLBACK = "fallback"

FALLBACK_WORDS: tuple[str, ...] = (
    "fuck",
    "shit",
    "bitch",
    "asshole",
    "dick",
    "pussy",
    "cock",
    "cunt",
    "faggot",
    "nigger",
    "nigga",
    "whore",
    "slut",
    "bastard",
    "motherfucker",
)

CHAR_SUBSTITUTIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "a": ("@", "4"),
        "e": ("3",),
        "i": ("1", "!", "|"),
        "o": ("0",),
        "s": ("5", "$"),
        "t": ("7", "+"),
        "l": ("|", "1"),
        "u": ("v",),
    }
)


def generate_variants(word: str) -> frozenset[str]:
    """Single-substitution and single adjacent-transposition variants of ``word``.

    Each variant differs from the word by exactly one edit; substitutions are
    never combined.
    """

    lowered = word.lower()
    variants = {lowered}
    for idx, char in enumerate(lowered):
        for substitute in CHAR_SUBSTITUTIONS.get(char, ()):
            variants.add(lowered[:idx] + substitute + lowered[idx + 1 :])
    for idx in range(len(lowered) - 1):
        chars = list(lowered)
        chars[idx], chars[idx + 1] = chars[idx + 1], chars[idx]
        variants.add("".join(chars))
    return frozenset(variants)


@dataclass(frozen=True)
class Lexicon:
    """Immutable, ordered set of banned terms with precomputed variants."""

    words: tuple[str, ...]
    source: str = SOURCE_PRIMARY
    _variants: Mapping[str, frozenset[str]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        variants = {word: generate_variants(word) for word in self.words}
        object.__setattr__(self, "_variants", MappingProxyType(variants))

    @classmethod
    def from_words(cls, words: Iterable[str], *, source: str = SOURCE_PRIMARY) -> "Lexicon":
        seen: dict[str, None] = {}
        for raw in words:
            word = str(raw).strip().lower()
            if word and word not in seen:
                seen[word] = None
        return cls(words=tuple(seen), source=source)

    @classmethod
    def fallback(cls) -> "Lexicon":
        return cls.from_words(FALLBACK_WORDS, source=SOURCE_FALLBACK)

    def variants(self, word: str) -> frozenset[str]:
        cached = self._variants.get(word)
        if cached is not None:
            return cached
        return generate_variants(word)

    @property
    def is_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK

    def __contains__(self, word: object) -> bool:
        return word in self._variants

    def __iter__(self) -> Iterator[str]:
        return iter(self.words)

    def __len__(self) -> int:
        return len(self.words)


def parse_word_list(raw: str) -> list[str]:
    words: list[str] = []
    for line in raw.splitlines():
        entry = line.split("#", 1)[0].strip()
        if entry:
            words.append(entry)
    return words


def load_lexicon(path: str | Path | None) -> Lexicon:
    """Load the word list at ``path``, substituting the embedded list on failure."""

    if path is None:
        logger.warning("moderation lexicon path not configured; using fallback list")
        return Lexicon.fallback()
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("moderation lexicon unavailable at %s (%s); using fallback list", path, exc)
        return Lexicon.fallback()
    lexicon = Lexicon.from_words(parse_word_list(raw), source=SOURCE_PRIMARY)
    if not lexicon:
        logger.warning("moderation lexicon at %s is empty; using fallback list", path)
        return Lexicon.fallback()
    logger.info("moderation lexicon loaded", extra={"lexicon_source": lexicon.source, "word_count": len(lexicon)})
    return lexicon
