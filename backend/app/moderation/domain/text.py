"""Text canonicalisation shared by the moderation detectors."""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9 ]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Fold accents, replace symbols with spaces, collapse whitespace and lower-case.

    The result only contains ``[a-z0-9]`` and single spaces, and
    ``normalize(normalize(x)) == normalize(x)``.
    """

    decomposed = unicodedata.normalize("NFD", text or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    spaced = _NON_ALNUM_RE.sub(" ", stripped)
    collapsed = _WHITESPACE_RE.sub(" ", spaced).strip()
    return collapsed.lower()


def tokenize(text: str) -> list[str]:
    return normalize(text).split()
