"""Individual text detectors composed by the moderation engine."""

from .academic import count_academic_terms, is_academic_context
from .lexicon_match import bounded_distance, match_lexicon
from .obfuscation import match_obfuscation
from .result import MatchResult
from .spam import match_caps, match_spam

__all__ = [
    "MatchResult",
    "bounded_distance",
    "count_academic_terms",
    "is_academic_context",
    "match_caps",
    "match_lexicon",
    "match_obfuscation",
    "match_spam",
]
