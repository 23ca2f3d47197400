"""Review moderation helpers exposed to the application."""

from app.moderation.domain.container import (
    configure,
    get_engine,
    get_review_gate,
    is_academic_context,
    moderate,
)
from app.moderation.domain.engine import ModerationEngine, ModerationVerdict, Severity
from app.moderation.domain.text import normalize

__all__ = [
    "ModerationEngine",
    "ModerationVerdict",
    "Severity",
    "configure",
    "get_engine",
    "get_review_gate",
    "is_academic_context",
    "moderate",
    "normalize",
]
