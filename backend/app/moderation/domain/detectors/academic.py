"""Academic vocabulary detector used to soften soft-severity verdicts."""

from __future__ import annotations

from app.moderation.domain.config import AcademicConfig, DEFAULT_ACADEMIC_TERMS


def count_academic_terms(text: str, terms: tuple[str, ...] = DEFAULT_ACADEMIC_TERMS) -> int:
    """Number of distinct terms appearing anywhere in ``text`` (substring, any case)."""

    lowered = (text or "").lower()
    return sum(1 for term in {term.lower() for term in terms if term} if term in lowered)


def is_academic_context(text: str, config: AcademicConfig | None = None) -> bool:
    cfg = config or AcademicConfig(terms=DEFAULT_ACADEMIC_TERMS)
    return count_academic_terms(text, cfg.terms) >= cfg.min_terms
