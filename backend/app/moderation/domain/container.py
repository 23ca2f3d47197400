"""Lightweight service container shared by moderation callers."""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from app.moderation.domain.config import ModerationConfig, load_moderation_config
from app.moderation.domain.engine import ModerationEngine, ModerationVerdict
from app.moderation.domain.lexicon import Lexicon, load_lexicon
from app.moderation.domain.review_gate import DecisionRecorder, LoggingDecisionRecorder, ReviewGate
from app.obs import metrics
from app.settings import settings

_engine_override: Optional[ModerationEngine] = None
_recorder: DecisionRecorder = LoggingDecisionRecorder()


@lru_cache(maxsize=1)
def _default_engine() -> ModerationEngine:
    lexicon = load_lexicon(settings.moderation_lexicon_path)
    config = load_moderation_config(settings.moderation_config_path).with_overrides(
        academic_terms=settings.moderation_academic_terms,
        min_length=settings.moderation_min_length,
        max_length=settings.moderation_max_length,
    )
    metrics.set_lexicon_size(lexicon.source, len(lexicon))
    return ModerationEngine(lexicon=lexicon, config=config)


def configure(
    *,
    engine: Optional[ModerationEngine] = None,
    lexicon: Optional[Lexicon] = None,
    config: Optional[ModerationConfig] = None,
    recorder: Optional[DecisionRecorder] = None,
) -> None:
    """Swap the shared engine or decision recorder, mainly for tests and scripts."""

    global _engine_override, _recorder
    if engine is not None:
        _engine_override = engine
    elif lexicon is not None or config is not None:
        base = get_engine()
        _engine_override = ModerationEngine(
            lexicon=lexicon if lexicon is not None else base.lexicon,
            config=config if config is not None else base.config,
        )
    if recorder is not None:
        _recorder = recorder


def reset() -> None:
    global _engine_override, _recorder
    _engine_override = None
    _recorder = LoggingDecisionRecorder()
    _default_engine.cache_clear()


def get_engine() -> ModerationEngine:
    if _engine_override is not None:
        return _engine_override
    return _default_engine()


def get_review_gate() -> ReviewGate:
    return ReviewGate(engine=get_engine(), recorder=_recorder)


def moderate(text: str) -> ModerationVerdict:
    return get_engine().moderate(text)


def is_academic_context(text: str) -> bool:
    return get_engine().is_academic_context(text)
