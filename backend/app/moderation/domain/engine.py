"""Moderation engine combining the text detectors into a single verdict."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from app.moderation.domain.config import ModerationConfig
from app.moderation.domain.detectors import (
    is_academic_context,
    match_caps,
    match_lexicon,
    match_obfuscation,
    match_spam,
)
from app.moderation.domain.lexicon import Lexicon
from app.moderation.schemas import VerdictOut
from app.obs import metrics

logger = logging.getLogger(__name__)

REASON_LANGUAGE = "Contains inappropriate language"
REASON_DISGUISED = "Contains disguised inappropriate language"
REASON_SPAM = "Contains repetitive spam patterns"
REASON_CAPS = "Excessive capitalization detected"
REASON_EMPTY = "Empty text"

BASIC_FALLBACK = "basic_fallback"
EMPTY_TEXT = "empty_text"


class Severity(str, Enum):
    CLEAN = "clean"
    SOFT = "soft"
    HARD = "hard"


@dataclass(frozen=True)
class ModerationVerdict:
    """Outcome of moderating a single piece of text."""

    is_clean: bool
    severity: Severity
    reason: Optional[str] = None
    detection_type: Optional[str] = None
    detected_word: Optional[str] = None

    @staticmethod
    def clean() -> "ModerationVerdict":
        return ModerationVerdict(is_clean=True, severity=Severity.CLEAN)

    @staticmethod
    def flagged(
        severity: Severity,
        reason: str,
        detection_type: str,
        detected_word: Optional[str] = None,
    ) -> "ModerationVerdict":
        return ModerationVerdict(
            is_clean=False,
            severity=severity,
            reason=reason,
            detection_type=detection_type,
            detected_word=detected_word,
        )

    def as_dict(self) -> Dict[str, Any]:
        return VerdictOut(
            isClean=self.is_clean,
            severity=self.severity.value,
            reason=self.reason,
            detectionType=self.detection_type,
            detectedWord=self.detected_word,
        ).model_dump(exclude_none=True)


@dataclass(frozen=True)
class PipelineOutcome:
    """Either a verdict from the full pipeline or the error that stopped it."""

    verdict: Optional[ModerationVerdict] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.verdict is not None


class ModerationEngine:
    """Runs lexicon, obfuscation, spam and caps checks in order.

    The lexicon and config are fixed at construction and never mutated, so one
    engine can be shared freely between threads.
    """

    def __init__(self, lexicon: Lexicon | None = None, config: ModerationConfig | None = None) -> None:
        self._lexicon = lexicon if lexicon is not None else Lexicon.fallback()
        self._config = config or ModerationConfig.default()

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon

    @property
    def config(self) -> ModerationConfig:
        return self._config

    def moderate(self, text: str) -> ModerationVerdict:
        outcome = self.evaluate(text)
        if outcome.ok:
            return outcome.verdict  # type: ignore[return-value]
        error = outcome.error or RuntimeError("moderation pipeline returned no verdict")
        logger.error(
            "moderation pipeline failed; using basic check",
            exc_info=(type(error), error, error.__traceback__),
            extra={"text_length": len(text or "")},
        )
        metrics.record_fallback(error)
        return self.fallback(text)

    def evaluate(self, text: str) -> PipelineOutcome:
        try:
            return PipelineOutcome(verdict=self._run_checks(text))
        except Exception as exc:  # pipeline faults degrade to the basic check
            return PipelineOutcome(error=exc)

    def _run_checks(self, text: str) -> ModerationVerdict:
        direct = match_lexicon(text, self._lexicon)
        if direct:
            return ModerationVerdict.flagged(Severity.HARD, REASON_LANGUAGE, direct.match_type, direct.word)

        disguised = match_obfuscation(text, self._lexicon)
        if disguised:
            return ModerationVerdict.flagged(Severity.HARD, REASON_DISGUISED, disguised.match_type)

        spam = match_spam(text, self._config.spam)
        if spam:
            return ModerationVerdict.flagged(Severity.SOFT, REASON_SPAM, spam.match_type)

        caps = match_caps(text, self._config.caps)
        if caps:
            return ModerationVerdict.flagged(Severity.SOFT, REASON_CAPS, caps.match_type)

        return ModerationVerdict.clean()

    def fallback(self, text: str) -> ModerationVerdict:
        """Whitespace-split exact lexicon lookup used when the pipeline fails."""

        if not text:
            return ModerationVerdict.flagged(Severity.HARD, REASON_EMPTY, EMPTY_TEXT)
        try:
            words = str(text).lower().split()
            hit = next((word for word in words if word in self._lexicon), None)
        except Exception:
            logger.exception("basic moderation check failed; accepting text")
            return ModerationVerdict.clean()
        if hit is not None:
            return ModerationVerdict.flagged(Severity.HARD, REASON_LANGUAGE, BASIC_FALLBACK, hit)
        return ModerationVerdict.clean()

    def is_academic_context(self, text: str) -> bool:
        return is_academic_context(text, self._config.academic)

    def override_eligible(self, verdict: ModerationVerdict, text: str) -> bool:
        """Soft verdicts on academic text may be accepted; hard verdicts never are."""

        if verdict.severity is not Severity.SOFT:
            return False
        return self.is_academic_context(text)
