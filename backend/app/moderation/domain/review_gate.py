"""Accept/reject policy applied on top of the moderation engine for review submissions."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from app.moderation.domain.engine import ModerationEngine, ModerationVerdict, Severity
from app.moderation.schemas import ModerationResponse
from app.obs import metrics

logger = logging.getLogger(__name__)

METHOD_AUTO = "AUTO"

DECISION_ACCEPTED = "ACCEPTED"
DECISION_REJECTED_HARD = "REJECTED_HARD"
DECISION_REJECTED_SOFT = "REJECTED_SOFT"

REASON_INVALID_INPUT = "Invalid input text"
REASON_TOO_SHORT = "Review is too short"
REASON_OVERRIDE = "Academic context override for soft violation"
REASON_PASSED = "Passed all moderation checks"
REASON_DEFAULT_REJECT = "Please revise your content and try again."


class GateStatus(str, Enum):
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class GateDecision:
    status: GateStatus
    reason: Optional[str] = None
    override: bool = False
    verdict: Optional[ModerationVerdict] = None

    @property
    def accepted(self) -> bool:
        return self.status is GateStatus.ACCEPTED

    def as_response(self) -> ModerationResponse:
        return ModerationResponse(status=self.status.value, reason=self.reason)

    def as_dict(self) -> dict[str, str]:
        return self.as_response().model_dump(exclude_none=True)


class DecisionRecorder(Protocol):
    def record(self, *, decision: str, reason: str, method: str, text_length: int) -> None:
        ...


class LoggingDecisionRecorder:
    """Writes moderation decisions to the structured log; the review text is never logged."""

    def record(self, *, decision: str, reason: str, method: str, text_length: int) -> None:
        logger.info(
            "moderation decision",
            extra={"decision": decision, "reason": reason, "method": method, "text_length": text_length},
        )


@dataclass
class ReviewGate:
    """Applies moderation, the academic override and length bounds to a review."""

    engine: ModerationEngine
    recorder: DecisionRecorder = field(default_factory=LoggingDecisionRecorder)

    def check(self, text: object) -> GateDecision:
        start = time.perf_counter()
        try:
            decision = self._check(text)
        except Exception as exc:
            logger.exception("review moderation failed")
            decision = GateDecision(status=GateStatus.ERROR, reason=f"Internal server error: {exc}")
        finally:
            metrics.MODERATION_CHECK_SECONDS.observe(time.perf_counter() - start)
        metrics.record_gate_decision(decision.status.value)
        return decision

    def _check(self, text: object) -> GateDecision:
        if not isinstance(text, str) or not text:
            return GateDecision(status=GateStatus.REJECTED, reason=REASON_INVALID_INPUT)

        verdict = self.engine.moderate(text)
        metrics.record_verdict(verdict.severity.value, verdict.detection_type)
        override = False
        if not verdict.is_clean:
            severity = DECISION_REJECTED_HARD if verdict.severity is Severity.HARD else DECISION_REJECTED_SOFT
            self._record(text, severity, verdict.reason or "Content moderation triggered")
            if self.engine.override_eligible(verdict, text):
                self._record(text, DECISION_ACCEPTED, REASON_OVERRIDE)
                metrics.record_override()
                override = True
            else:
                return GateDecision(
                    status=GateStatus.REJECTED,
                    reason=verdict.reason or REASON_DEFAULT_REJECT,
                    verdict=verdict,
                )

        bounds = self.engine.config.length
        if len(text) < bounds.min:
            return GateDecision(status=GateStatus.REJECTED, reason=REASON_TOO_SHORT, override=override, verdict=verdict)
        if len(text) > bounds.max:
            return GateDecision(
                status=GateStatus.REJECTED,
                reason=f"Review is too long (max {bounds.max} characters)",
                override=override,
                verdict=verdict,
            )

        if not override:
            self._record(text, DECISION_ACCEPTED, REASON_PASSED)
        return GateDecision(status=GateStatus.ACCEPTED, override=override, verdict=verdict)

    def _record(self, text: str, decision: str, reason: str) -> None:
        try:
            self.recorder.record(decision=decision, reason=reason, method=METHOD_AUTO, text_length=len(text))
        except Exception:
            logger.exception("failed to record moderation decision")
