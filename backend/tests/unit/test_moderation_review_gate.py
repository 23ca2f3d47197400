from __future__ import annotations

import logging

import pytest
from prometheus_client import REGISTRY

from app.moderation.domain.config import LengthConfig, ModerationConfig
from app.moderation.domain.engine import ModerationEngine
from app.moderation.domain.review_gate import GateStatus, LoggingDecisionRecorder, ReviewGate

CLEAN_REVIEW = "My supervisor gave thoughtful feedback on every draft."
ACADEMIC_SPAM = (
    "This research methodology was part of my thesis project in the laboratory, "
    "great great great great great"
)


def _gate_count(status: str) -> float:
    return REGISTRY.get_sample_value("moderation_gate_decisions_total", {"status": status}) or 0.0


def test_rejects_invalid_input(engine: ModerationEngine, recorder) -> None:
    gate = ReviewGate(engine=engine, recorder=recorder)
    for value in (None, 123, ""):
        decision = gate.check(value)
        assert decision.status is GateStatus.REJECTED
        assert decision.reason == "Invalid input text"
    assert recorder.entries == []


def test_accepts_clean_review(engine: ModerationEngine, recorder) -> None:
    decision = ReviewGate(engine=engine, recorder=recorder).check(CLEAN_REVIEW)
    assert decision.accepted
    assert not decision.override
    assert decision.as_dict() == {"status": "ACCEPTED"}
    assert recorder.entries == [("ACCEPTED", "Passed all moderation checks")]


def test_rejects_hard_violation(engine: ModerationEngine, recorder) -> None:
    decision = ReviewGate(engine=engine, recorder=recorder).check("What the fuck was that lab")
    assert decision.status is GateStatus.REJECTED
    assert decision.reason == "Contains inappropriate language"
    assert decision.as_dict() == {"status": "REJECTED", "reason": "Contains inappropriate language"}
    assert recorder.entries == [("REJECTED_HARD", "Contains inappropriate language")]


def test_rejects_soft_violation_without_academic_context(engine: ModerationEngine, recorder) -> None:
    decision = ReviewGate(engine=engine, recorder=recorder).check("Great great great great great supervisor")
    assert decision.status is GateStatus.REJECTED
    assert decision.reason == "Contains repetitive spam patterns"
    assert recorder.entries == [("REJECTED_SOFT", "Contains repetitive spam patterns")]


def test_academic_override_accepts_soft_violation(engine: ModerationEngine, recorder) -> None:
    decision = ReviewGate(engine=engine, recorder=recorder).check(ACADEMIC_SPAM)
    assert decision.accepted
    assert decision.override
    assert decision.verdict is not None and decision.verdict.detection_type == "repeated_words"
    assert recorder.entries == [
        ("REJECTED_SOFT", "Contains repetitive spam patterns"),
        ("ACCEPTED", "Academic context override for soft violation"),
    ]


def test_academic_override_never_applies_to_hard(engine: ModerationEngine, recorder) -> None:
    decision = ReviewGate(engine=engine, recorder=recorder).check(f"{ACADEMIC_SPAM} fuck")
    assert decision.status is GateStatus.REJECTED
    assert not decision.override


def test_length_bounds(engine: ModerationEngine, recorder) -> None:
    gate = ReviewGate(engine=engine, recorder=recorder)
    short = gate.check("Great lab")
    assert short.status is GateStatus.REJECTED
    assert short.reason == "Review is too short"

    long = gate.check("Good mentor. " * 200)
    assert long.status is GateStatus.REJECTED
    assert long.reason == "Review is too long (max 2000 characters)"


def test_length_bounds_follow_config(small_lexicon) -> None:
    config = ModerationConfig.default()
    config = ModerationConfig(academic=config.academic, spam=config.spam, caps=config.caps, length=LengthConfig(min=3, max=20))
    gate = ReviewGate(engine=ModerationEngine(lexicon=small_lexicon, config=config))
    assert gate.check("Great lab").accepted
    assert gate.check(CLEAN_REVIEW).reason == "Review is too long (max 20 characters)"


def test_recorder_failure_does_not_change_decision(engine: ModerationEngine) -> None:
    class BrokenRecorder:
        def record(self, **kwargs) -> None:
            raise RuntimeError("log sink down")

    decision = ReviewGate(engine=engine, recorder=BrokenRecorder()).check(CLEAN_REVIEW)
    assert decision.accepted


def test_unexpected_failure_returns_error(engine: ModerationEngine) -> None:
    class BrokenEngine:
        config = engine.config

        def moderate(self, text: str):
            raise RuntimeError("boom")

    before = _gate_count("ERROR")
    decision = ReviewGate(engine=BrokenEngine()).check(CLEAN_REVIEW)  # type: ignore[arg-type]
    assert decision.status is GateStatus.ERROR
    assert decision.reason == "Internal server error: boom"
    assert _gate_count("ERROR") == before + 1


def test_logging_recorder_never_logs_text(engine: ModerationEngine, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="app.moderation.domain.review_gate")
    ReviewGate(engine=engine, recorder=LoggingDecisionRecorder()).check(CLEAN_REVIEW)
    records = [record for record in caplog.records if record.getMessage() == "moderation decision"]
    assert records
    record = records[-1]
    assert record.decision == "ACCEPTED"
    assert record.method == "AUTO"
    assert record.text_length == len(CLEAN_REVIEW)
    assert CLEAN_REVIEW not in caplog.text
