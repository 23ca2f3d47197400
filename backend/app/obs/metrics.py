"""Central registry for Prometheus metrics used by the moderation service."""

from __future__ import annotations

import logging

from prometheus_client import Counter, Gauge, Histogram

log = logging.getLogger(__name__)


MODERATION_VERDICTS_TOTAL = Counter(
	"moderation_verdicts_total",
	"Moderation verdicts produced by severity and detection type",
	["severity", "detection_type"],
)

MODERATION_FALLBACKS_TOTAL = Counter(
	"moderation_fallbacks_total",
	"Moderation pipeline failures that degraded to the basic check",
	["error"],
)

MODERATION_OVERRIDES_TOTAL = Counter(
	"moderation_overrides_total",
	"Soft violations accepted because of academic context",
)

MODERATION_GATE_DECISIONS_TOTAL = Counter(
	"moderation_gate_decisions_total",
	"Review gate decisions by status",
	["status"],
)

MODERATION_CHECK_SECONDS = Histogram(
	"moderation_check_seconds",
	"Time spent moderating a single review",
	buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1),
)

MODERATION_LEXICON_SIZE = Gauge(
	"moderation_lexicon_size",
	"Number of terms in the active lexicon by source",
	["source"],
)


def record_verdict(severity: str, detection_type: str | None) -> None:
	MODERATION_VERDICTS_TOTAL.labels(severity, detection_type or "none").inc()


def record_fallback(error: BaseException) -> None:
	MODERATION_FALLBACKS_TOTAL.labels(error.__class__.__name__).inc()


def record_override() -> None:
	MODERATION_OVERRIDES_TOTAL.inc()


def record_gate_decision(status: str) -> None:
	MODERATION_GATE_DECISIONS_TOTAL.labels(status).inc()


def set_lexicon_size(source: str, size: int) -> None:
	MODERATION_LEXICON_SIZE.labels(source).set(size)
