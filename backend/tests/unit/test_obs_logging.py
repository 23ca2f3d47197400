from __future__ import annotations

import json
import logging

from app.obs.logging import InfoSamplingFilter, JSONLogFormatter
from app.settings import settings


def _record(level: int = logging.INFO) -> logging.LogRecord:
	return logging.LogRecord("app.moderation", level, __file__, 1, "moderation decision", None, None)


def test_json_formatter_redacts_review_text() -> None:
	record = _record()
	record.text = "a review body that must stay private"
	record.text_length = 36
	record.decision = "ACCEPTED"
	payload = json.loads(JSONLogFormatter().format(record))
	assert payload["msg"] == "moderation decision"
	assert payload["level"] == "info"
	assert payload["service"] == settings.service_name
	assert payload["text"] == "[redacted]"
	assert payload["text_length"] == 36
	assert payload["decision"] == "ACCEPTED"


def test_sampling_filter_keeps_warnings(monkeypatch) -> None:
	monkeypatch.setattr(settings, "obs_log_sampling_rate_info", 0.0)
	sampler = InfoSamplingFilter()
	assert sampler.filter(_record(logging.WARNING))
	assert not sampler.filter(_record(logging.INFO))
