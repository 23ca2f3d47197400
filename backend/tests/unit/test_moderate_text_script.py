from __future__ import annotations

import json
import logging
from pathlib import Path

from app.moderation.domain import container
from scripts import moderate_text


def test_script_reports_accepted_review(engine, capsys) -> None:
	container.configure(engine=engine)
	exit_code = moderate_text.main(["My supervisor gave thoughtful feedback on every draft."])
	report = json.loads(capsys.readouterr().out)
	assert exit_code == 0
	assert report["decision"] == {"status": "ACCEPTED"}
	assert report["verdict"]["isClean"] is True
	assert report["lexicon"] == {"source": "test", "size": 3}


def test_script_reads_json_body_from_file(engine, capsys, tmp_path: Path) -> None:
	container.configure(engine=engine)
	body = tmp_path / "body.json"
	body.write_text(json.dumps({"text": "What the fuck was that lab"}), encoding="utf-8")
	exit_code = moderate_text.main(["--file", str(body), "--json-input"])
	report = json.loads(capsys.readouterr().out)
	assert exit_code == 1
	assert report["verdict"]["severity"] == "hard"
	assert report["verdict"]["detectedWord"] == "fuck"
	assert report["decision"]["reason"] == "Contains inappropriate language"


def test_script_runs_engine_once_per_review(engine, monkeypatch) -> None:
	container.configure(engine=engine)
	calls = []
	original = engine.moderate

	def counting_moderate(text: str):
		calls.append(text)
		return original(text)

	monkeypatch.setattr(engine, "moderate", counting_moderate)
	report = moderate_text.moderate_text("My supervisor gave thoughtful feedback on every draft.")
	assert report["verdict"]["isClean"] is True
	assert len(calls) == 1


def test_script_reports_verdict_for_rejected_input(engine) -> None:
	container.configure(engine=engine)
	report = moderate_text.moderate_text("")
	assert report["decision"] == {"status": "REJECTED", "reason": "Invalid input text"}
	assert report["verdict"] == {"isClean": True, "severity": "clean"}


def test_script_logs_decision_without_text(engine, caplog) -> None:
	container.configure(engine=engine)
	caplog.set_level(logging.INFO, logger="moderation.cli")
	moderate_text.main(["What the fuck was that lab"])
	records = [record for record in caplog.records if record.name == "moderation.cli"]
	assert len(records) == 1
	assert records[0].decision == "REJECTED"
	assert records[0].text_length == len("What the fuck was that lab")
	assert "fuck" not in records[0].getMessage()
