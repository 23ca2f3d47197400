"""Run review text through the moderation engine and print the outcome as JSON.

Useful for checking why a review was rejected, and whether the configured
word list loaded or the embedded fallback list is in use.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence

from app import obs
from app.moderation import get_engine, get_review_gate
from app.moderation.schemas import ModerationRequest
from app.obs.logging import get_logger


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description="Moderate a review text")
	source = parser.add_mutually_exclusive_group(required=True)
	source.add_argument("text", nargs="?", help="Review text to moderate")
	source.add_argument("--file", type=Path, help="Read the review text from a file ('-' for stdin)")
	parser.add_argument("--json-input", action="store_true", help='Treat the input as a {"text": ...} JSON body')
	parser.add_argument("--log", action="store_true", help="Emit structured moderation logs to stderr")
	return parser.parse_args(argv)


def _read_input(args: argparse.Namespace) -> str:
	if args.file is None:
		raw = args.text or ""
	elif str(args.file) == "-":
		raw = sys.stdin.read()
	else:
		raw = args.file.read_text(encoding="utf-8")
	if args.json_input:
		return ModerationRequest.model_validate_json(raw).text
	return raw


def moderate_text(text: str) -> dict[str, Any]:
	engine = get_engine()
	decision = get_review_gate().check(text)
	# the gate skips the engine for input it rejects up front
	verdict = decision.verdict or engine.moderate(text)
	return {
		"verdict": verdict.as_dict(),
		"academic": engine.is_academic_context(text),
		"override_eligible": engine.override_eligible(verdict, text),
		"decision": decision.as_dict(),
		"override": decision.override,
		"lexicon": {"source": engine.lexicon.source, "size": len(engine.lexicon)},
	}


def main(argv: Optional[Sequence[str]] = None) -> int:
	args = _parse_args(argv)
	if args.log:
		obs.init()
	text = _read_input(args)
	report = moderate_text(text)
	get_logger("moderation.cli").info(
		"moderated review text",
		extra={"decision": report["decision"]["status"], "text_length": len(text)},
	)
	print(json.dumps(report, indent=2))
	return 0 if report["decision"]["status"] == "ACCEPTED" else 1


if __name__ == "__main__":
	raise SystemExit(main())
