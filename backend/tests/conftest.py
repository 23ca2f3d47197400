import sys
from pathlib import Path

import pytest

# Ensure backend package is importable when tests run from repo root
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
	sys.path.insert(0, str(BACKEND_ROOT))

from app.moderation.domain import container
from app.moderation.domain.config import ModerationConfig
from app.moderation.domain.engine import ModerationEngine
from app.moderation.domain.lexicon import Lexicon


class RecordingDecisionRecorder:
	def __init__(self) -> None:
		self.entries: list[tuple[str, str]] = []

	def record(self, *, decision: str, reason: str, method: str, text_length: int) -> None:
		self.entries.append((decision, reason))


@pytest.fixture(autouse=True)
def reset_container():
	container.reset()
	try:
		yield
	finally:
		container.reset()


@pytest.fixture
def small_lexicon() -> Lexicon:
	return Lexicon.from_words(["fuck", "bitch", "cunt"], source="test")


@pytest.fixture
def engine(small_lexicon: Lexicon) -> ModerationEngine:
	return ModerationEngine(lexicon=small_lexicon, config=ModerationConfig.default())


@pytest.fixture
def recorder() -> RecordingDecisionRecorder:
	return RecordingDecisionRecorder()
