"""Configuration helpers for moderation heuristics and review policy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

logger = logging.getLogger(__name__)

DEFAULT_ACADEMIC_TERMS: tuple[str, ...] = (
    "research",
    "analysis",
    "methodology",
    "data",
    "study",
    "experiment",
    "publication",
    "paper",
    "thesis",
    "dissertation",
    "laboratory",
    "project",
    "collaboration",
    "supervision",
    "mentoring",
    "academic",
    "scientific",
)


class ModerationConfigError(ValueError):
    """Raised when a moderation config file is structurally invalid."""


@dataclass(frozen=True)
class AcademicConfig:
    terms: tuple[str, ...]
    min_terms: int = 2


@dataclass(frozen=True)
class SpamConfig:
    max_word_repeats: int = 3
    char_run_length: int = 5


@dataclass(frozen=True)
class CapsConfig:
    ratio: float = 0.6
    min_length: int = 20


@dataclass(frozen=True)
class LengthConfig:
    min: int = 10
    max: int = 2000


@dataclass(frozen=True)
class ModerationConfig:
    """Tunable data for the heuristics and the review acceptance policy."""

    academic: AcademicConfig
    spam: SpamConfig
    caps: CapsConfig
    length: LengthConfig

    @staticmethod
    def default() -> "ModerationConfig":
        return ModerationConfig(
            academic=AcademicConfig(terms=DEFAULT_ACADEMIC_TERMS),
            spam=SpamConfig(),
            caps=CapsConfig(),
            length=LengthConfig(),
        )

    def with_overrides(
        self,
        *,
        academic_terms: Iterable[str] | None = None,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> "ModerationConfig":
        academic = self.academic
        terms = tuple(academic_terms or ())
        if terms:
            academic = AcademicConfig(terms=terms, min_terms=academic.min_terms)
        length = LengthConfig(
            min=self.length.min if min_length is None else min_length,
            max=self.length.max if max_length is None else max_length,
        )
        return ModerationConfig(academic=academic, spam=self.spam, caps=self.caps, length=length)

    @staticmethod
    def from_mapping(config: Mapping[str, Any]) -> "ModerationConfig":
        base = ModerationConfig.default()
        academic_cfg = _section(config, "academic")
        spam_cfg = _section(config, "spam")
        caps_cfg = _section(config, "caps")
        length_cfg = _section(config, "length")

        raw_terms = academic_cfg.get("terms", base.academic.terms)
        if not isinstance(raw_terms, (list, tuple)):
            raise ModerationConfigError("academic.terms must be a list")
        terms = tuple(str(term).strip().lower() for term in raw_terms if str(term).strip())

        return ModerationConfig(
            academic=AcademicConfig(
                terms=terms,
                min_terms=int(academic_cfg.get("min_terms", base.academic.min_terms)),
            ),
            spam=SpamConfig(
                max_word_repeats=int(spam_cfg.get("max_word_repeats", base.spam.max_word_repeats)),
                char_run_length=int(spam_cfg.get("char_run_length", base.spam.char_run_length)),
            ),
            caps=CapsConfig(
                ratio=float(caps_cfg.get("ratio", base.caps.ratio)),
                min_length=int(caps_cfg.get("min_length", base.caps.min_length)),
            ),
            length=LengthConfig(
                min=int(length_cfg.get("min", base.length.min)),
                max=int(length_cfg.get("max", base.length.max)),
            ),
        )


def _section(config: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = config.get(key) or {}
    if not isinstance(value, Mapping):
        raise ModerationConfigError(f"{key} section must be a mapping")
    return value


def load_moderation_config(path: str | Path | None) -> ModerationConfig:
    """Load moderation config from YAML, using defaults when the file is absent."""

    if path is None:
        return ModerationConfig.default()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
    except FileNotFoundError:
        logger.warning("moderation config file missing at %s; using defaults", path)
        return ModerationConfig.default()
    if loaded is None:
        return ModerationConfig.default()
    if not isinstance(loaded, Mapping):
        raise ModerationConfigError("moderation config must be a mapping")
    return ModerationConfig.from_mapping(loaded)
