"""Settings for the review moderation service."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple, Union

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DATA_DIR = Path(__file__).resolve().parent / "moderation" / "data"


def _env_field(default, *env_names: str):
    if env_names:
        alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
        return Field(default=default, validation_alias=alias)
    return Field(default=default)


class Settings(BaseSettings):
    environment: str = _env_field("production", "ENV", "APP_ENV", "ENVIRONMENT")
    service_name: str = _env_field("pi-review-moderation", "SERVICE_NAME")
    git_commit: str = _env_field("unknown", "GIT_COMMIT", "COMMIT_SHA", "SOURCE_VERSION")
    obs_enabled: bool = _env_field(True, "OBS_ENABLED")
    obs_log_level: str = _env_field("INFO", "LOG_LEVEL")
    obs_log_sampling_rate_info: float = _env_field(1.0, "LOG_SAMPLING_RATE_INFO")

    # Word list read once at startup; a missing file falls back to the embedded list
    moderation_lexicon_path: Path = _env_field(_DATA_DIR / "lexicon.txt", "MODERATION_LEXICON_PATH")
    moderation_config_path: Path = _env_field(_DATA_DIR / "moderation.yaml", "MODERATION_CONFIG_PATH")
    # Empty means "use the academic terms from the YAML config"
    moderation_academic_terms: Union[str, Tuple[str, ...]] = _env_field((), "MODERATION_ACADEMIC_TERMS")
    moderation_min_length: Optional[int] = _env_field(None, "MODERATION_MIN_LENGTH")
    moderation_max_length: Optional[int] = _env_field(None, "MODERATION_MAX_LENGTH")

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("moderation_academic_terms", mode="before")
    def _split_terms(cls, value):  # type: ignore[override]
        """Accept a comma-separated string or a sequence of terms."""
        if value in (None, ""):
            return ()
        if isinstance(value, str):
            return tuple(part.strip().lower() for part in value.split(",") if part.strip())
        if isinstance(value, (list, tuple, set)):
            return tuple(str(item).strip().lower() for item in value if str(item).strip())
        return ()


def _normalise_level(level: str) -> str:
    return level.upper()


settings = Settings()
settings.obs_log_level = _normalise_level(settings.obs_log_level)
