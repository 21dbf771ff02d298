# src/config/settings.py - v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for deployment-specific settings. Components never
read this at import time; callers build a Settings once and pass the
relevant values into constructors.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Ticket tracker credentials (never cached, never fingerprinted) ===
    jira_base_url: str = ""
    jira_email: str = ""
    jira_token: str = ""

    # === Report layout ===
    report_format: Literal["console", "markdown"] = "console"
    detailed: bool = False
    show_quality: bool = False
    verbose: bool = False
    group_by_field: str = ""

    # === Summarization ===
    summarization_enabled: bool = True
    summarization_mode: Literal["embedded", "disabled"] = "embedded"
    summarization_model: str = "rule-based"
    summary_style: str = "technical"
    max_summary_length: int = 200
    include_technical_details: bool = True
    prioritize_recent_work: bool = True
    fallback_strategy: Literal["graceful", "strict"] = "graceful"
    summary_debug: bool = False
    min_meaningful_comment_chars: int = 3

    # === Report cache ===
    cache_enabled: bool = True
    cache_root: Path = Path("~/.myday/reports")

    # === Export ===
    export_enabled: bool = False
    export_folder: str = ""
    export_tags: str = "standup,daily"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("min_meaningful_comment_chars")
    @classmethod
    def validate_min_meaningful(cls, v: int) -> int:
        if v < 0:
            raise ValueError("min_meaningful_comment_chars must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.max_summary_length < 20:
            errors.append("MAX_SUMMARY_LENGTH must be >= 20")

        if self.export_enabled and not self.export_folder:
            errors.append("EXPORT_ENABLED requires EXPORT_FOLDER")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def export_tags_list(self) -> list[str]:
        """Parse comma-separated export tags."""
        return [t.strip() for t in self.export_tags.split(",") if t.strip()]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-invocation flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
