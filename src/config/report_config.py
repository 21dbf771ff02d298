# src/config/report_config.py - v2
"""Output-affecting configuration snapshot.

ReportConfig is the explicit allow-list of settings that change a
report's rendered content. It is what gets fingerprinted and what a
cache entry records; credentials and logging settings never enter it.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from myday.config.settings import Settings


class ReportConfig(BaseModel):
    """Settings that influence rendered report content."""

    model_config = ConfigDict(frozen=True)

    report_format: Literal["console", "markdown"] = "console"
    summarization_enabled: bool = True
    summarization_mode: str = "embedded"
    summarization_model: str = "rule-based"
    summary_style: str = "technical"
    max_summary_length: int = 200
    include_technical_details: bool = True
    prioritize_recent_work: bool = True
    fallback_strategy: Literal["graceful", "strict"] = "graceful"
    min_meaningful_comment_chars: int = 3
    detailed: bool = False
    debug: bool = False
    show_quality: bool = False
    verbose: bool = False
    group_by_field: str = ""

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> ReportConfig:
        """Snapshot the allow-listed fields of settings.

        Overrides set to None are ignored, so unset CLI flags can be passed
        straight through.
        """
        values: dict[str, Any] = {
            "report_format": settings.report_format,
            "summarization_enabled": settings.summarization_enabled,
            "summarization_mode": settings.summarization_mode,
            "summarization_model": settings.summarization_model,
            "summary_style": settings.summary_style,
            "max_summary_length": settings.max_summary_length,
            "include_technical_details": settings.include_technical_details,
            "prioritize_recent_work": settings.prioritize_recent_work,
            "fallback_strategy": settings.fallback_strategy,
            "min_meaningful_comment_chars": settings.min_meaningful_comment_chars,
            "detailed": settings.detailed,
            "debug": settings.summary_debug,
            "show_quality": settings.show_quality,
            "verbose": settings.verbose,
            "group_by_field": settings.group_by_field,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def canonical(self) -> str:
        """Stable text form used in fingerprints: sorted key=value pairs."""
        data = self.model_dump()
        return ",".join(f"{key}={data[key]}" for key in sorted(data))
