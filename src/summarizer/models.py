# src/summarizer/models.py - v2
"""Summarizer domain models: StyleConfig, SummaryResult, QualityAssessment."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field

from myday.tracking.models import DebugReport

if TYPE_CHECKING:
    from myday.config.report_config import ReportConfig

SUPPORTED_STYLES: tuple[str, ...] = ("technical", "business", "brief")

CompletionState = Literal["completed", "in_progress", "mixed", "unknown"]


class StyleConfig(BaseModel):
    """How a summary should read and how hard the engine should fail.

    ``style`` is a plain string: it arrives from user
    configuration and the engine decides, per ``fallback_strategy``,
    whether an unknown value is an error or falls back to ``technical``.
    """

    style: str = "technical"
    max_length: int = 200
    include_technical_details: bool = True
    prioritize_recent_work: bool = True
    fallback_strategy: Literal["graceful", "strict"] = "graceful"
    debug: bool = False

    @classmethod
    def from_report_config(cls, config: ReportConfig, **overrides: Any) -> StyleConfig:
        """Derive the engine's style from the fingerprinted report config.

        Every field that shapes the narrative comes from ``config``, so a
        cached report always matches the style that produced it. Overrides
        set to None are ignored.
        """
        values: dict[str, Any] = {
            "style": config.summary_style,
            "max_length": config.max_summary_length,
            "include_technical_details": config.include_technical_details,
            "prioritize_recent_work": config.prioritize_recent_work,
            "fallback_strategy": config.fallback_strategy,
            "debug": config.debug,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class SummarizerCapabilities(BaseModel):
    """Optional features a summarizer implementation offers."""

    debug_trace: bool = False
    enhanced_context: bool = False


class QualityFactor(BaseModel):
    """One 25-point quality factor and whether it was earned."""

    name: Literal["length", "specificity", "technical_terms", "data_completeness"]
    passed: bool
    points: int
    detail: str


class QualityAssessment(BaseModel):
    """Composite 0-100 quality score built from four equal factors."""

    score: int = 0
    factors: list[QualityFactor] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class SummaryResult(BaseModel):
    """Output of one summarization call."""

    text: str = ""
    status: Literal["generated", "degraded", "skipped"] = "generated"
    style: str = "technical"
    technical_terms: list[str] = Field(default_factory=list)
    completion_state: CompletionState = "unknown"
    truncated: bool = False
    quality: QualityAssessment | None = None
    debug_report: DebugReport | None = None

    @classmethod
    def skipped(cls, style: str = "technical") -> SummaryResult:
        """Result for inputs the meaningfulness gate declined."""
        return cls(text="", status="skipped", style=style)

    @property
    def quality_score(self) -> int:
        return self.quality.score if self.quality is not None else 0
