# src/tracking/models.py - v2
"""Debug trace models: DebugStep, DebugWarning, DebugSummary, DebugReport.

A trace covers exactly one summarization call; nothing here persists
between calls.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class DebugStep(BaseModel):
    """One timed step of a summarization call."""

    name: str
    timestamp: datetime
    duration_ms: float = 0.0
    success: bool = True
    error: str | None = None
    output: Any = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class DebugWarning(BaseModel):
    """An anomaly noticed while summarizing."""

    type: str
    message: str
    severity: Literal["low", "medium", "high"] = "medium"
    context: str = ""
    suggestion: str = ""
    timestamp: datetime


class DebugSummary(BaseModel):
    """Aggregate view over the steps and warnings of a trace."""

    total_steps: int
    successful_steps: int
    failed_steps: int
    total_warnings: int
    processing_ms: float
    quality_score: int = 0
    recommendations: list[str] = Field(default_factory=list)


class DebugReport(BaseModel):
    """Complete trace of one summarization call."""

    session_id: str
    start_time: datetime
    end_time: datetime
    steps: list[DebugStep] = Field(default_factory=list)
    warnings: list[DebugWarning] = Field(default_factory=list)
    summary: DebugSummary
    configuration: dict[str, Any] = Field(default_factory=dict)

    @property
    def duration_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()
