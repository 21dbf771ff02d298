# src/cache/models.py - v2
"""Cache domain models: ReportFingerprint, CacheEntry, CacheEntrySummary, CacheStats."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from myday.config.report_config import ReportConfig


class ReportFingerprint(BaseModel):
    """Content-addressed identity of a report."""

    report_date: date
    digest: str

    @property
    def report_id(self) -> str:
        """Human-scannable id: ``YYYY-MM-DD_<first 12 hex chars>``."""
        return f"{self.report_date.isoformat()}_{self.digest[:12]}"


class CacheEntrySummary(BaseModel):
    """Index record: everything about an entry except its body and config."""

    report_id: str
    report_date: date
    format: str
    generated_at: datetime
    issue_count: int = 0
    comment_count: int = 0
    worklog_count: int = 0
    summarized: bool = False
    generation_ms: float = 0.0
    export_paths: dict[str, str] = Field(default_factory=dict)


class CacheEntry(CacheEntrySummary):
    """A persisted rendered report and the inputs that produced it."""

    content: str
    config: ReportConfig
    digest: str = ""

    def to_summary(self) -> CacheEntrySummary:
        return CacheEntrySummary.model_validate(
            self.model_dump(exclude={"content", "config", "digest"})
        )


class CacheIndex(BaseModel):
    """On-disk index of every persisted entry."""

    reports: list[CacheEntrySummary] = Field(default_factory=list)


class CacheStats(BaseModel):
    """Aggregates derived from the index and file sizes."""

    total_count: int = 0
    total_bytes: int = 0
    by_date: dict[str, int] = Field(default_factory=dict)
    by_format: dict[str, int] = Field(default_factory=dict)
    summarization_usage_count: int = 0
    cache_root: str = ""
