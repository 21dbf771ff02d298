# src/report/models.py - v1
"""Report assembly models: CacheMode, ReportOutcome."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from myday.summarizer.models import SummaryResult

# use: look up, store on miss. bypass: neither. only: look up, never generate.
CacheMode = Literal["use", "bypass", "only"]

CacheStatus = Literal["hit", "miss", "bypass", "regenerated"]


class ReportOutcome(BaseModel):
    """What one report generation produced and how."""

    content: str
    report_id: str
    cache_status: CacheStatus
    summary: SummaryResult | None = None
    generated_at: datetime
    generation_ms: float = 0.0
    cached: bool = False
    export_path: str | None = None
