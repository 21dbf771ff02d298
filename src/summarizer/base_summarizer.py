# src/summarizer/base_summarizer.py - v2
"""Abstract summarizer interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from myday.core.models import Comment, Issue, WorklogEntry
from myday.summarizer.models import StyleConfig, SummarizerCapabilities, SummaryResult
from myday.tracking.models import DebugReport


class SummarizationConfigError(ValueError):
    """Raised for invalid summarizer configuration under the strict strategy."""


class BaseSummarizer(ABC):
    """Unified interface for summarization backends.

    Implementations receive their StyleConfig at construction; each call
    may pass a different one.
    """

    def __init__(self, style: StyleConfig | None = None) -> None:
        self._style = style or StyleConfig()

    @property
    def style(self) -> StyleConfig:
        return self._style

    @property
    @abstractmethod
    def mode(self) -> str:
        """Backend identifier (e.g., 'embedded', 'disabled')."""

    @property
    def capabilities(self) -> SummarizerCapabilities:
        """Optional features offered. Default: none."""
        return SummarizerCapabilities()

    @property
    def last_debug_report(self) -> DebugReport | None:
        """Trace of the most recent ``summarize`` call, when the backend traces.

        Per-issue ``summarize_issue`` calls do not replace it.
        """
        return None

    @abstractmethod
    def summarize(
        self,
        issues: Sequence[Issue],
        comments: Sequence[Comment],
        worklogs: Sequence[WorklogEntry],
        style: StyleConfig | None = None,
    ) -> SummaryResult:
        """Compose the standup narrative for a whole report."""

    @abstractmethod
    def summarize_issue(
        self,
        issue: Issue,
        comments: Sequence[Comment] = (),
        style: StyleConfig | None = None,
    ) -> SummaryResult:
        """Summarize one issue within the strict length bound."""

    @abstractmethod
    def summarize_worklogs(self, worklogs: Sequence[WorklogEntry]) -> str:
        """One-line description of logged work."""
