# src/summarizer/disabled.py - v1
"""Summarizer used when summarization is switched off: templated counts only."""

from __future__ import annotations

from collections.abc import Sequence

from myday.core.models import Comment, Issue, WorklogEntry
from myday.summarizer.base_summarizer import BaseSummarizer
from myday.summarizer.models import StyleConfig, SummaryResult
from myday.summarizer.text_utils import count_statement, normalize_whitespace, shorten_text


class DisabledSummarizer(BaseSummarizer):
    """Returns plain templated text. No vocabulary, quality or trace."""

    @property
    def mode(self) -> str:
        return "disabled"

    def summarize(
        self,
        issues: Sequence[Issue],
        comments: Sequence[Comment],
        worklogs: Sequence[WorklogEntry],
        style: StyleConfig | None = None,
    ) -> SummaryResult:
        style = style or self._style
        return SummaryResult(
            text=count_statement(len(issues), len(comments), len(worklogs)),
            style=style.style,
        )

    def summarize_issue(
        self,
        issue: Issue,
        comments: Sequence[Comment] = (),
        style: StyleConfig | None = None,
    ) -> SummaryResult:
        style = style or self._style
        text = normalize_whitespace(f"{issue.key}: {issue.summary}".strip(": "))
        if style.max_length > 0:
            text = shorten_text(text, style.max_length)
        return SummaryResult(text=text, style=style.style)

    def summarize_worklogs(self, worklogs: Sequence[WorklogEntry]) -> str:
        if not worklogs:
            return "No work logged"
        return f"Work logged on {len(worklogs)} items"
