# src/summarizer/text_utils.py - v1
"""Length handling for generated summaries."""

from __future__ import annotations

import re

ELLIPSIS = "..."

_WHITESPACE = re.compile(r"\s+")


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace (including newlines) to single spaces."""
    return _WHITESPACE.sub(" ", text or "").strip()


def composite_limit(max_length: int) -> int:
    """Length bound for multi-section summaries.

    Composite narratives may overflow ``max_length`` by
    ``min(10, max_length // 20)`` characters.
    """
    return max_length + min(10, max_length // 20)


def shorten_text(text: str, max_length: int) -> str:
    """Truncate text to at most max_length characters at a word boundary.

    The result ends with "..." when anything was cut. Words are only split
    when the first word alone does not fit.
    """
    text = text.strip()
    if len(text) <= max_length:
        return text
    if max_length <= len(ELLIPSIS):
        return text[:max_length]

    budget = max_length - len(ELLIPSIS)
    candidate = text[:budget]
    if not text[budget].isspace():
        last_space = candidate.rfind(" ")
        if last_space > 0:
            candidate = candidate[:last_space]
    candidate = candidate.rstrip(" ,;:-")
    if not candidate:
        candidate = text[:budget]
    return candidate + ELLIPSIS


def count_statement(issue_count: int, comment_count: int, worklog_count: int | None = None) -> str:
    """Bare activity count line used for degraded and disabled summaries."""
    text = f"Recent activity: {issue_count} issues, {comment_count} comments"
    if worklog_count is not None:
        text += f", {worklog_count} worklog entries"
    return text
