# src/summarizer/gate.py - v1
"""Meaningfulness gate: is there enough comment content to summarize?"""

from __future__ import annotations

from collections.abc import Iterable

from myday.core.models import Comment

DEFAULT_MIN_CHARS = 3


def is_meaningful_comment(comment: Comment | str, min_chars: int = DEFAULT_MIN_CHARS) -> bool:
    """A comment qualifies when its trimmed text is longer than min_chars."""
    text = comment.body if isinstance(comment, Comment) else comment
    return len((text or "").strip()) > min_chars


def is_meaningful(
    comments: Iterable[Comment | str], min_chars: int = DEFAULT_MIN_CHARS
) -> bool:
    """True when at least one comment qualifies.

    Short acknowledgements such as "ok" and whitespace-only bodies do not.
    """
    return any(is_meaningful_comment(c, min_chars) for c in comments)
