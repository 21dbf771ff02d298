# src/core/models.py - v1
"""Normalized ticket-tracker records shared across modules.

These are the shapes the sync layer writes to disk and every other
package reads. All fields default so that sparse or partially broken
records still validate; consumers must cope with empty strings and
missing timestamps.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


def _coerce_text(value: Any) -> str:
    """Flatten None and rich-text bodies ({"text": ...}) into plain strings."""
    if value is None:
        return ""
    if isinstance(value, dict):
        return str(value.get("text") or "")
    return str(value)


# === TICKET RECORDS ===


class Issue(BaseModel):
    """A single tracked issue as of its last update."""

    id: str = ""
    key: str = ""
    summary: str = ""
    description: str = ""
    status: str = ""
    priority: str = ""
    issue_type: str = ""
    updated: datetime | None = None
    fields: dict[str, str] = Field(default_factory=dict)

    @field_validator(
        "id", "key", "summary", "description", "status", "priority", "issue_type",
        mode="before",
    )
    @classmethod
    def _text(cls, v: Any) -> str:
        return _coerce_text(v)

    @field_validator("fields", mode="before")
    @classmethod
    def _fields(cls, v: Any) -> dict[str, str]:
        if not isinstance(v, dict):
            return {}
        return {str(k): _coerce_text(val) for k, val in v.items()}

    @property
    def text(self) -> str:
        """Summary and description joined for vocabulary scans."""
        return f"{self.summary} {self.description}".strip()


class Comment(BaseModel):
    """A comment left on an issue."""

    id: str = ""
    author: str = ""
    body: str = ""
    created: datetime | None = None
    issue_key: str = ""

    @field_validator("id", "author", "body", "issue_key", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _coerce_text(v)


class WorklogEntry(BaseModel):
    """Time logged against an issue."""

    id: str = ""
    issue_id: str = ""
    started: datetime | None = None
    comment: str = ""
    time_spent_seconds: int = 0

    @field_validator("id", "issue_id", "comment", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _coerce_text(v)


# === SNAPSHOT ===


class ActivitySnapshot(BaseModel):
    """Everything one report is generated from."""

    issues: list[Issue] = Field(default_factory=list)
    comments_by_issue: dict[str, list[Comment]] = Field(default_factory=dict)
    worklogs: list[WorklogEntry] = Field(default_factory=list)
    synced_at: datetime | None = None

    def all_comments(self) -> list[Comment]:
        """Flatten per-issue comments, stamping each with its issue key."""
        flattened: list[Comment] = []
        for issue_key, comments in self.comments_by_issue.items():
            for comment in comments:
                if comment.issue_key == issue_key:
                    flattened.append(comment)
                else:
                    flattened.append(comment.model_copy(update={"issue_key": issue_key}))
        return flattened

    @property
    def comment_count(self) -> int:
        return sum(len(c) for c in self.comments_by_issue.values())
