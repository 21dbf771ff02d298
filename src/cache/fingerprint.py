# src/cache/fingerprint.py - v3
"""Content-addressed report fingerprinting.

The digest covers the report date, the output-affecting configuration
and the sorted identity of every input record. Collections are sorted
by natural key before hashing, so input order never matters.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone

from myday.cache.models import ReportFingerprint
from myday.config.report_config import ReportConfig
from myday.core.models import Comment, Issue, WorklogEntry

_SECTION_SEPARATOR = "|"
_ITEM_SEPARATOR = ","


def compute_report_fingerprint(
    report_date: date,
    config: ReportConfig,
    issues: Iterable[Issue],
    comments_by_issue: Mapping[str, Iterable[Comment]],
    worklogs: Iterable[WorklogEntry],
) -> ReportFingerprint:
    """Derive the fingerprint for one report.

    Args:
        report_date: Date the report covers.
        config: Allow-listed output-affecting configuration.
        issues: Issues in the report (any order).
        comments_by_issue: Comments keyed by issue key (any order).
        worklogs: Worklog entries (any order).

    Returns:
        ReportFingerprint whose ``report_id`` names the cache entry.
    """
    issue_items = sorted(
        f"{issue.key}:{_timestamp(issue.updated)}" for issue in issues
    )
    comment_items = sorted(
        f"{issue_key}:{comment.id}:{_timestamp(comment.created)}"
        for issue_key, comments in comments_by_issue.items()
        for comment in comments
    )
    worklog_items = sorted(
        f"{worklog.issue_id}:{_timestamp(worklog.started)}" for worklog in worklogs
    )

    canonical = _SECTION_SEPARATOR.join([
        f"date={report_date.isoformat()}",
        f"config={config.canonical()}",
        "issues=" + _ITEM_SEPARATOR.join(issue_items),
        "comments=" + _ITEM_SEPARATOR.join(comment_items),
        "worklogs=" + _ITEM_SEPARATOR.join(worklog_items),
    ])
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return ReportFingerprint(report_date=report_date, digest=digest)


def _timestamp(value: datetime | None) -> str:
    """UTC ISO-8601 form; naive values are taken as UTC, None as empty."""
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
