# tests/conftest.py - v2
"""Shared test fixtures for unit and integration tests.

Provides sample tracker records, snapshots and temp cache directories.
No network access; all I/O stays under tmp_path.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from myday.config.report_config import ReportConfig
from myday.core.models import ActivitySnapshot, Comment, Issue, WorklogEntry
from myday.logging.context import clear_context

REPORT_DATE = date(2026, 10, 19)


# === FIXTURES: Sample data ===


@pytest.fixture
def report_date() -> date:
    return REPORT_DATE


@pytest.fixture
def sample_issues() -> list[Issue]:
    """Two issues, one in progress and one done."""
    return [
        Issue(
            id="10001",
            key="INFRA-101",
            summary="Provision VPC with Terraform",
            status="In Progress",
            priority="High",
            issue_type="Task",
            updated=datetime(2026, 10, 19, 14, 5, tzinfo=timezone.utc),
            fields={"Team": "Platform"},
        ),
        Issue(
            id="10002",
            key="API-42",
            summary="Fix OAuth token refresh",
            status="Done",
            priority="Medium",
            issue_type="Bug",
            updated=datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def sample_comments_by_issue() -> dict[str, list[Comment]]:
    return {
        "INFRA-101": [
            Comment(
                id="c1",
                author="alex",
                body="Completed Terraform deployment to AWS and validated the VPC",
                created=datetime(2026, 10, 19, 13, 0, tzinfo=timezone.utc),
            ),
        ],
        "API-42": [
            Comment(
                id="c2",
                author="alex",
                body="Fixed the refresh race in the OAuth client and merged the change",
                created=datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc),
            ),
            Comment(
                id="c3",
                author="sam",
                body="ok",
                created=datetime(2026, 10, 19, 9, 15, tzinfo=timezone.utc),
            ),
        ],
    }


@pytest.fixture
def sample_worklogs() -> list[WorklogEntry]:
    return [
        WorklogEntry(
            id="w1",
            issue_id="10001",
            started=datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc),
            comment="Terraform plan review",
            time_spent_seconds=5400,
        ),
    ]


@pytest.fixture
def sample_snapshot(
    sample_issues: list[Issue],
    sample_comments_by_issue: dict[str, list[Comment]],
    sample_worklogs: list[WorklogEntry],
) -> ActivitySnapshot:
    return ActivitySnapshot(
        issues=sample_issues,
        comments_by_issue=sample_comments_by_issue,
        worklogs=sample_worklogs,
    )


@pytest.fixture
def trivial_snapshot() -> ActivitySnapshot:
    """One issue whose only comment is an acknowledgement."""
    return ActivitySnapshot(
        issues=[Issue(id="1", key="OPS-1", summary="Rotate keys", status="To Do")],
        comments_by_issue={"OPS-1": [Comment(id="c1", body="ok")]},
    )


@pytest.fixture
def report_config() -> ReportConfig:
    return ReportConfig()


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_cache_dir(tmp_path: Path) -> Path:
    """Temporary report cache root."""
    cache_dir = tmp_path / "cache"
    cache_dir.mkdir()
    return cache_dir


@pytest.fixture
def snapshot_file(tmp_path: Path, sample_snapshot: ActivitySnapshot) -> Path:
    """The sample snapshot written as JSON, as the sync step would."""
    path = tmp_path / "snapshot.json"
    path.write_text(sample_snapshot.model_dump_json(indent=2), encoding="utf-8")
    return path


@pytest.fixture
def trivial_snapshot_file(tmp_path: Path, trivial_snapshot: ActivitySnapshot) -> Path:
    path = tmp_path / "trivial.json"
    path.write_text(json.dumps(trivial_snapshot.model_dump(mode="json")), encoding="utf-8")
    return path


# === FIXTURES: Isolation ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
