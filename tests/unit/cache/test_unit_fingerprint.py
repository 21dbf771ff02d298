# tests/unit/cache/test_unit_fingerprint.py - v2
"""Tests for cache/fingerprint.py."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

import pytest

from myday.cache.fingerprint import compute_report_fingerprint
from myday.config.report_config import ReportConfig
from myday.core.models import Comment


def _fingerprint(report_date, config, issues, comments_by_issue, worklogs):
    return compute_report_fingerprint(report_date, config, issues, comments_by_issue, worklogs)


class TestDeterminism:
    def test_same_inputs_same_id(
        self, report_date, report_config, sample_issues, sample_comments_by_issue, sample_worklogs
    ):
        a = _fingerprint(report_date, report_config, sample_issues, sample_comments_by_issue, sample_worklogs)
        b = _fingerprint(report_date, report_config, sample_issues, sample_comments_by_issue, sample_worklogs)
        assert a.report_id == b.report_id
        assert a.digest == b.digest

    def test_input_order_irrelevant(
        self, report_date, report_config, sample_issues, sample_comments_by_issue, sample_worklogs
    ):
        a = _fingerprint(report_date, report_config, sample_issues, sample_comments_by_issue, sample_worklogs)
        reordered_comments = {
            key: list(reversed(comments))
            for key, comments in reversed(list(sample_comments_by_issue.items()))
        }
        b = _fingerprint(
            report_date, report_config, list(reversed(sample_issues)), reordered_comments,
            sample_worklogs,
        )
        assert a.report_id == b.report_id

    def test_naive_timestamp_treated_as_utc(self, report_date, report_config, sample_issues):
        aware = sample_issues[0]
        naive = aware.model_copy(update={"updated": aware.updated.replace(tzinfo=None)})
        a = _fingerprint(report_date, report_config, [aware], {}, [])
        b = _fingerprint(report_date, report_config, [naive], {}, [])
        assert a.digest == b.digest

    def test_offset_timestamp_normalized(self, report_date, report_config, sample_issues):
        utc = sample_issues[0]
        shifted = utc.model_copy(
            update={"updated": utc.updated.astimezone(timezone(timedelta(hours=2)))}
        )
        a = _fingerprint(report_date, report_config, [utc], {}, [])
        b = _fingerprint(report_date, report_config, [shifted], {}, [])
        assert a.digest == b.digest

    def test_empty_inputs_are_valid(self, report_date, report_config):
        fp = _fingerprint(report_date, report_config, [], {}, [])
        assert len(fp.digest) == 64


class TestSensitivity:
    def test_timestamp_change(self, report_date, report_config, sample_issues):
        changed = sample_issues[0].model_copy(
            update={"updated": sample_issues[0].updated + timedelta(seconds=1)}
        )
        a = _fingerprint(report_date, report_config, sample_issues, {}, [])
        b = _fingerprint(report_date, report_config, [changed, sample_issues[1]], {}, [])
        assert a.report_id != b.report_id

    def test_added_comment(
        self, report_date, report_config, sample_issues, sample_comments_by_issue
    ):
        a = _fingerprint(report_date, report_config, sample_issues, sample_comments_by_issue, [])
        extended = {k: list(v) for k, v in sample_comments_by_issue.items()}
        extended["INFRA-101"].append(
            Comment(id="c9", body="More", created=datetime(2026, 10, 19, 15, tzinfo=timezone.utc))
        )
        b = _fingerprint(report_date, report_config, sample_issues, extended, [])
        assert a.report_id != b.report_id

    def test_removed_worklog(self, report_date, report_config, sample_issues, sample_worklogs):
        a = _fingerprint(report_date, report_config, sample_issues, {}, sample_worklogs)
        b = _fingerprint(report_date, report_config, sample_issues, {}, [])
        assert a.report_id != b.report_id

    def test_config_flag_toggle(self, report_date, sample_issues):
        a = _fingerprint(report_date, ReportConfig(), sample_issues, {}, [])
        b = _fingerprint(report_date, ReportConfig(show_quality=True), sample_issues, {}, [])
        assert a.report_id != b.report_id

    @pytest.mark.parametrize(
        "change",
        [
            {"prioritize_recent_work": False},
            {"fallback_strategy": "strict"},
            {"min_meaningful_comment_chars": 10},
            {"include_technical_details": False},
            {"summary_style": "brief"},
        ],
    )
    def test_narrative_setting_toggle(self, report_date, sample_issues, change):
        a = _fingerprint(report_date, ReportConfig(), sample_issues, {}, [])
        b = _fingerprint(report_date, ReportConfig(**change), sample_issues, {}, [])
        assert a.report_id != b.report_id

    def test_date_change(self, report_config, sample_issues):
        a = _fingerprint(date(2026, 10, 19), report_config, sample_issues, {}, [])
        b = _fingerprint(date(2026, 10, 20), report_config, sample_issues, {}, [])
        assert a.digest != b.digest


class TestReportId:
    def test_format(self, report_date, report_config):
        fp = _fingerprint(report_date, report_config, [], {}, [])
        assert re.fullmatch(r"2026-10-19_[0-9a-f]{12}", fp.report_id)
        assert fp.report_id.endswith(fp.digest[:12])
