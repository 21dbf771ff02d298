# tests/unit/report/test_unit_assembler.py - v2
"""Tests for report/assembler.py."""

from __future__ import annotations

from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

from myday.cache.base_cache_store import BaseReportCache, CacheCorruptError, CacheIOError
from myday.cache.json_store import JsonReportCache
from myday.config.report_config import ReportConfig
from myday.core.models import ActivitySnapshot, Comment, Issue
from myday.logging.context import get_context
from myday.report.assembler import NoCachedReportError, ReportAssembler
from myday.summarizer.rule_engine import RuleBasedSummarizer


class CountingSummarizer(RuleBasedSummarizer):
    """Rule engine that counts how often it is asked to summarize."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.summarize_calls = 0
        self.issue_calls = 0

    def summarize(self, *args, **kwargs):
        self.summarize_calls += 1
        return super().summarize(*args, **kwargs)

    def summarize_issue(self, *args, **kwargs):
        self.issue_calls += 1
        return super().summarize_issue(*args, **kwargs)


@pytest.fixture
def store(tmp_cache_dir) -> JsonReportCache:
    return JsonReportCache(tmp_cache_dir)


@pytest.fixture
def summarizer() -> CountingSummarizer:
    return CountingSummarizer()


@pytest.fixture
def assembler(store, summarizer) -> ReportAssembler:
    return ReportAssembler(ReportConfig(), store, summarizer)


class TestCacheUse:
    def test_miss_then_hit(self, assembler, summarizer, sample_snapshot, report_date):
        first = assembler.generate(sample_snapshot, report_date)
        calls_after_first = (summarizer.summarize_calls, summarizer.issue_calls)

        second = assembler.generate(sample_snapshot, report_date)

        assert first.cache_status == "miss"
        assert first.cached is True
        assert second.cache_status == "hit"
        assert second.content == first.content
        assert second.report_id == first.report_id
        assert second.summary is None
        assert (summarizer.summarize_calls, summarizer.issue_calls) == calls_after_first
        assert summarizer.summarize_calls == 1

    def test_stored_entry_metadata(self, assembler, store, sample_snapshot, report_date):
        outcome = assembler.generate(sample_snapshot, report_date)
        entry = store.get(outcome.report_id)
        assert entry.report_date == report_date
        assert entry.format == "console"
        assert entry.issue_count == 2
        assert entry.comment_count == 3
        assert entry.worklog_count == 1
        assert entry.summarized is True
        assert entry.generated_at.tzinfo is not None
        assert entry.generated_at.utcoffset() == timezone.utc.utcoffset(None)
        assert entry.config == ReportConfig()

    def test_config_change_is_a_different_report(
        self, store, summarizer, sample_snapshot, report_date
    ):
        ReportAssembler(ReportConfig(), store, summarizer).generate(
            sample_snapshot, report_date
        )
        outcome = ReportAssembler(
            ReportConfig(detailed=True), store, summarizer
        ).generate(sample_snapshot, report_date)
        assert outcome.cache_status == "miss"
        assert len(store.list_entries()) == 2

    def test_corrupt_entry_regenerated(self, assembler, store, sample_snapshot, report_date):
        first = assembler.generate(sample_snapshot, report_date)
        (store.root / f"{first.report_id}.json").write_text("{")

        second = assembler.generate(sample_snapshot, report_date)

        assert second.cache_status == "regenerated"
        assert second.cached is True
        assert store.get(first.report_id) is not None

    def test_write_failure_still_returns_content(
        self, summarizer, sample_snapshot, report_date
    ):
        failing = MagicMock(spec=BaseReportCache)
        failing.get.return_value = None
        failing.put.side_effect = CacheIOError("disk full")
        outcome = ReportAssembler(ReportConfig(), failing, summarizer).generate(
            sample_snapshot, report_date
        )
        assert outcome.cache_status == "miss"
        assert outcome.cached is False
        assert "Daily Standup Report" in outcome.content

    def test_read_failure_falls_back(self, summarizer, sample_snapshot, report_date):
        failing = MagicMock(spec=BaseReportCache)
        failing.get.side_effect = CacheIOError("permission denied")
        outcome = ReportAssembler(ReportConfig(), failing, summarizer).generate(
            sample_snapshot, report_date
        )
        assert outcome.cache_status == "miss"
        failing.put.assert_called_once()

    def test_context_cleared(self, assembler, sample_snapshot, report_date):
        assembler.generate(sample_snapshot, report_date)
        assert get_context().report_id is None


@pytest.fixture
def two_issue_snapshot() -> ActivitySnapshot:
    """AAA-1 updated in the morning, ZZZ-2 in the afternoon."""
    return ActivitySnapshot(
        issues=[
            Issue(
                id="1", key="AAA-1", summary="Alpha", status="In Progress",
                updated=datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc),
            ),
            Issue(
                id="2", key="ZZZ-2", summary="Zulu", status="In Progress",
                updated=datetime(2026, 10, 19, 16, 0, tzinfo=timezone.utc),
            ),
        ],
        comments_by_issue={
            "AAA-1": [Comment(id="a", body="Reviewed the alpha rollout plan")],
            "ZZZ-2": [Comment(id="z", body="Reviewed the zulu rollout plan")],
        },
    )


class TestStyleFromConfig:
    def test_issue_order_setting_is_a_different_report(
        self, store, two_issue_snapshot, report_date
    ):
        recent = ReportAssembler(ReportConfig(), store).generate(two_issue_snapshot, report_date)
        by_key = ReportAssembler(ReportConfig(prioritize_recent_work=False), store).generate(
            two_issue_snapshot, report_date
        )

        assert by_key.cache_status == "miss"
        assert by_key.report_id != recent.report_id
        assert recent.summary.text.index("ZZZ-2") < recent.summary.text.index("AAA-1")
        assert by_key.summary.text.index("AAA-1") < by_key.summary.text.index("ZZZ-2")

    def test_style_mirrors_config(self, store):
        config = ReportConfig(
            summary_style="brief",
            max_summary_length=120,
            include_technical_details=False,
            prioritize_recent_work=False,
            fallback_strategy="strict",
        )
        style = ReportAssembler(config, store).style
        assert style.style == "brief"
        assert style.max_length == 120
        assert style.include_technical_details is False
        assert style.prioritize_recent_work is False
        assert style.fallback_strategy == "strict"
        assert style.debug is False

    def test_gate_threshold_from_config(self, store, summarizer, sample_snapshot, report_date):
        assembler = ReportAssembler(
            ReportConfig(min_meaningful_comment_chars=500), store, summarizer
        )
        outcome = assembler.generate(sample_snapshot, report_date)
        assert outcome.summary.status == "skipped"
        assert summarizer.summarize_calls == 0


class TestTraceCollection:
    def test_trace_collected_without_changing_report(self, sample_snapshot, report_date):
        plain = ReportAssembler(ReportConfig(), None)
        traced = ReportAssembler(ReportConfig(), None, collect_trace=True)

        outcome = traced.generate(sample_snapshot, report_date)

        assert traced.traces is True
        assert plain.traces is False
        assert outcome.summary.debug_report is not None
        assert "DEBUG INFORMATION" not in outcome.content
        assert outcome.report_id == plain.generate(sample_snapshot, report_date).report_id

    def test_backend_without_tracing(self, store):
        assembler = ReportAssembler(
            ReportConfig(summarization_mode="disabled"), store, collect_trace=True
        )
        assert assembler.summarizer.capabilities.debug_trace is False
        assert assembler.traces is False


class TestCacheOnly:
    def test_miss_raises(self, assembler, store, summarizer, sample_snapshot, report_date):
        with pytest.raises(NoCachedReportError) as exc_info:
            assembler.generate(sample_snapshot, report_date, cache_mode="only")
        assert str(exc_info.value) == "no cached report found for 2026-10-19 (cache-only mode)"
        assert summarizer.summarize_calls == 0
        assert store.list_entries() == []

    def test_hit_served(self, assembler, sample_snapshot, report_date):
        first = assembler.generate(sample_snapshot, report_date)
        outcome = assembler.generate(sample_snapshot, report_date, cache_mode="only")
        assert outcome.cache_status == "hit"
        assert outcome.content == first.content

    def test_corrupt_entry_not_regenerated(self, assembler, store, sample_snapshot, report_date):
        first = assembler.generate(sample_snapshot, report_date)
        (store.root / f"{first.report_id}.json").write_text("{")
        with pytest.raises(NoCachedReportError, match="corrupt"):
            assembler.generate(sample_snapshot, report_date, cache_mode="only")

    def test_cache_disabled(self, summarizer, sample_snapshot, report_date):
        assembler = ReportAssembler(ReportConfig(), None, summarizer)
        with pytest.raises(NoCachedReportError, match="caching is disabled"):
            assembler.generate(sample_snapshot, report_date, cache_mode="only")

    def test_error_is_lookup_error(self):
        assert issubclass(NoCachedReportError, LookupError)


class TestBypass:
    def test_no_read_no_write(self, assembler, store, sample_snapshot, report_date):
        assembler.generate(sample_snapshot, report_date)
        outcome = assembler.generate(sample_snapshot, report_date, cache_mode="bypass")
        assert outcome.cache_status == "bypass"
        assert outcome.cached is False
        assert outcome.summary is not None

    def test_nothing_stored(self, assembler, store, sample_snapshot, report_date):
        assembler.generate(sample_snapshot, report_date, cache_mode="bypass")
        assert store.list_entries() == []


class TestSummaryFlow:
    def test_trivial_comments_skip_summary(self, assembler, summarizer, trivial_snapshot, report_date):
        outcome = assembler.generate(trivial_snapshot, report_date)
        assert outcome.summary.status == "skipped"
        assert summarizer.summarize_calls == 0
        assert "AI SUMMARY SKIPPED" in outcome.content

    def test_skipped_entry_not_marked_summarized(
        self, assembler, store, trivial_snapshot, report_date
    ):
        outcome = assembler.generate(trivial_snapshot, report_date)
        assert store.get(outcome.report_id).summarized is False

    def test_summarization_disabled(self, store, summarizer, sample_snapshot, report_date):
        assembler = ReportAssembler(
            ReportConfig(summarization_enabled=False), store, summarizer
        )
        outcome = assembler.generate(sample_snapshot, report_date)
        assert outcome.summary is None
        assert summarizer.summarize_calls == 0
        assert "AI SUMMARY" not in outcome.content

    def test_default_summarizer_created(self, store, sample_snapshot, report_date):
        assembler = ReportAssembler(ReportConfig(summary_style="brief"), store)
        assert isinstance(assembler.summarizer, RuleBasedSummarizer)
        outcome = assembler.generate(sample_snapshot, report_date)
        assert outcome.summary.style == "brief"

    def test_no_summarizer_when_disabled(self, store):
        assembler = ReportAssembler(ReportConfig(summarization_enabled=False), store)
        assert assembler.summarizer is None


class TestExport:
    def test_export_records_path(self, assembler, store, sample_snapshot, report_date, tmp_path):
        outcome = assembler.generate(sample_snapshot, report_date)
        path = assembler.export(outcome, report_date, tmp_path / "notes", ["standup"])
        assert path.is_file()
        assert outcome.export_path == str(path)
        assert store.get(outcome.report_id).export_paths == {"markdown": str(path)}

    def test_hit_reports_previous_export(self, assembler, sample_snapshot, report_date, tmp_path):
        outcome = assembler.generate(sample_snapshot, report_date)
        path = assembler.export(outcome, report_date, tmp_path / "notes")
        again = assembler.generate(sample_snapshot, report_date)
        assert again.export_path == str(path)

    def test_export_without_cache(self, summarizer, sample_snapshot, report_date, tmp_path):
        assembler = ReportAssembler(ReportConfig(), None, summarizer)
        outcome = assembler.generate(sample_snapshot, report_date)
        path = assembler.export(outcome, report_date, tmp_path)
        assert path.name == "2026-10-19.md"


def test_corrupt_error_carries_id():
    err = CacheCorruptError("2026-10-19_abc", "bad json")
    assert err.report_id == "2026-10-19_abc"
    assert "2026-10-19_abc" in str(err)


def test_report_date_in_message():
    err = NoCachedReportError(date(2026, 1, 2), "2026-01-02_abc")
    assert "2026-01-02" in str(err)
