# tests/unit/report/test_unit_report_exporter.py - v1
"""Tests for report/exporter.py."""

from __future__ import annotations

from datetime import date

from myday.report.exporter import export_markdown, render_note


class TestRenderNote:
    def test_front_matter(self):
        note = render_note("body", date(2026, 10, 19), ["standup", "daily"])
        lines = note.splitlines()
        assert lines[0] == "---"
        assert "date: 2026-10-19" in lines
        assert "title: Daily Standup Report - October 19, 2026" in lines
        assert "type: daily-report" in lines
        assert "  - standup" in lines
        assert "  - 2026-10-19" in lines
        assert any(line.startswith("created: ") for line in lines)

    def test_navigation_crosses_month(self):
        note = render_note("body", date(2026, 11, 1), [])
        assert "← [[2026-10-31]] | [[2026-11-02]] →" in note

    def test_body_and_tags_footer(self):
        note = render_note("report line\n\n", date(2026, 10, 19), ["standup"])
        assert "report line\n\n---" in note
        assert note.rstrip().endswith("#standup #2026-10-19")

    def test_custom_date_format(self):
        note = render_note("body", date(2026, 10, 19), [], file_date_format="%d-%m-%Y")
        assert "[[18-10-2026]]" in note


class TestExportMarkdown:
    def test_writes_named_file(self, tmp_path):
        path = export_markdown("body", date(2026, 10, 19), tmp_path / "notes", ["standup"])
        assert path == tmp_path / "notes" / "2026-10-19.md"
        assert "#standup #2026-10-19" in path.read_text(encoding="utf-8")

    def test_overwrites(self, tmp_path):
        export_markdown("first", date(2026, 10, 19), tmp_path)
        path = export_markdown("second", date(2026, 10, 19), tmp_path)
        text = path.read_text(encoding="utf-8")
        assert "second" in text
        assert "first" not in text
