# src/report/renderer.py - v2
"""Console and markdown report layouts.

The renderer only formats: the composite summary arrives precomputed
from the assembler. Per-issue "today's work" lines are produced here
through the summarizer when summarization is enabled and the issue's
comments pass the meaningfulness gate.
"""

from __future__ import annotations

import logging
from datetime import date, datetime

from myday.config.report_config import ReportConfig
from myday.core.models import ActivitySnapshot, Comment, Issue, WorklogEntry
from myday.summarizer.base_summarizer import BaseSummarizer
from myday.summarizer.gate import is_meaningful
from myday.summarizer.models import StyleConfig, SummaryResult
from myday.tracking.exporter import format_debug_summary

logger = logging.getLogger(__name__)

STATUS_GROUPS: tuple[str, ...] = ("In Progress", "Done", "To Do")

_CONSOLE_RULE = "=" * 50
_GROUP_RULE = "-" * 30
_MAX_TECHNOLOGIES = 5

_SKIPPED_REASON = "No meaningful comment content found for AI summarization."
_SKIPPED_HINT = (
    "Consider adding more detailed comments to your tickets for better AI insights."
)

_STATUS_ICONS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("in progress", "in-progress"), "🔄"),
    (("done", "closed", "resolved"), "✅"),
    (("to do", "todo", "open", "new"), "📋"),
    (("blocked",), "🚫"),
    (("review", "code review"), "👀"),
)

_PRIORITY_ICONS: dict[str, str] = {
    "highest": "🔴",
    "critical": "🔴",
    "high": "🟠",
    "medium": "🟡",
    "low": "🟢",
    "lowest": "🔵",
}

_STANDARD_FIELDS: dict[str, str] = {
    "status": "status",
    "priority": "priority",
    "issuetype": "issue_type",
    "issue_type": "issue_type",
    "type": "issue_type",
}


# === GROUPING ===


def status_group(issue: Issue) -> str:
    """Map a free-form status name onto one of STATUS_GROUPS."""
    status = issue.status.lower()
    if any(s in status for s in ("progress", "development", "review")):
        return "In Progress"
    if any(s in status for s in ("done", "closed", "resolved")):
        return "Done"
    return "To Do"


def group_issues_by_status(issues: list[Issue]) -> dict[str, list[Issue]]:
    groups: dict[str, list[Issue]] = {}
    for issue in issues:
        groups.setdefault(status_group(issue), []).append(issue)
    return groups


def field_value(issue: Issue, field_name: str) -> str:
    """Value of a custom field (case-insensitive name) or a standard attribute."""
    wanted = field_name.strip().lower()
    for name, value in issue.fields.items():
        if name.lower() == wanted:
            return value
    attribute = _STANDARD_FIELDS.get(wanted)
    if attribute:
        return str(getattr(issue, attribute))
    return ""


def group_issues_by_field(issues: list[Issue], field_name: str) -> dict[str, list[Issue]]:
    """Group issues by field value; missing values land under 'Unassigned'."""
    groups: dict[str, list[Issue]] = {}
    for issue in issues:
        groups.setdefault(field_value(issue, field_name) or "Unassigned", []).append(issue)
    return dict(sorted(groups.items()))


# === RENDERER ===


class ReportRenderer:
    """Render an activity snapshot in the configured format."""

    def __init__(
        self,
        config: ReportConfig,
        summarizer: BaseSummarizer | None = None,
        style: StyleConfig | None = None,
    ) -> None:
        self._config = config
        self._summarizer = summarizer
        self._style = style or StyleConfig.from_report_config(config)
        self._min_chars = config.min_meaningful_comment_chars

    def render(
        self,
        snapshot: ActivitySnapshot,
        target_date: date,
        summary: SummaryResult | None = None,
    ) -> str:
        if self._config.report_format == "markdown":
            lines = self._markdown(snapshot, target_date, summary)
        else:
            lines = self._console(snapshot, target_date, summary)
        return "\n".join(lines) + "\n"

    # --- Console ---

    def _console(
        self, snapshot: ActivitySnapshot, target_date: date, summary: SummaryResult | None
    ) -> list[str]:
        grouping = self._config.group_by_field
        lines = [
            f"🚀 Daily Standup Report - {_long_date(target_date)}",
            _CONSOLE_RULE,
            f"📝 Issues grouped by {grouping.title()}" if grouping
            else "📝 Issues with your comments today",
            "",
        ]

        if summary is not None:
            if summary.status == "skipped":
                lines += ["⚠️  AI SUMMARY SKIPPED", _SKIPPED_REASON, _SKIPPED_HINT, ""]
            else:
                lines += ["🤖 AI SUMMARY OF TODAY'S WORK", summary.text, ""]
                if self._config.show_quality and summary.quality is not None:
                    lines += _quality_lines(summary)
                    lines.append("")

        lines.append("📊 SUMMARY")
        lines += [f"• {label}: {value}" for label, value in self._counts(snapshot)]
        lines += [f"• {label}: {value}" for label, value in _technologies(summary)]
        lines.append("")

        if grouping:
            for name, issues in group_issues_by_field(snapshot.issues, grouping).items():
                lines.append(f"🏷️  {name.upper()} ({len(issues)} issues)")
                lines.append(_GROUP_RULE)
                groups = group_issues_by_status(issues)
                for title, key in (
                    ("🔄 Currently Working On:", "In Progress"),
                    ("✅ Recently Completed:", "Done"),
                    ("📋 To Do:", "To Do"),
                ):
                    if groups.get(key):
                        lines.append(title)
                        for issue in groups[key]:
                            lines += self._console_issue(issue, snapshot)
                lines.append("")
        else:
            groups = group_issues_by_status(snapshot.issues)
            for title, key in (
                ("🔄 CURRENTLY WORKING ON", "In Progress"),
                ("✅ RECENTLY COMPLETED", "Done"),
                ("📋 TO DO", "To Do"),
            ):
                if groups.get(key):
                    lines.append(title)
                    for issue in groups[key]:
                        lines += self._console_issue(issue, snapshot)
                    lines.append("")

        if snapshot.worklogs:
            lines.append("⏰ WORK LOG")
            for worklog in snapshot.worklogs:
                lines += _console_worklog(worklog)
            lines.append("")

        if self._config.debug and summary is not None and summary.debug_report is not None:
            lines += ["🐛 DEBUG INFORMATION", _CONSOLE_RULE]
            lines.append(format_debug_summary(summary.debug_report, self._config.verbose))
            lines.append("")

        lines += ["---", "Generated by myday CLI 🤖"]
        return lines

    def _console_issue(self, issue: Issue, snapshot: ActivitySnapshot) -> list[str]:
        comments = snapshot.comments_by_issue.get(issue.key, [])
        lines = [f"  {_status_icon(issue.status)} {issue.key} {issue.summary}".rstrip()]
        work = self._todays_work(issue, comments)
        if work:
            lines.append(f"    💬 Today's work: {work}")
        if self._config.detailed:
            lines.append(
                f"    Priority: {_priority_icon(issue.priority)} {issue.priority} "
                f"| Status: {issue.status}"
            )
            if issue.updated is not None:
                lines.append(f"    Updated: {_short_timestamp(issue.updated)}")
            if comments:
                lines.append(f"    Comments today: {len(comments)}")
                lines.append(f"    Latest: {_latest(comments).body}")
        lines.append("")
        return lines

    # --- Markdown ---

    def _markdown(
        self, snapshot: ActivitySnapshot, target_date: date, summary: SummaryResult | None
    ) -> list[str]:
        grouping = self._config.group_by_field
        lines = [
            f"# Daily Standup Report - {_long_date(target_date)}",
            "",
            f"*Issues grouped by {grouping.title()}*" if grouping
            else "*Issues with your comments today*",
            "",
        ]

        if summary is not None:
            if summary.status == "skipped":
                lines += ["## ⚠️ AI Summary Skipped", "", _SKIPPED_REASON, _SKIPPED_HINT, ""]
            else:
                lines += ["## 🤖 AI Summary of Today's Work", "", summary.text, ""]
                if self._config.show_quality and summary.quality is not None:
                    lines += ["### 📊 Summary Quality Indicators", "", "```"]
                    lines += _quality_lines(summary)[2:]
                    lines += ["```", ""]

        lines += ["## Summary", ""]
        lines += [f"- **{label}**: {value}" for label, value in self._counts(snapshot)]
        lines += [f"- **{label}**: {value}" for label, value in _technologies(summary)]
        lines.append("")

        if grouping:
            for name, issues in group_issues_by_field(snapshot.issues, grouping).items():
                lines += [f"## 🏷️ {name} ({len(issues)} issues)", ""]
                groups = group_issues_by_status(issues)
                for title, key in (
                    ("### 🔄 Currently Working On", "In Progress"),
                    ("### ✅ Recently Completed", "Done"),
                    ("### 📋 To Do", "To Do"),
                ):
                    if groups.get(key):
                        lines += [title, ""]
                        for issue in groups[key]:
                            lines += self._markdown_issue(issue, snapshot)
        else:
            groups = group_issues_by_status(snapshot.issues)
            for title, key in (
                ("## 🔄 Currently Working On", "In Progress"),
                ("## ✅ Recently Completed", "Done"),
                ("## 📋 To Do", "To Do"),
            ):
                if groups.get(key):
                    lines += [title, ""]
                    for issue in groups[key]:
                        lines += self._markdown_issue(issue, snapshot)

        if snapshot.worklogs:
            lines += ["## ⏰ Work Log", ""]
            for worklog in snapshot.worklogs:
                lines += _markdown_worklog(worklog)

        if self._config.debug and summary is not None and summary.debug_report is not None:
            lines += ["## 🐛 Debug Information", "", "```"]
            lines.append(format_debug_summary(summary.debug_report, self._config.verbose))
            lines += ["```", ""]

        lines += ["---", "*Generated by myday CLI*"]
        return lines

    def _markdown_issue(self, issue: Issue, snapshot: ActivitySnapshot) -> list[str]:
        comments = snapshot.comments_by_issue.get(issue.key, [])
        lines = [f"- {_status_icon(issue.status)} **[{issue.key}]** {issue.summary}".rstrip()]
        work = self._todays_work(issue, comments)
        if work:
            lines.append(f"  - 💬 **Today's work**: {work}")
        if self._config.detailed:
            lines.append(f"  - Priority: {_priority_icon(issue.priority)} {issue.priority}")
            lines.append(f"  - Status: {issue.status}")
            if issue.updated is not None:
                lines.append(f"  - Updated: {_short_timestamp(issue.updated)}")
            if comments:
                lines.append(f"  - Comments today: {len(comments)}")
                lines.append(f"  - Latest comment: {_latest(comments).body}")
        lines.append("")
        return lines

    # --- Shared ---

    def _counts(self, snapshot: ActivitySnapshot) -> list[tuple[str, int]]:
        counts = [("Issues with comments today", len(snapshot.issues))]
        if self._config.group_by_field:
            groups = group_issues_by_field(snapshot.issues, self._config.group_by_field)
            counts.append((f"Groups by {self._config.group_by_field}", len(groups)))
        counts.append(("Total comments added", snapshot.comment_count))
        counts.append(("Worklog entries", len(snapshot.worklogs)))
        return counts

    def _todays_work(self, issue: Issue, comments: list[Comment]) -> str:
        if (
            self._summarizer is None
            or not self._config.summarization_enabled
            or not is_meaningful(comments, self._min_chars)
        ):
            return ""
        return self._summarizer.summarize_issue(issue, comments, self._style).text


# === HELPERS ===


def _quality_lines(summary: SummaryResult) -> list[str]:
    quality = summary.quality
    if quality is None:
        return []
    lines = [
        "📊 SUMMARY QUALITY INDICATORS",
        _GROUP_RULE,
        f"Overall Quality Score: {quality.score}/100",
        "",
        "Quality Factors:",
    ]
    lines += [f"  {'✓' if f.passed else '⚠'} {f.detail}" for f in quality.factors]
    lines += ["", "Recommendations:"]
    lines += [f"  • {rec}" for rec in quality.recommendations]
    return lines


def _technologies(summary: SummaryResult | None) -> list[tuple[str, str]]:
    if summary is None or summary.status == "skipped" or not summary.technical_terms:
        return []
    return [("Technologies involved", ", ".join(summary.technical_terms[:_MAX_TECHNOLOGIES]))]


def _console_worklog(worklog: WorklogEntry) -> list[str]:
    lines = [f"  ⏱️  [{worklog.issue_id}] {_short_timestamp(worklog.started)}".rstrip()]
    if worklog.comment:
        lines.append(f"    {worklog.comment}")
    lines.append("")
    return lines


def _markdown_worklog(worklog: WorklogEntry) -> list[str]:
    lines = [f"- ⏱️ **[{worklog.issue_id}]** {_short_timestamp(worklog.started)}".rstrip()]
    if worklog.comment:
        lines.append(f"  - {worklog.comment}")
    lines.append("")
    return lines


def _latest(comments: list[Comment]) -> Comment:
    return comments[-1]


def _status_icon(status: str) -> str:
    lowered = status.lower()
    for names, icon in _STATUS_ICONS:
        if lowered in names:
            return icon
    return "📝"


def _priority_icon(priority: str) -> str:
    return _PRIORITY_ICONS.get(priority.lower(), "⚪")


def _long_date(value: date) -> str:
    """'October 19, 2026'."""
    return f"{value:%B} {value.day}, {value.year}"


def _short_timestamp(value: datetime | None) -> str:
    """'Oct 19, 14:05'."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value:%H:%M}"
