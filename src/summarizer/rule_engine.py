# src/summarizer/rule_engine.py - v2
"""Deterministic rule-based summarization engine.

Each call runs six stages in order:
    1. technical vocabulary extraction
    2. completion-state classification
    3. style-dependent narrative composition
    4. length enforcement (word-boundary truncation)
    5. technical-detail suppression
    6. quality scoring

With ``StyleConfig.debug`` set, every stage is recorded as a DebugStep.
Data problems never raise: the worst outcome is a degraded count
statement. Only invalid configuration under the strict fallback
strategy raises SummarizationConfigError.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from myday.core.models import Comment, Issue, WorklogEntry
from myday.summarizer.base_summarizer import BaseSummarizer, SummarizationConfigError
from myday.summarizer.gate import is_meaningful_comment
from myday.summarizer.models import (
    SUPPORTED_STYLES,
    CompletionState,
    StyleConfig,
    SummarizerCapabilities,
    SummaryResult,
)
from myday.summarizer.quality import DEFAULT_POLICY, QualityPolicy, assess_quality, is_generic
from myday.summarizer.text_utils import (
    composite_limit,
    count_statement,
    normalize_whitespace,
    shorten_text,
)
from myday.summarizer.vocabulary import (
    DEFAULT_VOCABULARY,
    Vocabulary,
    classify_completion,
    extract_technical_terms,
    primary_action,
    strip_terms,
    work_categories,
)
from myday.tracking.debug_tracer import DebugTracer
from myday.tracking.models import DebugReport

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 200
BRIEF_MAX_LENGTH = 80

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)

# Issue status substring -> phrasing used when an issue has no comment.
_STATUS_PREFIXES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("progress", "development"), "Working on"),
    (("review",), "Under review:"),
    (("done", "closed", "resolved"), "Completed"),
    (("blocked",), "Blocked:"),
)

_LEADS: dict[str, dict[CompletionState, str]] = {
    "technical": {
        "completed": "Completed",
        "in_progress": "In progress",
        "mixed": "Progress",
        "unknown": "Activity",
    },
    "business": {
        "completed": "Delivered",
        "in_progress": "Advancing",
        "mixed": "Delivered and advancing",
        "unknown": "Worked on",
    },
    "brief": {
        "completed": "Completed",
        "in_progress": "Working on",
        "mixed": "Progressing",
        "unknown": "Touched",
    },
}


class RuleBasedSummarizer(BaseSummarizer):
    """Embedded summarizer built from fixed, auditable rules."""

    def __init__(
        self,
        style: StyleConfig | None = None,
        vocabulary: Vocabulary | None = None,
        policy: QualityPolicy | None = None,
        min_meaningful_chars: int = 3,
    ) -> None:
        super().__init__(style)
        self._vocabulary = vocabulary or DEFAULT_VOCABULARY
        self._policy = policy or DEFAULT_POLICY
        self._min_chars = min_meaningful_chars
        self._last_debug_report: DebugReport | None = None

    @property
    def mode(self) -> str:
        return "embedded"

    @property
    def capabilities(self) -> SummarizerCapabilities:
        return SummarizerCapabilities(debug_trace=True, enhanced_context=True)

    @property
    def last_debug_report(self) -> DebugReport | None:
        return self._last_debug_report

    # --- Public API ---

    def summarize(
        self,
        issues: Sequence[Issue],
        comments: Sequence[Comment],
        worklogs: Sequence[WorklogEntry],
        style: StyleConfig | None = None,
    ) -> SummaryResult:
        return self._run(list(issues), list(comments), list(worklogs), style, composite=True)

    def summarize_issue(
        self,
        issue: Issue,
        comments: Sequence[Comment] = (),
        style: StyleConfig | None = None,
    ) -> SummaryResult:
        stamped = [
            c if c.issue_key else c.model_copy(update={"issue_key": issue.key})
            for c in comments
        ]
        return self._run([issue], stamped, [], style, composite=False)

    def summarize_worklogs(self, worklogs: Sequence[WorklogEntry]) -> str:
        if not worklogs:
            return "No work logged"
        hours = sum(w.time_spent_seconds for w in worklogs) / 3600
        text = f"Work logged on {len(worklogs)} items"
        if hours > 0:
            text += f" ({hours:.1f}h)"
        return text

    # --- Pipeline ---

    def _run(
        self,
        issues: list[Issue],
        comments: list[Comment],
        worklogs: list[WorklogEntry],
        style: StyleConfig | None,
        composite: bool,
    ) -> SummaryResult:
        style = style or self._style
        tracer = DebugTracer(enabled=style.debug, configuration=style.model_dump())
        style_name, max_length = self._resolve_style(style, tracer)
        texts = (
            [i.text for i in issues]
            + [c.body for c in comments]
            + [w.comment for w in worklogs]
        )

        if not issues and not comments and not worklogs:
            tracer.add_warning("empty_input", "No issues, comments or worklogs supplied", "high")

        with tracer.step("extract_technical_terms") as step:
            terms = extract_technical_terms(texts, self._vocabulary)
            step.output = terms
        if not terms:
            tracer.add_warning(
                "no_technical_terms", "No technical terms found in issue or comment text", "low"
            )

        with tracer.step("classify_completion") as step:
            state = classify_completion(texts + [i.status for i in issues], self._vocabulary)
            step.output = state

        sections = 0
        try:
            with tracer.step("compose_narrative", style=style_name) as step:
                text, sections = self._compose(
                    style_name, issues, comments, worklogs, state, terms, style, max_length
                )
                step.output = text
        except Exception as exc:
            logger.warning("Summary composition failed, using count statement: %s", exc)
            text = ""

        status = "generated"
        if not text:
            text = count_statement(len(issues), len(comments))
            status = "degraded"
            tracer.add_warning(
                "degraded", "Nothing to narrate, fell back to a count statement", "medium"
            )

        limit = composite_limit(max_length) if composite and sections > 1 else max_length
        with tracer.step("enforce_length", limit=limit) as step:
            truncated = len(text) > limit
            text = shorten_text(text, limit)
            step.output = {"length": len(text), "truncated": truncated}
        if truncated:
            tracer.add_warning(
                "truncated", f"Summary cut to {limit} characters", "low", context=text
            )

        with tracer.step("suppress_technical_details") as step:
            if not style.include_technical_details and terms:
                text = strip_terms(text, self._vocabulary.technical_terms)
                if not text:
                    text = shorten_text(count_statement(len(issues), len(comments)), limit)
                    status = "degraded"
            step.output = text

        with tracer.step("assess_quality") as step:
            quality = assess_quality(
                text, terms, len(issues), len(comments), self._policy
            )
            step.output = quality.score
        if status == "generated" and is_generic(text):
            tracer.add_warning("generic_summary", "Summary is a bare count statement", "low")

        debug_report = tracer.build_report(quality.score, quality.recommendations)
        if composite:
            self._last_debug_report = debug_report
        logger.debug(
            "Summarized %d issues, %d comments: status=%s quality=%d length=%d",
            len(issues), len(comments), status, quality.score, len(text),
        )
        return SummaryResult(
            text=text,
            status=status,  # type: ignore[arg-type]
            style=style_name,
            technical_terms=terms,
            completion_state=state,
            truncated=truncated,
            quality=quality,
            debug_report=debug_report,
        )

    def _resolve_style(self, style: StyleConfig, tracer: DebugTracer) -> tuple[str, int]:
        """Validate style name and max length, falling back unless strict."""
        name = style.style.strip().lower()
        if name not in SUPPORTED_STYLES:
            message = (
                f"Unknown summary style {style.style!r}; "
                f"expected one of: {', '.join(SUPPORTED_STYLES)}"
            )
            if style.fallback_strategy == "strict":
                raise SummarizationConfigError(message)
            logger.warning("%s. Falling back to 'technical'", message)
            tracer.add_warning("unknown_style", message, "medium")
            name = "technical"

        max_length = style.max_length
        if max_length <= 0:
            message = f"Invalid max summary length {max_length}; must be positive"
            if style.fallback_strategy == "strict":
                raise SummarizationConfigError(message)
            logger.warning("%s. Using %d", message, DEFAULT_MAX_LENGTH)
            tracer.add_warning("invalid_max_length", message, "medium")
            max_length = DEFAULT_MAX_LENGTH
        return name, max_length

    # --- Composition ---

    def _compose(
        self,
        style_name: str,
        issues: list[Issue],
        comments: list[Comment],
        worklogs: list[WorklogEntry],
        state: CompletionState,
        terms: list[str],
        style: StyleConfig,
        max_length: int,
    ) -> tuple[str, int]:
        """Return the narrative and the number of sections it holds."""
        ordered = _order_issues(issues, style.prioritize_recent_work)
        by_key = self._meaningful_by_key(comments, style.prioritize_recent_work)

        if style_name == "business":
            return self._compose_business(ordered, state)
        if style_name == "brief":
            return self._compose_brief(ordered, by_key, state, max_length)
        return self._compose_technical(
            ordered, by_key, worklogs, state, terms, style, max_length
        )

    def _compose_technical(
        self,
        issues: list[Issue],
        by_key: dict[str, list[Comment]],
        worklogs: list[WorklogEntry],
        state: CompletionState,
        terms: list[str],
        style: StyleConfig,
        max_length: int,
    ) -> tuple[str, int]:
        clauses: list[str] = []
        for issue in issues:
            detail = _issue_detail(issue, by_key.get(issue.key, []), self._vocabulary)
            if detail:
                clauses.append(f"{issue.key}: {detail}" if issue.key else detail)

        # Comments whose issue is not part of the snapshot
        issue_keys = {i.key for i in issues}
        for key in sorted(k for k in by_key if k not in issue_keys):
            body = normalize_whitespace(by_key[key][0].body)
            clauses.append(f"{key}: {body}" if key else body)

        if not clauses:
            return "", 0

        if len(clauses) == 1:
            text = clauses[0]
        else:
            text = f"{_LEADS['technical'][state]} across {len(clauses)} items: " + "; ".join(clauses)
        sections = len(clauses)

        # Optional tails only when they fit without truncation
        tails: list[str] = []
        if worklogs:
            tails.append(self.summarize_worklogs(worklogs))
        missing = [t for t in terms if t.lower() not in text.lower()]
        if style.include_technical_details and missing:
            tails.append(f"Stack: {', '.join(missing[:4])}")
        for tail in tails:
            candidate = f"{text.rstrip('.')}. {tail}"
            if len(candidate) <= max_length:
                text = candidate
                sections += 1
        return text, sections

    def _compose_business(
        self, issues: list[Issue], state: CompletionState
    ) -> tuple[str, int]:
        texts = [i.text for i in issues]
        categories = work_categories(texts, self._vocabulary)
        lead = _LEADS["business"][state]
        count = len(issues)
        if categories:
            text = f"{lead} {_join_human(categories[:3])}"
            if count > 1:
                text += f" across {count} tickets"
        elif count:
            text = f"{lead} {count} ticket{'s' if count != 1 else ''}"
        else:
            return "", 0

        sections = 1
        items = [normalize_whitespace(i.summary) for i in issues if i.summary.strip()][:3]
        if items:
            text += ". Key items: " + "; ".join(items)
            sections += 1
        return strip_terms(text, self._vocabulary.technical_terms), sections

    def _compose_brief(
        self,
        issues: list[Issue],
        by_key: dict[str, list[Comment]],
        state: CompletionState,
        max_length: int,
    ) -> tuple[str, int]:
        lead = _LEADS["brief"][state]
        if issues:
            top = issues[0]
            subject = top.key or "1 issue"
            if len(issues) > 1:
                subject += f" and {len(issues) - 1} more"
            detail = normalize_whitespace(top.summary)
        elif by_key:
            key = sorted(by_key)[0]
            subject = key or "1 item"
            detail = normalize_whitespace(by_key[key][0].body)
        else:
            return "", 0
        text = f"{lead} {subject}: {detail}" if detail else f"{lead} {subject}"
        return shorten_text(text, min(max_length, BRIEF_MAX_LENGTH)), 1

    def _meaningful_by_key(
        self, comments: list[Comment], recent_first: bool
    ) -> dict[str, list[Comment]]:
        grouped: dict[str, list[Comment]] = {}
        for comment in comments:
            if is_meaningful_comment(comment, self._min_chars):
                grouped.setdefault(comment.issue_key, []).append(comment)
        for key, items in grouped.items():
            grouped[key] = sorted(
                items,
                key=lambda c: (_timestamp(c.created), c.id),
                reverse=recent_first,
            )
        return grouped


# === HELPERS ===


def _timestamp(value: datetime | None) -> datetime:
    if value is None:
        return _EPOCH
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _order_issues(issues: list[Issue], recent_first: bool) -> list[Issue]:
    """Most recently updated first when prioritizing recent work, else by key."""
    if recent_first:
        by_key = sorted(issues, key=lambda i: (i.key, i.id))
        return sorted(by_key, key=lambda i: _timestamp(i.updated), reverse=True)
    return sorted(issues, key=lambda i: (i.key, i.id))


def _status_prefix(status: str) -> str:
    lowered = status.lower()
    for needles, prefix in _STATUS_PREFIXES:
        if any(n in lowered for n in needles):
            return prefix
    return "Planning"


def _issue_detail(issue: Issue, comments: list[Comment], vocabulary: Vocabulary) -> str:
    """First meaningful comment in priority order, else the status-prefixed summary.

    ``comments`` arrive newest first when recent work is prioritized and
    oldest first otherwise.
    """
    if comments:
        return normalize_whitespace(comments[0].body)
    summary = normalize_whitespace(issue.summary)
    if not summary:
        return ""
    action = primary_action(summary, vocabulary)
    if action and summary.lower().startswith(action.lower()[:4]):
        return summary
    return f"{_status_prefix(issue.status)} {summary}"


def _join_human(items: list[str]) -> str:
    if len(items) <= 1:
        return "".join(items)
    return ", ".join(items[:-1]) + f" and {items[-1]}"
