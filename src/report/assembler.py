# src/report/assembler.py - v2
"""Report assembly: fingerprint, cache policy, gate, summarize, render, store.

Cache failures never abort a report: a corrupt entry is regenerated and
overwritten, and a failed write still returns the freshly rendered
content. The one cache condition that does abort is a miss in
cache-only mode.
"""

from __future__ import annotations

import logging
import time
from datetime import date, datetime, timezone
from pathlib import Path

from myday.cache.base_cache_store import BaseReportCache, CacheCorruptError, CacheError, CacheIOError
from myday.cache.fingerprint import compute_report_fingerprint
from myday.cache.models import CacheEntry
from myday.config.report_config import ReportConfig
from myday.core.models import ActivitySnapshot
from myday.logging.context import clear_context, set_report_context
from myday.report.exporter import export_markdown
from myday.report.models import CacheMode, CacheStatus, ReportOutcome
from myday.report.renderer import ReportRenderer
from myday.summarizer.base_summarizer import BaseSummarizer
from myday.summarizer.factory import create_summarizer
from myday.summarizer.gate import is_meaningful
from myday.summarizer.models import StyleConfig, SummaryResult

logger = logging.getLogger(__name__)


class NoCachedReportError(LookupError):
    """Cache-only mode was requested and no usable entry exists."""

    def __init__(self, target_date: date, report_id: str, reason: str = "") -> None:
        message = f"no cached report found for {target_date.isoformat()} (cache-only mode)"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.target_date = target_date
        self.report_id = report_id


class ReportAssembler:
    """Produce one report per call, consulting the cache per CacheMode.

    The summarizer style is derived from ``config`` alone, so everything
    that shapes the narrative is part of the fingerprint. ``collect_trace``
    only turns on the debug trace; the trace is never rendered unless
    ``config.debug`` is set.
    """

    def __init__(
        self,
        config: ReportConfig,
        cache_store: BaseReportCache | None = None,
        summarizer: BaseSummarizer | None = None,
        collect_trace: bool = False,
    ) -> None:
        self._config = config
        self._style = StyleConfig.from_report_config(config, debug=config.debug or collect_trace)
        self._cache = cache_store
        self._min_chars = config.min_meaningful_comment_chars
        if summarizer is None and config.summarization_enabled:
            summarizer = create_summarizer(
                self._style,
                config.summarization_mode,
                min_meaningful_chars=self._min_chars,
            )
        self._summarizer = summarizer
        if self._style.debug and not self.traces and summarizer is not None:
            logger.warning("Summarizer '%s' cannot produce a debug trace", summarizer.mode)
        self._renderer = ReportRenderer(config, summarizer, self._style)

    @property
    def summarizer(self) -> BaseSummarizer | None:
        return self._summarizer

    @property
    def style(self) -> StyleConfig:
        return self._style

    @property
    def traces(self) -> bool:
        """True when summaries from this assembler carry a debug trace."""
        return (
            self._style.debug
            and self._summarizer is not None
            and self._summarizer.capabilities.debug_trace
        )

    def generate(
        self,
        snapshot: ActivitySnapshot,
        target_date: date,
        cache_mode: CacheMode = "use",
    ) -> ReportOutcome:
        """Return the report for target_date, from cache when allowed.

        Raises:
            NoCachedReportError: cache_mode is "only" and nothing usable is stored.
            SummarizationConfigError: invalid style under the strict strategy.
        """
        fingerprint = compute_report_fingerprint(
            target_date,
            self._config,
            snapshot.issues,
            snapshot.comments_by_issue,
            snapshot.worklogs,
        )
        report_id = fingerprint.report_id
        set_report_context(report_id)
        try:
            store = None if cache_mode == "bypass" else self._cache
            status: CacheStatus = "bypass" if store is None else "miss"

            if cache_mode == "only" and store is None:
                raise NoCachedReportError(target_date, report_id, "caching is disabled")

            if store is not None:
                try:
                    entry = store.get(report_id)
                except CacheCorruptError as e:
                    if cache_mode == "only":
                        raise NoCachedReportError(target_date, report_id, str(e)) from e
                    logger.warning("%s; regenerating", e)
                    entry = None
                    status = "regenerated"
                except CacheIOError as e:
                    if cache_mode == "only":
                        raise NoCachedReportError(target_date, report_id, str(e)) from e
                    logger.warning("Cache lookup failed, generating without it: %s", e)
                    entry = None

                if entry is not None:
                    logger.info("Cache hit for %s", report_id)
                    return ReportOutcome(
                        content=entry.content,
                        report_id=report_id,
                        cache_status="hit",
                        generated_at=entry.generated_at,
                        generation_ms=entry.generation_ms,
                        cached=True,
                        export_path=entry.export_paths.get("markdown"),
                    )
                if cache_mode == "only":
                    raise NoCachedReportError(target_date, report_id)
                logger.info("Cache %s for %s", status, report_id)
            else:
                logger.info("Cache bypassed for %s", report_id)

            started = time.perf_counter()
            summary = self._summarize(snapshot)
            content = self._renderer.render(snapshot, target_date, summary)
            generation_ms = (time.perf_counter() - started) * 1000.0
            generated_at = datetime.now(timezone.utc)

            cached = False
            if store is not None:
                entry = CacheEntry(
                    report_id=report_id,
                    report_date=target_date,
                    format=self._config.report_format,
                    generated_at=generated_at,
                    issue_count=len(snapshot.issues),
                    comment_count=snapshot.comment_count,
                    worklog_count=len(snapshot.worklogs),
                    summarized=summary is not None and summary.status != "skipped",
                    generation_ms=generation_ms,
                    content=content,
                    config=self._config,
                    digest=fingerprint.digest,
                )
                try:
                    store.put(entry)
                    cached = True
                except CacheIOError as e:
                    logger.warning("Could not cache report %s: %s", report_id, e)

            return ReportOutcome(
                content=content,
                report_id=report_id,
                cache_status=status,
                summary=summary,
                generated_at=generated_at,
                generation_ms=generation_ms,
                cached=cached,
            )
        finally:
            clear_context()

    def export(
        self,
        outcome: ReportOutcome,
        target_date: date,
        folder: str | Path,
        tags: list[str] | None = None,
    ) -> Path:
        """Export a report as markdown and record the path on its cache entry."""
        path = export_markdown(outcome.content, target_date, folder, tags)
        outcome.export_path = str(path)
        if outcome.cached and self._cache is not None:
            try:
                self._cache.update_export_path(outcome.report_id, "markdown", path)
            except CacheError as e:
                logger.warning("Could not record export path for %s: %s", outcome.report_id, e)
        return path

    def _summarize(self, snapshot: ActivitySnapshot) -> SummaryResult | None:
        if not self._config.summarization_enabled or self._summarizer is None:
            return None
        comments = snapshot.all_comments()
        if not is_meaningful(comments, self._min_chars):
            logger.info("Summary skipped: no meaningful comment content")
            return SummaryResult.skipped(self._style.style)
        result = self._summarizer.summarize(
            snapshot.issues, comments, snapshot.worklogs, self._style
        )
        if result.status == "degraded":
            logger.warning("Summary degraded to a count statement")
        return result
