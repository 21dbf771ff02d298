# src/tracking/debug_tracer.py - v2
"""Per-call debug tracing for the summarization engine.

A DebugTracer lives for exactly one summarize call. Each engine stage runs
inside ``tracer.step(name)``; the tracer records timing and outcome and,
at the end, consolidates everything into a DebugReport.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Literal

from myday.logging.context import set_session_context, set_step_context
from myday.tracking.models import DebugReport, DebugStep, DebugSummary, DebugWarning

logger = logging.getLogger(__name__)

_OUTPUT_PREVIEW_CHARS = 200

_SUGGESTIONS: dict[str, str] = {
    "no_technical_terms": "Mention the tools and services touched in ticket comments",
    "truncated": "Raise MAX_SUMMARY_LENGTH or switch to the brief style",
    "generic_summary": "Add descriptive comments so the narrative has concrete content",
    "degraded": "Check the input snapshot for missing issue keys or empty bodies",
    "unknown_style": "Use one of: technical, business, brief",
    "invalid_max_length": "Set MAX_SUMMARY_LENGTH to a positive value of at least 20",
    "empty_input": "Run the sync step so there is activity to summarize",
}


class DebugTracer:
    """Collect steps and warnings for one summarization call."""

    def __init__(
        self,
        enabled: bool = True,
        configuration: dict[str, Any] | None = None,
    ) -> None:
        self._enabled = enabled
        self._session_id = f"summary_{uuid.uuid4().hex[:12]}"
        self._start_time = datetime.now(timezone.utc)
        self._configuration = dict(configuration or {})
        self._steps: list[DebugStep] = []
        self._warnings: list[DebugWarning] = []
        if enabled:
            set_session_context(self._session_id)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def steps(self) -> list[DebugStep]:
        return list(self._steps)

    @property
    def warnings(self) -> list[DebugWarning]:
        return list(self._warnings)

    @contextmanager
    def step(self, name: str, **metadata: Any) -> Iterator[DebugStep]:
        """Time a named stage. Assign ``step.output`` inside the block.

        Exceptions are recorded on the step and re-raised.
        """
        record = DebugStep(
            name=name,
            timestamp=datetime.now(timezone.utc),
            metadata={"step_number": len(self._steps) + 1, **metadata},
        )
        set_step_context(name)
        started = time.perf_counter()
        try:
            yield record
        except Exception as exc:
            record.success = False
            record.error = f"{type(exc).__name__}: {exc}"
            raise
        finally:
            record.duration_ms = (time.perf_counter() - started) * 1000.0
            record.output = _preview(record.output)
            set_step_context(None)
            if self._enabled:
                self._steps.append(record)
                logger.debug(
                    "Step %s %s in %.2fms",
                    name, "ok" if record.success else "failed", record.duration_ms,
                )

    def add_warning(
        self,
        warning_type: str,
        message: str,
        severity: Literal["low", "medium", "high"] = "medium",
        context: str = "",
    ) -> None:
        """Record an anomaly. No-op when tracing is disabled."""
        if not self._enabled:
            return
        self._warnings.append(
            DebugWarning(
                type=warning_type,
                message=message,
                severity=severity,
                context=context,
                suggestion=_SUGGESTIONS.get(warning_type, ""),
                timestamp=datetime.now(timezone.utc),
            )
        )
        logger.debug("Trace warning [%s] %s: %s", severity, warning_type, message)

    def build_report(
        self,
        quality_score: int = 0,
        recommendations: list[str] | None = None,
    ) -> DebugReport | None:
        """Consolidate the trace. Returns None when tracing is disabled."""
        if not self._enabled:
            return None
        set_session_context(None)

        successful = sum(1 for s in self._steps if s.success)
        summary = DebugSummary(
            total_steps=len(self._steps),
            successful_steps=successful,
            failed_steps=len(self._steps) - successful,
            total_warnings=len(self._warnings),
            processing_ms=sum(s.duration_ms for s in self._steps),
            quality_score=quality_score,
            recommendations=list(recommendations or []),
        )
        return DebugReport(
            session_id=self._session_id,
            start_time=self._start_time,
            end_time=datetime.now(timezone.utc),
            steps=list(self._steps),
            warnings=list(self._warnings),
            summary=summary,
            configuration=self._configuration,
        )


def _preview(value: Any) -> Any:
    """Keep step output snapshots small enough to print."""
    if isinstance(value, str) and len(value) > _OUTPUT_PREVIEW_CHARS:
        return value[: _OUTPUT_PREVIEW_CHARS - 3] + "..."
    return value
