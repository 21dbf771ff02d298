# src/logging/context.py - v3
"""Contextual logging support: attach report_id, session_id, step to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set once per report generation, and per engine step while tracing.
_report_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "report_id", default=None
)
_session_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "session_id", default=None
)
_step: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "step", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    report_id: str | None = None
    session_id: str | None = None
    step: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        report_id=_report_id.get(),
        session_id=_session_id.get(),
        step=_step.get(),
    )


def set_report_context(report_id: str | None, session_id: str | None = None) -> None:
    """Set report-level context (called once per report generation)."""
    _report_id.set(report_id)
    _session_id.set(session_id)


def set_session_context(session_id: str | None) -> None:
    """Set the debug-trace session currently recording."""
    _session_id.set(session_id)


def set_step_context(step: str | None) -> None:
    """Set the engine step currently running."""
    _step.set(step)


def clear_context() -> None:
    """Reset all context variables."""
    _report_id.set(None)
    _session_id.set(None)
    _step.set(None)
