# src/tracking/exporter.py - v2
"""Debug trace export to JSON and summary text."""

from __future__ import annotations

import logging
from pathlib import Path

from myday.tracking.models import DebugReport

logger = logging.getLogger(__name__)


def export_debug_report_json(report: DebugReport, path: Path) -> Path:
    """Write a debug report as formatted JSON.

    Args:
        report: Trace of one summarization call.
        path: Output file path. Parent directories are created.

    Returns:
        The path written.
    """
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Debug report written to %s", path)
    return path


def format_debug_summary(report: DebugReport, verbose: bool = False) -> str:
    """Generate a human-readable summary of a debug report.

    Args:
        report: Trace of one summarization call.
        verbose: Also list each step's output snapshot and warning context.

    Returns:
        Formatted multi-line text.
    """
    summary = report.summary
    lines: list[str] = [
        "=== Summarization Debug Summary ===",
        f"Session ID    : {report.session_id}",
        f"Duration      : {summary.processing_ms:.2f}ms",
        f"Steps         : {summary.total_steps} "
        f"({summary.successful_steps} ok, {summary.failed_steps} failed)",
        f"Warnings      : {summary.total_warnings}",
        f"Quality Score : {summary.quality_score}/100",
    ]

    if summary.recommendations:
        lines.append("")
        lines.append("Recommendations:")
        lines.extend(f"  • {rec}" for rec in summary.recommendations)

    if report.warnings:
        lines.append("")
        lines.append("Warnings:")
        for warning in report.warnings:
            lines.append(
                f"  [{warning.severity.upper()}] {warning.type}: {warning.message}"
            )
            if verbose and warning.context:
                lines.append(f"      context: {warning.context}")
            if verbose and warning.suggestion:
                lines.append(f"      suggestion: {warning.suggestion}")

    if report.steps:
        lines.append("")
        lines.append("Processing Steps:")
        for i, step in enumerate(report.steps, start=1):
            status = "✓" if step.success else "✗"
            lines.append(f"  {i}. {status} {step.name} ({step.duration_ms:.2f}ms)")
            if step.error:
                lines.append(f"      error: {step.error}")
            if verbose and step.output is not None:
                lines.append(f"      output: {step.output}")

    return "\n".join(lines)
