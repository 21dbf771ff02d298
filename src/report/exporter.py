# src/report/exporter.py - v1
"""Export rendered reports as Obsidian-style markdown notes."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_FILE_DATE_FORMAT = "%Y-%m-%d"


def export_markdown(
    content: str,
    target_date: date,
    folder: str | Path,
    tags: list[str] | None = None,
    file_date_format: str = DEFAULT_FILE_DATE_FORMAT,
) -> Path:
    """Write a report as a note with YAML front matter and day navigation.

    Args:
        content: Rendered report body.
        target_date: Date the report covers; names the file.
        folder: Destination folder (``~`` expanded, created if missing).
        tags: Front matter tags. The ISO date is always appended.
        file_date_format: strftime pattern for the file name and day links.

    Returns:
        Path of the written note.

    Raises:
        OSError: If the folder cannot be created or the file written.
    """
    directory = Path(folder).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{target_date.strftime(file_date_format)}.md"
    path.write_text(
        render_note(content, target_date, tags or [], file_date_format),
        encoding="utf-8",
    )
    logger.info("Exported report for %s to %s", target_date.isoformat(), path)
    return path


def render_note(
    content: str,
    target_date: date,
    tags: list[str],
    file_date_format: str = DEFAULT_FILE_DATE_FORMAT,
) -> str:
    """Build the note text without touching the filesystem."""
    all_tags = [*tags, target_date.isoformat()]
    previous_day = (target_date - timedelta(days=1)).strftime(file_date_format)
    next_day = (target_date + timedelta(days=1)).strftime(file_date_format)
    created = datetime.now(timezone.utc).replace(microsecond=0).isoformat()

    lines = [
        "---",
        f"date: {target_date.isoformat()}",
        f"title: Daily Standup Report - {target_date:%B} {target_date.day}, {target_date.year}",
        "type: daily-report",
        "tags:",
        *(f"  - {tag}" for tag in all_tags),
        f"created: {created}",
        "---",
        "",
        "## Navigation",
        "",
        f"← [[{previous_day}]] | [[{next_day}]] →",
        "",
        content.rstrip("\n"),
        "",
        "---",
        "",
        "## Tags",
        "",
        " ".join(f"#{tag}" for tag in all_tags),
        "",
    ]
    return "\n".join(lines)
