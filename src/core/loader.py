# src/core/loader.py - v1
"""Read activity snapshots written by the sync layer."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from myday.core.models import ActivitySnapshot

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """Raised when a snapshot file cannot be read or does not validate."""


def load_snapshot(path: Path) -> ActivitySnapshot:
    """Load an ActivitySnapshot from a JSON file.

    Args:
        path: Snapshot file produced by the sync step.

    Returns:
        Parsed snapshot.

    Raises:
        SnapshotError: If the file is missing, not JSON, or structurally invalid.
    """
    path = Path(path).expanduser()
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {e}") from e

    try:
        snapshot = ActivitySnapshot.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Snapshot {path} has an invalid structure: {e}") from e

    logger.debug(
        "Loaded snapshot %s: %d issues, %d comments, %d worklogs",
        path, len(snapshot.issues), snapshot.comment_count, len(snapshot.worklogs),
    )
    return snapshot
