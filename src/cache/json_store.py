# src/cache/json_store.py - v3
"""JSON file-based report cache (default backend).

Layout under CACHE_ROOT:
    index.json          {"reports": [<CacheEntrySummary>, ...]}
    <report_id>.json    full CacheEntry

Every write goes to a temporary file in the same directory and is then
renamed over the target. The index read-modify-write is not locked;
concurrent processes writing the same root can lose index updates.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from myday.cache.base_cache_store import (
    BaseReportCache,
    CacheCorruptError,
    CacheError,
    CacheIOError,
)
from myday.cache.models import CacheEntry, CacheEntrySummary, CacheIndex, CacheStats

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.json"


class JsonReportCache(BaseReportCache):
    """File-based report cache using one JSON file per entry plus an index."""

    def __init__(self, cache_root: Path) -> None:
        self._root = Path(cache_root).expanduser()
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheIOError(f"Cannot create cache directory {self._root}: {e}") from e

    @property
    def root(self) -> Path:
        return self._root

    # --- Entries ---

    def get(self, report_id: str) -> CacheEntry | None:
        """Retrieve an entry by id. A missing file is a miss."""
        path = self._entry_path(report_id)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheIOError(f"Cannot read cache entry {report_id}: {e}") from e

        try:
            return CacheEntry.model_validate_json(raw)
        except ValidationError as e:
            raise CacheCorruptError(report_id, f"{e.error_count()} validation errors") from e

    def put(self, entry: CacheEntry) -> None:
        """Persist an entry, replacing any index record with the same id."""
        self._atomic_write(
            self._entry_path(entry.report_id), entry.model_dump_json(indent=2)
        )
        index = self._load_index()
        index.reports = [r for r in index.reports if r.report_id != entry.report_id]
        index.reports.append(entry.to_summary())
        self._save_index(index)
        logger.debug("Stored cache entry %s (%d chars)", entry.report_id, len(entry.content))

    def delete(self, report_id: str) -> bool:
        """Remove an entry and its index record. False if neither existed."""
        removed_file = self._unlink(self._entry_path(report_id))
        index = self._load_index()
        remaining = [r for r in index.reports if r.report_id != report_id]
        removed_record = len(remaining) != len(index.reports)
        if removed_record:
            index.reports = remaining
            self._save_index(index)
        return removed_file or removed_record

    def update_export_path(self, report_id: str, export_format: str, path: Path) -> None:
        """Record the last export location in both the payload and the index."""
        entry = self.get(report_id)
        if entry is None:
            raise CacheError(f"No cache entry {report_id} to record export for")
        entry.export_paths[export_format] = str(path)
        self.put(entry)

    # --- Listing and maintenance ---

    def list_entries(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
        export_format: str | None = None,
        summarized_only: bool = False,
    ) -> list[CacheEntrySummary]:
        """Filter index records; newest generation first."""
        records = [
            r for r in self._load_index().reports
            if (from_date is None or r.report_date >= from_date)
            and (to_date is None or r.report_date <= to_date)
            and (export_format is None or r.format == export_format)
            and (not summarized_only or r.summarized)
        ]
        return sorted(records, key=lambda r: r.generated_at, reverse=True)

    def clear_all(self) -> int:
        """Remove every entry file and empty the index."""
        removed = 0
        for path in self._payload_paths():
            if self._unlink(path):
                removed += 1
        self._save_index(CacheIndex())
        logger.info("Cleared %d cache entries from %s", removed, self._root)
        return removed

    def clear_before(self, before: date) -> int:
        """Remove entries whose report date is strictly earlier than ``before``."""
        index = self._load_index()
        keep: list[CacheEntrySummary] = []
        removed = 0
        for record in index.reports:
            if record.report_date < before:
                self._unlink(self._entry_path(record.report_id))
                removed += 1
            else:
                keep.append(record)
        if removed:
            index.reports = keep
            self._save_index(index)
        logger.info("Cleared %d cache entries dated before %s", removed, before.isoformat())
        return removed

    def stats(self) -> CacheStats:
        """Aggregate counts from the index and sizes from the filesystem."""
        stats = CacheStats(cache_root=str(self._root))
        for record in self._load_index().reports:
            stats.total_count += 1
            day = record.report_date.isoformat()
            stats.by_date[day] = stats.by_date.get(day, 0) + 1
            stats.by_format[record.format] = stats.by_format.get(record.format, 0) + 1
            if record.summarized:
                stats.summarization_usage_count += 1
            try:
                stats.total_bytes += self._entry_path(record.report_id).stat().st_size
            except FileNotFoundError:
                logger.warning("Index lists %s but its payload is missing", record.report_id)
        return stats

    # --- Index ---

    def _load_index(self) -> CacheIndex:
        path = self._root / INDEX_FILENAME
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return CacheIndex()
        except OSError as e:
            raise CacheIOError(f"Cannot read cache index: {e}") from e

        try:
            return CacheIndex.model_validate_json(raw)
        except ValidationError:
            logger.warning("Cache index %s is corrupt, rebuilding from entries", path)
            return self._rebuild_index()

    def _save_index(self, index: CacheIndex) -> None:
        self._atomic_write(self._root / INDEX_FILENAME, index.model_dump_json(indent=2))

    def _rebuild_index(self) -> CacheIndex:
        index = CacheIndex()
        for path in self._payload_paths():
            try:
                entry = CacheEntry.model_validate_json(path.read_bytes())
            except (OSError, ValidationError) as e:
                logger.warning("Skipping unreadable cache entry %s: %s", path.name, e)
                continue
            index.reports.append(entry.to_summary())
        return index

    # --- Files ---

    def _payload_paths(self) -> list[Path]:
        return sorted(p for p in self._root.glob("*.json") if p.name != INDEX_FILENAME)

    def _entry_path(self, report_id: str) -> Path:
        """Return file path for a report id.

        Raises:
            CacheError: If the id would name the index file.
        """
        safe_id = report_id.replace("/", "_").replace("\\", "_")
        path = self._root / f"{safe_id}.json"
        if path.name.lower() == INDEX_FILENAME:
            raise CacheError(f"Invalid report id {report_id!r}: reserved for the cache index")
        return path

    def _unlink(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise CacheIOError(f"Cannot delete {path}: {e}") from e
        return True

    def _atomic_write(self, path: Path, text: str) -> None:
        """Write to a temp file in the same directory, then rename over path."""
        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._root,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise CacheIOError(f"Cannot write {path}: {e}") from e
