# src/cache/base_cache_store.py - v2
"""Abstract report cache interface and its error taxonomy.

A miss is not an error: ``get`` returns None. Everything else that can go
wrong is a CacheError subclass so callers can fall back to regenerating.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path

from myday.cache.models import CacheEntry, CacheEntrySummary, CacheStats


class CacheError(Exception):
    """Base class for report cache failures."""


class CacheCorruptError(CacheError):
    """A persisted entry exists but cannot be read back."""

    def __init__(self, report_id: str, reason: str) -> None:
        super().__init__(f"Cache entry {report_id} is corrupt: {reason}")
        self.report_id = report_id


class CacheIOError(CacheError):
    """The cache directory could not be read or written (permissions, disk full)."""


class BaseReportCache(ABC):
    """Unified interface for report cache backends."""

    @abstractmethod
    def get(self, report_id: str) -> CacheEntry | None:
        """Retrieve an entry. Raises CacheCorruptError for unreadable payloads."""

    @abstractmethod
    def put(self, entry: CacheEntry) -> None:
        """Persist an entry and upsert its index record."""

    @abstractmethod
    def delete(self, report_id: str) -> bool:
        """Remove an entry. Returns False when it did not exist."""

    @abstractmethod
    def list_entries(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
        export_format: str | None = None,
        summarized_only: bool = False,
    ) -> list[CacheEntrySummary]:
        """List index records, newest generation first."""

    @abstractmethod
    def clear_all(self) -> int:
        """Remove every entry. Returns the number removed."""

    @abstractmethod
    def clear_before(self, before: date) -> int:
        """Remove entries whose report date is earlier than ``before``."""

    @abstractmethod
    def stats(self) -> CacheStats:
        """Aggregate statistics derived from the index."""

    @abstractmethod
    def update_export_path(self, report_id: str, export_format: str, path: Path) -> None:
        """Record where a report was last exported."""
