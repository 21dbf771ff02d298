# src/cache/cache_factory.py - v3
"""Factory for report cache instantiation."""

from __future__ import annotations

from myday.cache.base_cache_store import BaseReportCache
from myday.config.settings import Settings


def create_cache_store(settings: Settings) -> BaseReportCache | None:
    """Instantiate the report cache, or None when caching is disabled.

    Args:
        settings: Application settings (``cache_enabled``, ``cache_root``).

    Raises:
        CacheIOError: If the cache directory cannot be created.
    """
    if not settings.cache_enabled:
        return None

    from myday.cache.json_store import JsonReportCache
    return JsonReportCache(cache_root=settings.cache_root)
