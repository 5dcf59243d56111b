"""In-process report cache with TTL expiry and a size bound.

Keys carry the caller's collection_version, which changes on every data
change, so old entries are never read again. Expired entries are purged on
every write and the oldest entries are evicted beyond MAX_ENTRIES.
"""

import os
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

MAX_ENTRIES = int(os.getenv("REPORT_CACHE_MAX_ENTRIES", "256"))

# key -> (value, expires_at), oldest write first
_cache: "OrderedDict[str, tuple[Any, datetime]]" = OrderedDict()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def purge_expired() -> int:
    """Drop every expired entry; returns how many were removed."""
    now = _now()
    expired = [key for key, (_, expires_at) in _cache.items() if now >= expires_at]
    for key in expired:
        del _cache[key]
    return len(expired)


def get_cache(key: str) -> Optional[Any]:
    """Get value from cache if it exists and hasn't expired."""
    entry = _cache.get(key)
    if entry is None:
        return None

    value, expires_at = entry
    if _now() >= expires_at:
        del _cache[key]
        return None

    return value


def set_cache(key: str, value: Any, ttl_seconds: int = 300, max_entries: int | None = None) -> None:
    """Store value for ttl_seconds, purging expired entries and capping the size."""
    limit = MAX_ENTRIES if max_entries is None else max_entries
    purge_expired()

    _cache.pop(key, None)
    _cache[key] = (value, _now() + timedelta(seconds=ttl_seconds))

    while len(_cache) > limit:
        _cache.popitem(last=False)


def cache_size() -> int:
    return len(_cache)


def clear_cache(pattern: Optional[str] = None) -> None:
    """Clear cache by pattern or all if pattern is None."""
    if pattern is None:
        _cache.clear()
        return

    for key in [key for key in _cache if pattern in key]:
        del _cache[key]


def make_cache_key(prefix: str, **kwargs) -> str:
    """Generate cache key from prefix and parameters."""
    parts = [prefix]
    for key, value in sorted(kwargs.items()):
        parts.append(f"{key}:{value}")
    return "|".join(parts)
