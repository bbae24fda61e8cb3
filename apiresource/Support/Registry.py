"""
Process-wide per-class caches.

Every cache that outlives a single model instance lives here, keyed by a
bucket name and the owning class:

- ``mutators``: resolved get/set mutator tables
- ``casts``: resolved cast objects
- ``paths``: resolved resource endpoint paths

Entries are computed lazily on first use and never expire on their own.
``forget`` drops a single class entry, ``flush`` drops a bucket (or all).
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, Optional, TypeVar

T = TypeVar('T')

logger = logging.getLogger(__name__)


class CacheRegistry:
    """Keyed cache store shared by every model class."""

    def __init__(self) -> None:
        self._buckets: Dict[str, Dict[type, Any]] = {}
        self._lock = threading.Lock()

    def remember(self, bucket: str, owner: type, factory: Callable[[], T]) -> T:
        """Get the cached entry for an owner, computing it on first access."""
        entries = self._buckets.get(bucket)
        if entries is not None and owner in entries:
            return entries[owner]  # type: ignore[no-any-return]

        # Computed outside the lock; the factory must be idempotent
        value = factory()

        with self._lock:
            entries = self._buckets.setdefault(bucket, {})
            if owner not in entries:
                entries[owner] = value
                logger.debug(f"Cached {bucket} entry for {owner.__qualname__}")
            return entries[owner]  # type: ignore[no-any-return]

    def get(self, bucket: str, owner: type, default: Any = None) -> Any:
        """Get a cached entry without computing it."""
        return self._buckets.get(bucket, {}).get(owner, default)

    def has(self, bucket: str, owner: type) -> bool:
        """Check if an entry is cached for an owner."""
        return owner in self._buckets.get(bucket, {})

    def forget(self, bucket: str, owner: type) -> None:
        """Invalidate the entry of a single owner."""
        with self._lock:
            self._buckets.get(bucket, {}).pop(owner, None)

    def flush(self, bucket: Optional[str] = None) -> None:
        """Invalidate a whole bucket, or every bucket."""
        with self._lock:
            if bucket is None:
                self._buckets.clear()
            else:
                self._buckets.pop(bucket, None)


registry = CacheRegistry()
