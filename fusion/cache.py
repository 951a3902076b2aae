from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional, Tuple


logger = logging.getLogger(__name__)


class CacheError(RuntimeError):
    """Raised when the cache backend cannot store a value."""


class MemoryCacheBackend:
    """A lightweight TTL store with Django's cache ``get``/``set`` signature."""

    def __init__(self, time_func: Callable[[], float] = time.time) -> None:
        self._time_func = time_func
        self._storage: Dict[str, Tuple[Optional[float], Any]] = {}

    def get(self, key: str, default: Any = None) -> Any:
        item = self._storage.get(key)
        if not item:
            return default
        expires_at, value = item
        if expires_at is not None and expires_at < self._time_func():
            self._storage.pop(key, None)
            return default
        return value

    def set(self, key: str, value: Any, timeout: Optional[float] = None) -> None:
        expires_at = None if timeout is None else self._time_func() + timeout
        self._storage[key] = (expires_at, value)

    def clear(self) -> None:
        self._storage.clear()


class FusionCache:
    """TTL cache in front of any Django-compatible cache backend.

    Entries are wrapped in an envelope carrying their own expiry instant, which
    is checked on every read. Backends that expire lazily, or not at all, can
    therefore never hand back a stale payload.

    Reads are best effort: backend failures are logged and reported as a miss.
    Writes are not: a failing backend raises :class:`CacheError`.
    """

    def __init__(self, backend: Optional[Any] = None, time_func: Callable[[], float] = time.time) -> None:
        self._backend = backend if backend is not None else MemoryCacheBackend(time_func=time_func)
        self._time_func = time_func

    @staticmethod
    def generate_key(prefix: str, *parts: str) -> str:
        return ":".join([prefix, *parts])

    def get(self, key: str) -> Any:
        try:
            entry = self._backend.get(key)
        except Exception as exc:  # noqa: BLE001 - a broken cache must not break reads
            logger.warning("Cache read failed for %s, treating as miss: %s", key, exc)
            return None
        if not isinstance(entry, dict):
            return None
        expires_at = entry.get("expires_at")
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            logger.warning("Ignoring cache entry %s without a numeric expiry", key)
            return None
        if expires_at <= self._time_func():
            logger.debug("Cache entry %s expired", key)
            return None
        return entry.get("payload")

    def set(self, key: str, value: Any, ttl_minutes: float) -> None:
        if ttl_minutes <= 0:
            raise ValueError("ttl_minutes must be positive")
        ttl_seconds = ttl_minutes * 60
        entry = {"payload": value, "expires_at": self._time_func() + ttl_seconds}
        try:
            self._backend.set(key, entry, timeout=ttl_seconds)
        except Exception as exc:  # noqa: BLE001 - backend specific errors
            logger.error("Cache write failed for %s", key, exc_info=exc)
            raise CacheError(f"failed to cache {key}") from exc


__all__ = ["CacheError", "FusionCache", "MemoryCacheBackend"]
