"""
In-memory TTL cache, memoization, and the keyed encryption cache.

Expiry is enforced on read: ``get`` and ``has`` never return an entry whose
age exceeds its TTL, they evict it instead. The background sweeper only
reclaims memory for entries nobody reads again.
"""

from __future__ import annotations

import functools
import inspect
import json
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_TTL_MS = 300_000
DEFAULT_CLEANUP_INTERVAL_MS = 60_000
ENCRYPTION_CACHE_TTL_MS = 600_000

_MISSING = object()


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


@dataclass
class CacheEntry(Generic[T]):
    value: T
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl


class TTLCache(Generic[T]):
    """
    Thread-safe key/value store with per-entry TTL in milliseconds.

    Args:
        cleanup_interval_ms: How often the sweeper removes expired entries.
            ``0`` disables the sweeper entirely.
        default_ttl_ms: TTL used when ``set`` is called without one.
        clock: Millisecond clock, injectable for tests.
    """

    def __init__(
        self,
        cleanup_interval_ms: int = DEFAULT_CLEANUP_INTERVAL_MS,
        default_ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], float] = _monotonic_ms,
    ) -> None:
        self._entries: Dict[str, CacheEntry[T]] = {}
        self._lock = threading.RLock()
        self._clock = clock
        self.default_ttl_ms = default_ttl_ms
        self._stop_event: Optional[threading.Event] = None
        self._sweeper: Optional[threading.Thread] = None
        if cleanup_interval_ms > 0:
            self.start_cleanup(cleanup_interval_ms)

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        entry = CacheEntry(
            value=value,
            created_at=self._clock(),
            ttl=self.default_ttl_ms if ttl is None else ttl,
        )
        with self._lock:
            self._entries[key] = entry

    def get(self, key: str, default: Any = None) -> Any:
        """Return the live value for ``key``, evicting it if expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if entry.is_expired(self._clock()):
                del self._entries[key]
                return default
            return entry.value

    def has(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def sweep(self) -> int:
        """Remove every expired entry; returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.is_expired(now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("Cache sweep removed entries", removed=len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    # Sweeper lifecycle

    @property
    def cleanup_running(self) -> bool:
        return self._sweeper is not None and self._sweeper.is_alive()

    def start_cleanup(self, interval_ms: int = DEFAULT_CLEANUP_INTERVAL_MS) -> None:
        if self.cleanup_running:
            return
        stop_event = threading.Event()
        interval_s = interval_ms / 1000

        def run() -> None:
            while not stop_event.wait(interval_s):
                self.sweep()

        self._stop_event = stop_event
        self._sweeper = threading.Thread(target=run, name="ttl-cache-sweeper", daemon=True)
        self._sweeper.start()

    def stop_cleanup(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        if self._sweeper is not None and self._sweeper is not threading.current_thread():
            self._sweeper.join(timeout=1.0)
        self._stop_event = None
        self._sweeper = None

    def close(self) -> None:
        self.stop_cleanup()

    def __enter__(self) -> "TTLCache[T]":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def _default_key(*args: Any, **kwargs: Any) -> str:
    return json.dumps([args, kwargs], sort_keys=True, default=str)


def memoize(
    fn: Optional[Callable[..., Any]] = None,
    *,
    key_fn: Optional[Callable[..., str]] = None,
    ttl_ms: int = DEFAULT_TTL_MS,
    cache: Optional[TTLCache[Any]] = None,
) -> Any:
    """
    Cache a function's results by its arguments.

    Works as ``@memoize`` or ``@memoize(key_fn=..., ttl_ms=...)``. Coroutine
    functions cache the awaited value, not the coroutine. The backing cache
    is exposed as ``wrapper.cache``.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        store: TTLCache[Any] = cache if cache is not None else TTLCache(cleanup_interval_ms=0)
        make_key = key_fn or _default_key

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                key = make_key(*args, **kwargs)
                cached = store.get(key, _MISSING)
                if cached is not _MISSING:
                    return cached
                value = await func(*args, **kwargs)
                store.set(key, value, ttl_ms)
                return value

            async_wrapper.cache = store  # type: ignore[attr-defined]
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            key = make_key(*args, **kwargs)
            cached = store.get(key, _MISSING)
            if cached is not _MISSING:
                return cached
            value = func(*args, **kwargs)
            store.set(key, value, ttl_ms)
            return value

        wrapper.cache = store  # type: ignore[attr-defined]
        return wrapper

    if fn is not None:
        return decorator(fn)
    return decorator


def simple_hash(text: str) -> str:
    """
    Order-sensitive 32-bit string hash, rendered as signed hex.

    Only used to derive cache keys; it carries no security property.
    """
    h = 0
    for ch in text:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return format(h, "x")


def _stable_dump(value: Any) -> str:
    if isinstance(value, str):
        return json.dumps(value)
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


class EncryptionCache:
    """Memoizes encrypt/decrypt results keyed by (data, password) hashes."""

    def __init__(
        self,
        ttl_ms: int = ENCRYPTION_CACHE_TTL_MS,
        cleanup_interval_ms: int = DEFAULT_CLEANUP_INTERVAL_MS,
        clock: Callable[[], float] = _monotonic_ms,
    ) -> None:
        self._cache: TTLCache[Any] = TTLCache(
            cleanup_interval_ms=cleanup_interval_ms,
            default_ttl_ms=ttl_ms,
            clock=clock,
        )

    @staticmethod
    def encryption_key(plaintext: str, password: str) -> str:
        return f"enc_{simple_hash(plaintext)}_{simple_hash(password)}"

    @staticmethod
    def decryption_key(encrypted_data: Any, password: str) -> str:
        return f"dec_{simple_hash(_stable_dump(encrypted_data))}_{simple_hash(password)}"

    def cache_encryption(self, plaintext: str, password: str, result: Any) -> None:
        key = self.encryption_key(plaintext, password)
        self._cache.set(key, result)
        logger.debug("Cached encryption result", key=key)

    def get_cached_encryption(self, plaintext: str, password: str) -> Any:
        key = self.encryption_key(plaintext, password)
        result = self._cache.get(key)
        if result is not None:
            logger.debug("Retrieved cached encryption result", key=key)
        return result

    def cache_decryption(self, encrypted_data: Any, password: str, result: str) -> None:
        key = self.decryption_key(encrypted_data, password)
        self._cache.set(key, result)
        logger.debug("Cached decryption result", key=key)

    def get_cached_decryption(self, encrypted_data: Any, password: str) -> Optional[str]:
        key = self.decryption_key(encrypted_data, password)
        result = self._cache.get(key)
        if result is not None:
            logger.debug("Retrieved cached decryption result", key=key)
        return result

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()
