from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator


class CacheInfo(NamedTuple):
    hits: int
    misses: int
    maxsize: int | None
    currsize: int


class _Sentinel(type):
    def __new__(cls, name: str) -> _Sentinel:
        return super().__new__(cls, name, (), {})

    def __repr__(cls) -> str:
        return "..."

    def __hash__(cls) -> int:
        return 0

    def __eq__(cls, other: object) -> bool:
        return other is cls


type Sentinel = _Sentinel
MISSING: Sentinel = _Sentinel("MISSING")


class LRU[K, V]:
    """Mapping that drops its least recently used key once it grows past ``maxsize``.

    ``maxsize=None`` disables the bound.
    """

    def __init__(self, maxsize: int | None, /) -> None:
        self._cache: dict[K, V] = {}
        self.maxsize = maxsize

    def get[T](self, key: K, default: T | Any = MISSING, /) -> V | T:
        try:
            self._cache[key] = self._cache.pop(key)
            return self._cache[key]
        except KeyError as exc:
            if default is MISSING:
                raise exc from None
            return default

    def peek[T](self, key: K, default: T | Any = MISSING, /) -> V | T:
        """Like :meth:`get` without touching the recency order."""
        try:
            return self._cache[key]
        except KeyError as exc:
            if default is MISSING:
                raise exc from None
            return default

    def __getitem__(self, key: K, /) -> V:
        self._cache[key] = self._cache.pop(key)
        return self._cache[key]

    def __setitem__(self, key: K, value: V, /) -> None:
        self._cache.pop(key, None)
        self._cache[key] = value
        if self.maxsize is not None and len(self._cache) > self.maxsize:
            self._cache.pop(next(iter(self._cache)))

    def __contains__(self, key: K, /) -> bool:
        return key in self._cache

    def __iter__(self) -> Iterator[K]:
        return iter(list(self._cache))

    def remove(self, key: K) -> bool:
        return self._cache.pop(key, MISSING) is not MISSING

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()


class TTLCache[K, V]:
    """Thread-safe, size-bounded cache whose entries expire ``ttl`` seconds after being set.

    Expired entries are dropped lazily on access and in bulk by :meth:`expire`.

    Every invalidation (:meth:`discard`, :meth:`discard_where`, :meth:`clear`) bumps
    :attr:`generation`. A caller that computes a value from some other source can read the
    generation first and hand it back to :meth:`set`; if anything was invalidated in the
    meantime the value is refused instead of being cached stale.
    """

    def __init__(
        self,
        ttl: float,
        maxsize: int | None = 4096,
        *,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            msg = "ttl must be greater than 0"
            raise ValueError(msg) from None

        self.ttl = ttl
        self._timer = timer
        self._lock = threading.Lock()
        self._entries = LRU[K, tuple[float, V]](maxsize)
        self._generation = 0
        self._hits = 0
        self._misses = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def maxsize(self) -> int | None:
        return self._entries.maxsize

    def get[T](self, key: K, default: T | Any = MISSING, /) -> V | T:
        with self._lock:
            try:
                expires_at, value = self._entries[key]
            except KeyError:
                pass
            else:
                if self._timer() < expires_at:
                    self._hits += 1
                    return value
                self._entries.remove(key)

            self._misses += 1

        if default is MISSING:
            raise KeyError(key)
        return default

    def set(self, key: K, value: V, ttl: float | None = None, *, generation: int | None = None) -> bool:
        with self._lock:
            if generation is not None and generation != self._generation:
                return False
            self._entries[key] = (self._timer() + (self.ttl if ttl is None else ttl), value)
            return True

    def discard(self, key: K) -> bool:
        with self._lock:
            self._generation += 1
            return self._entries.remove(key)

    def discard_where(self, predicate: Callable[[K], bool]) -> int:
        with self._lock:
            self._generation += 1
            doomed = [key for key in self._entries if predicate(key)]
            for key in doomed:
                self._entries.remove(key)
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._generation += 1
            self._entries.clear()

    def expire(self) -> int:
        with self._lock:
            now = self._timer()
            doomed = [key for key in self._entries if self._entries.peek(key)[0] <= now]
            for key in doomed:
                self._entries.remove(key)
            return len(doomed)

    def cache_info(self) -> CacheInfo:
        with self._lock:
            return CacheInfo(self._hits, self._misses, self._entries.maxsize, len(self._entries))

    def __contains__(self, key: K) -> bool:
        with self._lock:
            entry = self._entries.peek(key, None)
            return entry is not None and self._timer() < entry[0]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
