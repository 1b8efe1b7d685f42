from __future__ import annotations

from collections.abc import Callable, Coroutine, Mapping
from typing import Any, NamedTuple

type Coro[T] = Coroutine[Any, Any, T]
type CoroFunction[**P, T] = Callable[P, Coro[T]]


class Settings(NamedTuple):
    secret_key: str
    host: str = "127.0.0.1"
    port: int = 8080
    token_lifetime: float = 86400.0
    cache_ttl: float = 300.0
    cache_sweep_interval: float = 600.0
    cache_maxsize: int = 4096
    cache_invalidation: str = "flush"
    rate_limit: float = 1.0
    rate_burst: int = 3
    users: Mapping[str, str] = {}
