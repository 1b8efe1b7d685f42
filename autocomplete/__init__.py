from autocomplete.core import (
    Autocomplete,
    InvalidationPolicy,
    PrefixIndex,
    RateLimiter,
    SearchResult,
    TokenIssuer,
    WordQuery,
)
from autocomplete.logger import with_logging

__all__ = (
    "Autocomplete",
    "InvalidationPolicy",
    "PrefixIndex",
    "RateLimiter",
    "SearchResult",
    "TokenIssuer",
    "WordQuery",
    "with_logging",
)
