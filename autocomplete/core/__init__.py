from autocomplete.core.auth import TokenIssuer
from autocomplete.core.index import Node, PrefixIndex
from autocomplete.core.lookup import Autocomplete, InvalidationPolicy, SearchResult, WordQuery
from autocomplete.core.ratelimit import RateLimiter

__all__ = (
    "Autocomplete",
    "InvalidationPolicy",
    "Node",
    "PrefixIndex",
    "RateLimiter",
    "SearchResult",
    "TokenIssuer",
    "WordQuery",
)
