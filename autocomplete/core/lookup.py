from __future__ import annotations

import logging
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Final

import msgspec

from autocomplete.core.index import PrefixIndex
from autocomplete.errors import InvalidQuery
from autocomplete.utils.cache import TTLCache
from autocomplete.utils.hashable import Signature
from autocomplete.utils.helper import normalize_word

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

log = logging.getLogger(__name__)

DEFAULT_TTL: Final = 300.0

_SEARCH: Final = "search"
_EXISTS: Final = "exists"


class WordQuery(msgspec.Struct, frozen=True, kw_only=True):
    prefix: str = ""
    contains: str = ""
    offset: int = 0
    limit: int | None = None


class SearchResult(msgspec.Struct, frozen=True):
    words: tuple[str, ...]
    total: int

    @property
    def count(self) -> int:
        return len(self.words)


class InvalidationPolicy(StrEnum):
    FLUSH = auto()
    PRECISE = auto()


type LookupCache = TTLCache[Signature, SearchResult | bool]


def _touches(words: Iterable[str]) -> Callable[[Signature], bool]:
    """Predicate matching signatures whose text is a prefix of, or extends, any of ``words``."""
    targets = frozenset(words)

    def predicate(key: Signature) -> bool:
        return any(word.startswith(key.text) or key.text.startswith(word) for word in targets)

    return predicate


class Autocomplete:
    """Read-through cache in front of a :class:`PrefixIndex`.

    Text is lowercased on the way in, for writes and reads alike. Writes invalidate the
    cache before returning, either wholesale or only for the signatures they can affect,
    depending on ``policy``.
    """

    def __init__(
        self,
        index: PrefixIndex | None = None,
        cache: LookupCache | None = None,
        *,
        policy: InvalidationPolicy = InvalidationPolicy.FLUSH,
    ) -> None:
        self.index = PrefixIndex() if index is None else index
        self.cache: LookupCache = TTLCache(DEFAULT_TTL) if cache is None else cache
        self.policy = InvalidationPolicy(policy)

    def lookup(self, query: WordQuery) -> SearchResult:
        if query.offset < 0:
            msg = f"offset must not be negative, got {query.offset}"
            raise InvalidQuery(msg)
        if query.limit is not None and query.limit < 0:
            msg = f"limit must not be negative, got {query.limit}"
            raise InvalidQuery(msg)

        prefix = normalize_word(query.prefix)
        contains = normalize_word(query.contains)
        key = Signature.of(
            _SEARCH,
            prefix,
            casefold=True,
            contains=contains,
            offset=query.offset,
            limit=query.limit,
        )

        try:
            return self.cache.get(key)  # type: ignore[return-value]
        except KeyError:
            pass

        generation = self.cache.generation
        words = self.index.search(prefix)
        if contains:
            words = [word for word in words if contains in word]

        stop = None if query.limit is None else query.offset + query.limit
        result = SearchResult(tuple(words[query.offset : stop]), len(words))

        if not self.cache.set(key, result, generation=generation):
            log.debug("Discarded lookup for %r, the index changed while it ran", prefix)
        return result

    def exists(self, word: str) -> bool:
        word = normalize_word(word)
        key = Signature.of(_EXISTS, word, casefold=True)

        try:
            return self.cache.get(key)  # type: ignore[return-value]
        except KeyError:
            pass

        generation = self.cache.generation
        found = self.index.exists(word)
        self.cache.set(key, found, generation=generation)
        return found

    def add(self, words: Iterable[str]) -> int:
        """Store ``words``. Returns how many of them were new."""
        normalized = [normalize_word(word) for word in words]
        added = self.index.update(normalized)
        self._invalidate(normalized)
        log.debug("Added %d new word(s) of %d", added, len(normalized))
        return added

    def remove(self, word: str) -> bool:
        """Delete ``word``, or every word when ``word`` is empty. Returns whether anything was deleted."""
        if not word:
            self.clear()
            return True

        word = normalize_word(word)
        removed = self.index.delete(word)
        if removed:
            self._invalidate((word,))
        return removed

    def clear(self) -> None:
        self.index.clear()
        self.cache.clear()
        log.info("Cleared all words")

    def sweep(self) -> int:
        """Drop expired cache entries. Returns how many were dropped."""
        return self.cache.expire()

    def _invalidate(self, words: Iterable[str]) -> None:
        if self.policy is InvalidationPolicy.FLUSH:
            self.cache.clear()
            return

        removed = self.cache.discard_where(_touches(word for word in words if word))
        log.debug("Invalidated %d cached lookup(s)", removed)
