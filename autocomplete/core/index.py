from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from autocomplete.utils.locks import RWLock

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, MutableMapping

log = logging.getLogger(__name__)


class Node:
    __slots__ = ("children", "terminal")

    def __init__(self) -> None:
        self.children: MutableMapping[str, Node] = {}
        self.terminal: bool = False


class PrefixIndex:
    """Trie of words keyed by code point, safe to share between threads.

    Mutations take the lock exclusively, reads take it shared. No operation raises on
    string input: the empty string is never stored, so inserting or deleting it is a
    no-op and looking it up is always false.
    """

    __slots__ = ("_lock", "_root")

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._lock = RWLock()
        self._root = Node()
        self.update(words)

    def insert(self, word: str) -> bool:
        """Store ``word``. Returns whether it was not already present."""
        with self._lock.exclusive():
            return self._insert(word)

    def update(self, words: Iterable[str]) -> int:
        """Store every word in ``words`` under one lock acquisition. Returns how many were new."""
        with self._lock.exclusive():
            return sum(self._insert(word) for word in words)

    def _insert(self, word: str) -> bool:
        if not word:
            return False

        node = self._root
        for char in word:
            node = node.children.setdefault(char, Node())

        added = not node.terminal
        node.terminal = True
        return added

    def delete(self, word: str) -> bool:
        """Remove ``word`` and prune the branch that only existed for it.

        Returns whether the word was present.
        """
        if not word:
            return False

        with self._lock.exclusive():
            node = self._root
            path: list[tuple[Node, str]] = []
            for char in word:
                if (child := node.children.get(char)) is None:
                    return False
                path.append((node, char))
                node = child

            if not node.terminal:
                return False
            node.terminal = False

            for parent, char in reversed(path):
                child = parent.children[char]
                if child.terminal or child.children:
                    break
                del parent.children[char]

            return True

    def exists(self, word: str) -> bool:
        if not word:
            return False

        with self._lock.shared():
            node = self._walk(word)
            return node is not None and node.terminal

    def search(self, prefix: str) -> list[str]:
        """Every stored word starting with ``prefix``, sorted by code point.

        An empty prefix matches every word.
        """
        with self._lock.shared():
            if (node := self._walk(prefix)) is None:
                return []
            return self._collect(node, prefix)

    def collect_all(self) -> list[str]:
        with self._lock.shared():
            return self._collect(self._root, "")

    def count(self) -> int:
        with self._lock.shared():
            return sum(node.terminal for node in self._nodes())

    def node_count(self) -> int:
        """Number of nodes in the trie, the root included."""
        with self._lock.shared():
            return sum(1 for _ in self._nodes())

    def clear(self) -> None:
        with self._lock.exclusive():
            self._root = Node()
        log.debug("Prefix index cleared")

    def _walk(self, s: str) -> Node | None:
        node = self._root
        for char in s:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    def _nodes(self) -> Iterator[Node]:
        stack = [self._root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(node.children.values())

    @staticmethod
    def _collect(node: Node, prefix: str) -> list[str]:
        results: list[str] = []
        stack = [(node, prefix)]
        while stack:
            node, word = stack.pop()
            if node.terminal:
                results.append(word)
            stack.extend((child, word + char) for char, child in node.children.items())

        results.sort()
        return results

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.exists(word)

    def __len__(self) -> int:
        return self.count()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} words={len(self)}>"
