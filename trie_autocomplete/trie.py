"""
Prefix index: an uncompressed trie of whole words for autocomplete.

Techniques used:
  - One character per edge: every node owns a ``dict`` of single-character
    children, so deleting a node is just dropping it from its parent.
  - Iterative traversal: insert, enumeration and delete walk the tree with an
    explicit stack, keeping the call stack flat regardless of word length.
  - Eager pruning: delete unwinds the recorded path and drops every node that
    no longer leads to a live word.
  - Readers/writer locking: searches run concurrently, mutations are
    exclusive (see :mod:`trie_autocomplete.rwlock`).

Complexity (n = word length, m = nodes under the matched prefix):
  insert / delete / contains   : O(n)
  search                       : O(n + m)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from trie_autocomplete.rwlock import ReadWriteLock

DEFAULT_MAX_WORD_LENGTH = 256


class InvalidWordError(ValueError):
    """Raised for input the index refuses to store or look up."""


@dataclass
class PrefixNode:
    """Internal node of the index."""

    children: dict[str, PrefixNode] = field(default_factory=dict)
    is_terminal: bool = False


class PrefixIndex:
    """A thread-safe prefix tree of words.

    >>> idx = PrefixIndex()
    >>> for w in ("app", "apple", "application"):
    ...     _ = idx.insert(w)
    >>> idx.search("app")
    ['app', 'apple', 'application']
    >>> idx.delete("apple")
    True
    >>> idx.search("app")
    ['app', 'application']
    """

    def __init__(self, max_word_length: int = DEFAULT_MAX_WORD_LENGTH) -> None:
        if max_word_length < 1:
            raise ValueError("max_word_length must be positive")
        self.max_word_length = max_word_length
        self._root = PrefixNode()
        self._size = 0
        self._lock = ReadWriteLock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def insert(self, word: str) -> bool:
        """Insert *word*. Returns ``True`` if it was not already present."""
        self.validate(word)
        with self._lock.write():
            node = self._root
            for char in word:
                child = node.children.get(char)
                if child is None:
                    child = PrefixNode()
                    node.children[char] = child
                node = child
            if node.is_terminal:
                return False
            node.is_terminal = True
            self._size += 1
            return True

    def search(self, prefix: str, limit: int | None = None) -> list[str]:
        """Return every word starting with *prefix*, in lexicographic order.

        An unknown prefix gives an empty list. ``limit`` caps the number of
        words returned.
        """
        if not isinstance(prefix, str):
            raise InvalidWordError(f"prefix must be a string, got {type(prefix).__name__}")
        if limit is not None and limit < 0:
            raise ValueError("limit must not be negative")
        if len(prefix) > self.max_word_length:
            return []
        with self._lock.read():
            node = self._find_node(prefix)
            if node is None:
                return []
            matches: list[str] = []
            if limit == 0:
                return matches
            for word in self._iter_words(node, prefix):
                matches.append(word)
                if limit is not None and len(matches) >= limit:
                    break
            return matches

    def delete(self, word: str) -> bool:
        """Remove *word*. Returns ``True`` if it existed; absent words are a no-op."""
        self.validate(word)
        with self._lock.write():
            # (parent, edge char) for every step, so the unwind needs no recursion.
            path: list[tuple[PrefixNode, str]] = []
            node = self._root
            for char in word:
                child = node.children.get(char)
                if child is None:
                    return False
                path.append((node, char))
                node = child
            if not node.is_terminal:
                return False
            node.is_terminal = False
            self._size -= 1
            # Drop childless, non-terminal nodes bottom-up. The root never
            # appears as a child in `path`, so it is never removed.
            while path and not node.children and not node.is_terminal:
                parent, edge_char = path.pop()
                del parent.children[edge_char]
                node = parent
            return True

    def contains(self, word: str) -> bool:
        """Exact-word membership."""
        if not isinstance(word, str) or not word or len(word) > self.max_word_length:
            return False
        with self._lock.read():
            node = self._find_node(word)
            return node is not None and node.is_terminal

    def starts_with(self, prefix: str) -> bool:
        """Return ``True`` if any word starts with *prefix*."""
        if not isinstance(prefix, str) or len(prefix) > self.max_word_length:
            return False
        with self._lock.read():
            node = self._find_node(prefix)
            # Pruning guarantees any reachable node leads to a word, but an
            # empty index still has a bare root.
            return node is not None and (node.is_terminal or bool(node.children))

    def load(self, words: Iterable[str]) -> int:
        """Bulk insert; returns how many words were new."""
        added = 0
        for word in words:
            if self.insert(word):
                added += 1
        return added

    def clear(self) -> None:
        """Drop every word, leaving a bare root."""
        with self._lock.write():
            self._root = PrefixNode()
            self._size = 0

    def replace_with(self, other: PrefixIndex) -> None:
        """Take over *other*'s words in a single write section.

        *other* is left empty.
        """
        if other is self:
            return
        with other._lock.write():
            root, size = other._root, other._size
            other._root = PrefixNode()
            other._size = 0
        with self._lock.write():
            self._root = root
            self._size = size

    def node_count(self) -> int:
        """Number of nodes below the root."""
        with self._lock.read():
            count = 0
            stack = list(self._root.children.values())
            while stack:
                node = stack.pop()
                count += 1
                stack.extend(node.children.values())
            return count

    def validate(self, word: str) -> None:
        """Raise :class:`InvalidWordError` unless *word* can be stored."""
        if not isinstance(word, str):
            raise InvalidWordError(f"word must be a string, got {type(word).__name__}")
        if not word:
            raise InvalidWordError("word must not be empty")
        if len(word) > self.max_word_length:
            raise InvalidWordError(
                f"word too long ({len(word)} chars, max {self.max_word_length})"
            )
        try:
            word.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InvalidWordError("word is not valid unicode text") from exc

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __iter__(self) -> Iterator[str]:
        return iter(self.search(""))

    # ------------------------------------------------------------------
    # Internal helpers (callers hold the lock)
    # ------------------------------------------------------------------

    def _find_node(self, key: str) -> PrefixNode | None:
        node = self._root
        for char in key:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    @staticmethod
    def _iter_words(start: PrefixNode, prefix: str) -> Iterator[str]:
        # Pre-order DFS with explicit stack: (node, accumulated word)
        stack: list[tuple[PrefixNode, str]] = [(start, prefix)]
        while stack:
            current, acc = stack.pop()
            if current.is_terminal:
                yield acc
            for ch in sorted(current.children, reverse=True):
                stack.append((current.children[ch], acc + ch))
