"""
Autocomplete service: keeps the prefix index and the word store in step.

Reads go to the index only. Writes mutate the index first and then the
store; when the store write fails the index mutation is undone so the two
never diverge.
"""

from __future__ import annotations

import logging
import threading

from trie_autocomplete.store import WordStore
from trie_autocomplete.trie import InvalidWordError, PrefixIndex

logger = logging.getLogger(__name__)


class AutocompleteService:
    def __init__(self, index: PrefixIndex, store: WordStore) -> None:
        self.index = index
        self.store = store
        # Serialises write-through sequences (index, store, rollback).
        self._write_lock = threading.Lock()

    def bootstrap(self) -> int:
        """Rebuild the index from the store. Returns the number of words loaded.

        The snapshot and the swap both happen under the service mutex, so no
        add or delete can land between them. The new tree is built off to the
        side and installed in one write section; searches never see it half
        built.
        """
        with self._write_lock:
            words = self.store.load_all()
            staging = PrefixIndex(self.index.max_word_length)
            loaded = 0
            for word in words:
                try:
                    if staging.insert(word):
                        loaded += 1
                except InvalidWordError as exc:
                    logger.warning("Skipping stored word %r: %s", word, exc)
            self.index.replace_with(staging)
        logger.info("Seeded index with %d words", loaded)
        return loaded

    reload = bootstrap

    def suggest(self, prefix: str, limit: int | None = None) -> list[str]:
        return self.index.search(prefix, limit=limit)

    def add_word(self, word: str) -> bool:
        """Add *word* to index and store. Returns ``True`` if it was new."""
        self.index.validate(word)
        with self._write_lock:
            added = self.index.insert(word)
            try:
                self.store.add(word)
            except Exception:
                if added:
                    self.index.delete(word)
                logger.exception("Store rejected add of %r; index rolled back", word)
                raise
        logger.info("Added word=%s", word)
        return added

    def remove_word(self, word: str) -> bool:
        """Remove *word* from index and store. Returns ``True`` if it was indexed."""
        self.index.validate(word)
        with self._write_lock:
            removed = self.index.delete(word)
            try:
                self.store.remove(word)
            except Exception:
                if removed:
                    self.index.insert(word)
                logger.exception("Store rejected delete of %r; index rolled back", word)
                raise
        logger.info("Deleted word=%s (present=%s)", word, removed)
        return removed
