"""
Durable word list the index is rebuilt from.

Two backends share the :class:`WordStore` interface:

- :class:`MemoryWordStore` keeps words in a process-local set (development
  and tests).
- :class:`RedisWordStore` keeps them in a Redis set, one member per word.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from typing import Iterable

import redis

logger = logging.getLogger(__name__)

DEFAULT_STORE_KEY = "autocomplete:words"


class WordStoreError(RuntimeError):
    """The backing store could not complete an operation."""


class WordStore(ABC):
    """Set of accepted words. Removing an absent word is not an error."""

    @abstractmethod
    def load_all(self) -> list[str]:
        ...

    @abstractmethod
    def add(self, word: str) -> None:
        ...

    @abstractmethod
    def remove(self, word: str) -> None:
        ...

    def close(self) -> None:
        pass


class MemoryWordStore(WordStore):
    def __init__(self, words: Iterable[str] = ()) -> None:
        self._words: set[str] = set(words)
        self._lock = threading.Lock()

    def load_all(self) -> list[str]:
        with self._lock:
            return sorted(self._words)

    def add(self, word: str) -> None:
        with self._lock:
            self._words.add(word)

    def remove(self, word: str) -> None:
        with self._lock:
            self._words.discard(word)


class RedisWordStore(WordStore):
    """Words stored as members of the Redis set *key*."""

    def __init__(self, client: redis.Redis, key: str = DEFAULT_STORE_KEY) -> None:
        self.client = client
        self.key = key

    def load_all(self) -> list[str]:
        try:
            members = self.client.smembers(self.key)
        except redis.RedisError as exc:
            raise WordStoreError(f"could not read {self.key!r}: {exc}") from exc
        return sorted(m.decode() if isinstance(m, bytes) else m for m in members)

    def add(self, word: str) -> None:
        try:
            self.client.sadd(self.key, word)
        except redis.RedisError as exc:
            raise WordStoreError(f"could not add word: {exc}") from exc

    def remove(self, word: str) -> None:
        try:
            self.client.srem(self.key, word)
        except redis.RedisError as exc:
            raise WordStoreError(f"could not remove word: {exc}") from exc

    def close(self) -> None:
        self.client.close()


def open_word_store(url: str, key: str = DEFAULT_STORE_KEY) -> WordStore:
    """Build a store from a URL: ``memory://`` or a ``redis://`` style URL."""
    scheme = url.split("://", 1)[0].lower() if "://" in url else ""
    if scheme == "memory":
        logger.info("Using in-memory word store")
        return MemoryWordStore()
    if scheme in ("redis", "rediss", "unix"):
        logger.info("Using Redis word store at key %s", key)
        return RedisWordStore(redis.Redis.from_url(url, decode_responses=True), key=key)
    raise ValueError(f"Unsupported word store URL: {url!r}")
