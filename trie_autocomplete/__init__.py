"""Prefix-tree autocomplete backed by a durable word list."""

from trie_autocomplete.service import AutocompleteService
from trie_autocomplete.store import MemoryWordStore, RedisWordStore, WordStore, WordStoreError
from trie_autocomplete.trie import InvalidWordError, PrefixIndex, PrefixNode

__version__ = "1.0.0"

__all__ = [
    "AutocompleteService",
    "InvalidWordError",
    "MemoryWordStore",
    "PrefixIndex",
    "PrefixNode",
    "RedisWordStore",
    "WordStore",
    "WordStoreError",
]
