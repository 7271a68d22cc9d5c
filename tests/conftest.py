import pytest

from trie_autocomplete.app import create_app
from trie_autocomplete.config import Settings
from trie_autocomplete.store import MemoryWordStore, WordStore, WordStoreError


class FlakyStore(WordStore):
    """Memory store whose writes can be switched to fail."""

    def __init__(self, words=()):
        self.inner = MemoryWordStore(words)
        self.fail_reads = False
        self.fail_writes = False

    def load_all(self):
        if self.fail_reads:
            raise WordStoreError("store offline")
        return self.inner.load_all()

    def add(self, word):
        if self.fail_writes:
            raise WordStoreError("store offline")
        self.inner.add(word)

    def remove(self, word):
        if self.fail_writes:
            raise WordStoreError("store offline")
        self.inner.remove(word)


@pytest.fixture
def store():
    return FlakyStore(["app", "apple", "application", "banana"])


@pytest.fixture
def app(store):
    app = create_app(Settings(), store=store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
