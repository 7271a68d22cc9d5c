from unittest import mock

import pytest
import redis

from trie_autocomplete.store import (
    MemoryWordStore,
    RedisWordStore,
    WordStoreError,
    open_word_store,
)


def test_memory_store_round_trip():
    store = MemoryWordStore(["pear"])
    store.add("apple")
    store.add("apple")
    assert store.load_all() == ["apple", "pear"]

    store.remove("pear")
    store.remove("missing")
    assert store.load_all() == ["apple"]


def test_redis_store_uses_a_set():
    client = mock.Mock()
    client.smembers.return_value = {b"beta", "alpha"}
    store = RedisWordStore(client, key="words")

    assert store.load_all() == ["alpha", "beta"]
    client.smembers.assert_called_once_with("words")

    store.add("gamma")
    client.sadd.assert_called_once_with("words", "gamma")

    store.remove("gamma")
    client.srem.assert_called_once_with("words", "gamma")


@pytest.mark.parametrize("method,args", [("load_all", ()), ("add", ("x",)), ("remove", ("x",))])
def test_redis_errors_become_store_errors(method, args):
    client = mock.Mock()
    for name in ("smembers", "sadd", "srem"):
        getattr(client, name).side_effect = redis.ConnectionError("down")
    store = RedisWordStore(client)

    with pytest.raises(WordStoreError):
        getattr(store, method)(*args)


def test_open_word_store_memory():
    assert isinstance(open_word_store("memory://"), MemoryWordStore)


def test_open_word_store_redis():
    with mock.patch("trie_autocomplete.store.redis.Redis.from_url") as from_url:
        store = open_word_store("redis://localhost:6379/0", key="k")
    assert isinstance(store, RedisWordStore)
    assert store.key == "k"
    from_url.assert_called_once_with("redis://localhost:6379/0", decode_responses=True)


def test_open_word_store_rejects_unknown_scheme():
    with pytest.raises(ValueError):
        open_word_store("mongodb://localhost/words")


def test_redis_store_close_closes_client():
    client = mock.Mock()
    RedisWordStore(client).close()
    client.close.assert_called_once_with()
