import json
import time

import pytest

from kount.token_stores import CachedToken, InMemoryTokenStore, RedisTokenStore, token_key


class FakeRedis:
    def __init__(self):
        self.data = {}
        self.ttls = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ex=None):
        self.data[key] = value
        self.ttls[key] = ex
        return True

    def ping(self):
        return True


def test_token_key_format():
    assert token_key("api", "client") == "kount:token:client:api"


def test_cached_token_validity():
    assert CachedToken("t", 100).is_valid(99) is True
    assert CachedToken("t", 100).is_valid(100) is False
    assert CachedToken("t", None).is_valid(10**12) is True
    assert CachedToken("", None).is_valid(0) is False


def test_in_memory_store_roundtrip_and_expiry():
    now = [1000]
    store = InMemoryTokenStore(clock=lambda: now[0])

    store.store_token("api", "client", "tok", 60)
    assert store.get_token("api", "client") == CachedToken("tok", 1060)

    now[0] = 1060
    assert store.get_token("api", "client") is None


def test_in_memory_store_keys_by_api_key_and_client():
    store = InMemoryTokenStore()
    store.store_token("api", "a", "tok-a", 60)

    assert store.get_token("api", "b") is None
    assert store.get_token("other", "a") is None
    store.clear()
    assert store.get_token("api", "a") is None


def test_redis_store_writes_json_with_ttl():
    fake = FakeRedis()
    store = RedisTokenStore(client=fake)
    before = int(time.time())

    store.store_token("api", "client", "tok", 1080)

    key = "kount:token:client:api"
    assert fake.ttls[key] == 1080
    payload = json.loads(fake.data[key])
    assert payload["token"] == "tok"
    assert before + 1080 <= payload["expiry"] <= int(time.time()) + 1080


def test_redis_store_reads_entry():
    fake = FakeRedis()
    fake.data["kount:token:client:api"] = json.dumps({"token": "tok", "expiry": 2000})
    store = RedisTokenStore(client=fake)

    assert store.get_token("api", "client") == CachedToken("tok", 2000)


def test_redis_store_decodes_bytes():
    fake = FakeRedis()
    fake.data["kount:token:client:api"] = b'{"token": "tok", "expiry": 5}'

    assert RedisTokenStore(client=fake).get_token("api", "client") == CachedToken("tok", 5)


def test_redis_store_miss_and_garbage_are_none():
    fake = FakeRedis()
    store = RedisTokenStore(client=fake)
    assert store.get_token("api", "client") is None

    fake.data["kount:token:client:api"] = "not-json"
    assert store.get_token("api", "client") is None


def test_redis_store_from_url(monkeypatch):
    seen = {}

    def fake_from_url(url, decode_responses):
        seen["url"] = url
        seen["decode_responses"] = decode_responses
        return FakeRedis()

    monkeypatch.setattr("kount.token_stores.redis_store.redis.from_url", fake_from_url)

    store = RedisTokenStore(url="redis://cache:6379/1")

    assert seen == {"url": "redis://cache:6379/1", "decode_responses": True}
    assert store.ping() is True


def test_redis_store_requires_url_or_client():
    with pytest.raises(ValueError):
        RedisTokenStore()
