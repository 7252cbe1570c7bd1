"""
Token stores.

A store lets several Client instances (threads, processes, hosts) reuse one
bearer token instead of each authenticating on its own.

- InMemoryTokenStore: process-local, for tests and single-process apps
- RedisTokenStore: shared, survives restarts
"""

from .base import CachedToken, TokenStore, token_key
from .memory import InMemoryTokenStore
from .redis_store import RedisTokenStore

__all__ = ["CachedToken", "TokenStore", "token_key", "InMemoryTokenStore", "RedisTokenStore"]
