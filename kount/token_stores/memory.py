"""
In-process token store.

Useful for tests and for sharing one token between several Client objects in
the same process. Nothing survives a restart; use RedisTokenStore for that.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional

from kount.token_stores.base import CachedToken, TokenStore, token_key


class InMemoryTokenStore(TokenStore):
    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._tokens: Dict[str, CachedToken] = {}
        self._lock = threading.Lock()

    def get_token(self, api_key: str, client: str) -> Optional[CachedToken]:
        key = token_key(api_key, client)
        with self._lock:
            cached = self._tokens.get(key)
            if cached is None:
                return None
            # Mimic TTL eviction.
            if not cached.is_valid(self._clock()):
                self._tokens.pop(key, None)
                return None
            return cached

    def store_token(self, api_key: str, client: str, token: str, expires_in: int) -> None:
        expiry = int(self._clock()) + int(expires_in)
        with self._lock:
            self._tokens[token_key(api_key, client)] = CachedToken(token=token, expiry=expiry)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()
