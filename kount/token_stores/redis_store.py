"""
Redis-backed token store, for sharing a bearer token across processes and
hosts. Entries are JSON documents {"token": ..., "expiry": ...} written with
a TTL equal to the token's remaining lifetime.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import redis

from kount.token_stores.base import CachedToken, TokenStore, token_key

logger = logging.getLogger(__name__)


class RedisTokenStore(TokenStore):
    def __init__(self, url: Optional[str] = None, client: Any = None) -> None:
        if client is None and not url:
            raise ValueError("RedisTokenStore needs either a redis URL or a client")
        self._client = client if client is not None else redis.from_url(url, decode_responses=True)

    def get_token(self, api_key: str, client: str) -> Optional[CachedToken]:
        raw = self._client.get(token_key(api_key, client))
        if not raw:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            return CachedToken.from_mapping(json.loads(raw))
        except (json.JSONDecodeError, TypeError, ValueError, AttributeError):
            logger.warning("Ignoring unreadable token entry for client %s", client)
            return None

    def store_token(self, api_key: str, client: str, token: str, expires_in: int) -> None:
        payload = json.dumps({"token": token, "expiry": self._expiry_from_now(expires_in)})
        self._client.set(token_key(api_key, client), payload, ex=int(expires_in))

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False
