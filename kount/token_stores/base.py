from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class CachedToken:
    token: str
    expiry: Optional[int]                # epoch seconds; None = no known expiry

    def is_valid(self, now: float) -> bool:
        if not self.token:
            return False
        return self.expiry is None or now < self.expiry

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CachedToken":
        expiry = data.get("expiry")
        return cls(token=str(data.get("token") or ""), expiry=int(expiry) if expiry is not None else None)

    def to_dict(self) -> dict:
        return {"token": self.token, "expiry": self.expiry}


def token_key(api_key: str, client: str) -> str:
    return f"kount:token:{client}:{api_key}"


class TokenStore(ABC):
    """
    Persistence for bearer tokens shared between client instances.

    Entries are keyed by (api_key, client). Implementations must expire an
    entry after `expires_in` seconds.
    """

    @abstractmethod
    def get_token(self, api_key: str, client: str) -> Optional[CachedToken]:
        """Return the stored token, or None when nothing usable is stored."""

    @abstractmethod
    def store_token(self, api_key: str, client: str, token: str, expires_in: int) -> None:
        """Persist `token` for `expires_in` seconds."""

    @staticmethod
    def _expiry_from_now(expires_in: int) -> int:
        return int(time.time()) + int(expires_in)
