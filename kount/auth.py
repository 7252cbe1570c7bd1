"""
Bearer token management (OAuth2 client-credentials).

Lookup order on every order call:
1. the token held in memory, if not yet expired
2. the shared token store (when configured), if its entry is not expired
3. a fresh client-credentials exchange against the auth URL

Token lifetimes are shortened by TOKEN_SAFETY_MARGIN_SECONDS so a token is
renewed before the API would start refusing it mid-request.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional
from urllib.parse import urlencode

from kount.errors import AuthenticationError
from kount.responses import parse_json
from kount.token_stores.base import CachedToken
from kount.transport import Transport

logger = logging.getLogger(__name__)

TOKEN_SAFETY_MARGIN_SECONDS = 120
DEFAULT_EXPIRES_IN = 3600
AUTH_SCOPE = "k1_integration_api"


@dataclass(frozen=True)
class Credentials:
    api_key: str
    client_id: str
    auth_url: str
    host: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "host", self.host.rstrip("/"))


class Authenticator:
    def __init__(
        self,
        credentials: Credentials,
        transport: Transport,
        token_store: Any = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.credentials = credentials
        self.transport = transport
        self.token_store = token_store
        self._clock = clock
        self._token: Optional[str] = None
        self._expiry: Optional[int] = None
        self._lock = threading.Lock()

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def expiry(self) -> Optional[int]:
        return self._expiry

    def _now(self) -> int:
        return int(self._clock())

    def set_token(self, token: str, expiry: Optional[int] = None) -> None:
        """Use an already-issued bearer token. expiry=None means "until replaced"."""
        with self._lock:
            self._token = token
            self._expiry = expiry

    def ensure_token(self) -> str:
        with self._lock:
            now = self._now()
            if self._token and (self._expiry is None or now < self._expiry):
                logger.debug("Reusing in-memory bearer token for client %s", self.credentials.client_id)
                return self._token

            cached = self._load_from_store()
            if cached is not None and cached.is_valid(now):
                logger.info("Loaded bearer token from token store for client %s", self.credentials.client_id)
                self._token = cached.token
                self._expiry = cached.expiry
                return cached.token

            return self._authenticate()

    def authenticate(self) -> str:
        """Run the client-credentials exchange now, ignoring any cached token."""
        with self._lock:
            return self._authenticate()

    def _load_from_store(self) -> Optional[CachedToken]:
        if self.token_store is None:
            return None
        cached = self.token_store.get_token(api_key=self.credentials.api_key, client=self.credentials.client_id)
        if cached is None or isinstance(cached, CachedToken):
            return cached
        return CachedToken.from_mapping(cached)

    def _authenticate(self) -> str:
        creds = self.credentials
        headers = {
            "Authorization": f"Basic {creds.api_key}",
            "Content-Type": "application/x-www-form-urlencoded",
        }
        body = urlencode({"grant_type": "client_credentials", "scope": AUTH_SCOPE})

        logger.info(f"Authenticating client {creds.client_id} against {creds.auth_url}")
        response = self.transport.request("POST", creds.auth_url, headers, body)
        if response.status_code != 200:
            logger.error("Authentication failed for client %s: HTTP %s", creds.client_id, response.status_code)
            raise AuthenticationError(
                f"Authentication failed ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        data = parse_json(response.text)
        access_token = data.get("access_token") if isinstance(data, dict) else None
        if not access_token:
            raise AuthenticationError(
                "Authentication response did not contain an access_token",
                status_code=response.status_code,
                body=response.text,
            )

        expires_in = data.get("expires_in")
        if expires_in is None:
            expires_in = DEFAULT_EXPIRES_IN
        effective_expires_in = int(expires_in) - TOKEN_SAFETY_MARGIN_SECONDS

        self._token = access_token
        self._expiry = self._now() + effective_expires_in

        if self.token_store is not None:
            if effective_expires_in > 0:
                self.token_store.store_token(
                    api_key=creds.api_key,
                    client=creds.client_id,
                    token=access_token,
                    expires_in=effective_expires_in,
                )
            else:
                logger.warning(
                    "Token lifetime of %ss is within the %ss safety margin; not persisting to token store",
                    expires_in,
                    TOKEN_SAFETY_MARGIN_SECONDS,
                )
        return access_token
