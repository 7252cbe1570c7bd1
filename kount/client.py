"""
Kount orders API client.

    client = Client(api_key=..., client_id=..., auth_url=..., host=...)
    outcome = client.create_order({"merchant_order_id": "A-1", ...})
    if outcome.is_success() and outcome.is_approved():
        ...

Remote rejections come back as ErrorResponse objects; exceptions are reserved
for failures to run the call at all (bad configuration, authentication
failure, unparseable body, network errors from the transport).
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, Optional
from urllib.parse import quote

from kount.auth import Authenticator, Credentials
from kount.config import KountSettings, load_settings
from kount.errors import ConfigurationError
from kount.http_logging import enable_http_debug_logging
from kount.request_builder import build_order_body
from kount.responses import Outcome, map_response
from kount.token_stores.base import TokenStore
from kount.token_stores.redis_store import RedisTokenStore
from kount.transport import Transport, build_transport

logger = logging.getLogger(__name__)

ORDERS_PATH = "/commerce/v2/orders"


def _validate_token_store(token_store: Any) -> None:
    if token_store is None or isinstance(token_store, TokenStore):
        return
    if not (callable(getattr(token_store, "get_token", None)) and callable(getattr(token_store, "store_token", None))):
        raise ConfigurationError("Token storage adapter must implement get_token and store_token methods")


class Client:
    def __init__(
        self,
        api_key: str,
        client_id: str,
        auth_url: str,
        host: str,
        token_store: Any = None,
        transport: Optional[Transport] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        _validate_token_store(token_store)
        self.credentials = Credentials(api_key=api_key, client_id=client_id, auth_url=auth_url, host=host)
        self.token_store = token_store
        self.transport = transport or build_transport("requests")
        self.authenticator = Authenticator(self.credentials, self.transport, token_store=token_store, clock=clock)

    @classmethod
    def from_settings(cls, settings: Optional[KountSettings] = None, **kwargs: Any) -> "Client":
        """Build a client from KountSettings (loaded from the environment when omitted)."""
        settings = settings or load_settings()
        if settings.debug_http:
            enable_http_debug_logging()

        if "token_store" not in kwargs and settings.redis_url:
            kwargs["token_store"] = RedisTokenStore(url=settings.redis_url)
        if "transport" not in kwargs:
            kwargs["transport"] = build_transport(settings.transport, timeout_seconds=settings.timeout_seconds)

        return cls(
            api_key=settings.api_key,
            client_id=settings.client_id,
            auth_url=settings.auth_url,
            host=settings.host,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_order(self, order: Mapping[str, Any], risk_inquiry: bool = True) -> Outcome:
        url = f"{self.credentials.host}{ORDERS_PATH}?riskInquiry={str(bool(risk_inquiry)).lower()}"
        return self._send("POST", url, order)

    def update_order(self, order_id: str, order: Mapping[str, Any]) -> Outcome:
        url = f"{self.credentials.host}{ORDERS_PATH}/{quote(str(order_id), safe='')}"
        return self._send("PATCH", url, order)

    def authenticate(self) -> str:
        return self.authenticator.authenticate()

    @property
    def bearer_token(self) -> Optional[str]:
        return self.authenticator.token

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------

    def _send(self, method: str, url: str, order: Mapping[str, Any]) -> Outcome:
        token = self.authenticator.ensure_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        response = self.transport.request(method, url, headers, build_order_body(order))
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return map_response(response.status_code, response.text)
