"""
Synchronous HTTP transports.

The client only needs "send this request, give me status + body", so both
implementations return a plain HttpResponse and let library exceptions
(requests.RequestException / httpx.HTTPError) propagate unchanged.

- RequestsTransport: default, pooled requests.Session
- HttpxTransport: httpx.Client, handy when the host app already uses httpx
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Protocol

import httpx
import requests

from kount.http_logging import log_request, log_response

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass
class HttpResponse:
    status_code: int
    text: str
    headers: Dict[str, str] = field(default_factory=dict)


class Transport(Protocol):
    def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[str] = None,
    ) -> HttpResponse:
        ...

    def close(self) -> None:
        ...


class RequestsTransport:
    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS, session: Optional[requests.Session] = None) -> None:
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[str] = None,
    ) -> HttpResponse:
        log_request(method, url, headers, body)
        started = time.perf_counter()
        resp = self._session.request(
            method,
            url,
            headers=dict(headers),
            data=body.encode("utf-8") if body is not None else None,
            timeout=self.timeout_seconds,
        )
        log_response(resp.status_code, resp.text, time.perf_counter() - started)
        return HttpResponse(status_code=resp.status_code, text=resp.text, headers=dict(resp.headers))

    def close(self) -> None:
        self._session.close()


class HttpxTransport:
    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS, client: Optional[httpx.Client] = None) -> None:
        self.timeout_seconds = timeout_seconds
        self._client = client or httpx.Client(timeout=timeout_seconds)

    def request(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[str] = None,
    ) -> HttpResponse:
        log_request(method, url, headers, body)
        started = time.perf_counter()
        resp = self._client.request(
            method,
            url,
            headers=dict(headers),
            content=body.encode("utf-8") if body is not None else None,
        )
        log_response(resp.status_code, resp.text, time.perf_counter() - started)
        return HttpResponse(status_code=resp.status_code, text=resp.text, headers=dict(resp.headers))

    def close(self) -> None:
        self._client.close()


def build_transport(name: str = "requests", timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> Transport:
    if name == "httpx":
        return HttpxTransport(timeout_seconds=timeout_seconds)
    if name == "requests":
        return RequestsTransport(timeout_seconds=timeout_seconds)
    raise ValueError(f"Unknown transport '{name}'. Expected 'requests' or 'httpx'.")
