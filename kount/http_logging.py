"""
Opt-in wire logging for debugging integrations.

Every transport call is logged on the `kount.http` logger at DEBUG. Nothing
is printed unless `enable_http_debug_logging()` is called (Client.from_settings
does this when KOUNT_DEBUG_HTTP is set), which attaches a stdout handler.
"""

from __future__ import annotations

import logging
import sys
from typing import Dict, Mapping, Optional

HTTP_LOGGER_NAME = "kount.http"

http_logger = logging.getLogger(HTTP_LOGGER_NAME)

_SENSITIVE_HEADERS = {"authorization"}


def mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    masked = {}
    for name, value in headers.items():
        if name.lower() in _SENSITIVE_HEADERS:
            scheme = str(value).split(" ", 1)[0]
            masked[name] = f"{scheme} ***"
        else:
            masked[name] = value
    return masked


def log_request(method: str, url: str, headers: Mapping[str, str], body: Optional[str]) -> None:
    if not http_logger.isEnabledFor(logging.DEBUG):
        return
    http_logger.debug("[kount] Sending: %s %s", method, url)
    http_logger.debug("[kount] Headers: %s", mask_headers(headers))
    if body:
        http_logger.debug("[kount] Data: %s", body)


def log_response(status_code: int, body: str, elapsed_seconds: float) -> None:
    if not http_logger.isEnabledFor(logging.DEBUG):
        return
    http_logger.debug("[kount] Status: %s", status_code)
    http_logger.debug("[kount] Benchmark: %.4f seconds", elapsed_seconds)
    http_logger.debug("[kount] Response: %s", body)


def enable_http_debug_logging(stream=None) -> logging.Handler:
    """Attach a stream handler (stdout by default) to the wire logger."""
    for handler in http_logger.handlers:
        if getattr(handler, "_kount_debug", False):
            return handler
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    handler._kount_debug = True  # type: ignore[attr-defined]
    http_logger.addHandler(handler)
    http_logger.setLevel(logging.DEBUG)
    return handler


def disable_http_debug_logging() -> None:
    for handler in list(http_logger.handlers):
        if getattr(handler, "_kount_debug", False):
            http_logger.removeHandler(handler)
    http_logger.setLevel(logging.NOTSET)
