"""
Exception types raised by the Kount client.

Remote rejections of an order (any non-200 from the order endpoints) are NOT
raised; they come back as an ErrorResponse outcome. Exceptions here mean the
operation could not be executed at all.
"""

from __future__ import annotations

from typing import Optional


class KountError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(KountError, ValueError):
    """Client or settings were set up with something unusable."""


class AuthenticationError(KountError):
    def __init__(self, message: str, *, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ParseError(KountError, ValueError):
    def __init__(self, message: str, *, body: str = "") -> None:
        super().__init__(message)
        self.body = body
