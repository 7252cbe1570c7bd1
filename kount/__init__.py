"""
Python client for the Kount orders (risk inquiry) API.

- Client: create_order / update_order with automatic bearer-token handling
- token_stores: share tokens across instances (in-memory or Redis)
- responses: RiskResponse / ErrorResponse outcomes and their nested objects
"""

from .auth import Authenticator, Credentials
from .client import Client
from .config import KountSettings, load_settings
from .errors import AuthenticationError, ConfigurationError, KountError, ParseError
from .responses import (
    ErrorResponse,
    Outcome,
    Persona,
    RiskDecision,
    RiskInquiry,
    RiskResponse,
    Segment,
    SegmentExecuted,
    Transaction,
)
from .token_stores import CachedToken, InMemoryTokenStore, RedisTokenStore, TokenStore
from .transport import HttpResponse, HttpxTransport, RequestsTransport, Transport

__version__ = "1.0.0"

__all__ = [
    # client
    "Client", "Authenticator", "Credentials",
    # config
    "KountSettings", "load_settings",
    # errors
    "KountError", "ConfigurationError", "AuthenticationError", "ParseError",
    # responses
    "Outcome", "RiskResponse", "ErrorResponse", "RiskDecision", "RiskInquiry",
    "Persona", "Segment", "SegmentExecuted", "Transaction",
    # token stores
    "TokenStore", "CachedToken", "InMemoryTokenStore", "RedisTokenStore",
    # transport
    "Transport", "HttpResponse", "RequestsTransport", "HttpxTransport",
]
