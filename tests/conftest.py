"""Shared fakes for client, authenticator and token store tests."""

import json

import pytest

from kount.auth import Authenticator, Credentials
from kount.client import Client
from kount.transport import HttpResponse

API_KEY = "test_api_key"
CLIENT_ID = "test_client"
AUTH_URL = "https://login.kount.com/oauth2/ausdppkujzCPQuIrY357/v1/token"
HOST = "https://api.example.com"


class FakeClock:
    def __init__(self, now=1_700_000_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeTransport:
    """Returns queued responses in order and records every request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def queue(self, status_code, body):
        text = body if isinstance(body, str) else json.dumps(body)
        self.responses.append(HttpResponse(status_code=status_code, text=text))

    def request(self, method, url, headers, body=None):
        self.calls.append({"method": method, "url": url, "headers": dict(headers), "body": body})
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        return self.responses.pop(0)

    def close(self):
        self.closed = True

    def calls_to(self, url):
        return [c for c in self.calls if c["url"] == url]


class FakeTokenStore:
    """Duck-typed store; does not subclass TokenStore."""

    def __init__(self, clock):
        self._clock = clock
        self.store = {}
        self.writes = []

    def get_token(self, api_key, client):
        return self.store.get((api_key, client))

    def store_token(self, api_key, client, token, expires_in):
        self.writes.append({"token": token, "expires_in": expires_in})
        self.store[(api_key, client)] = {"token": token, "expiry": int(self._clock()) + expires_in}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def token_store(clock):
    return FakeTokenStore(clock)


@pytest.fixture
def credentials():
    return Credentials(api_key=API_KEY, client_id=CLIENT_ID, auth_url=AUTH_URL, host=HOST)


@pytest.fixture
def authenticator(credentials, transport, token_store, clock):
    return Authenticator(credentials, transport, token_store=token_store, clock=clock)


@pytest.fixture
def client(transport, token_store, clock):
    return Client(
        api_key=API_KEY,
        client_id=CLIENT_ID,
        auth_url=AUTH_URL,
        host=HOST,
        token_store=token_store,
        transport=transport,
        clock=clock,
    )
