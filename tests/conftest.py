"""Shared fixtures: a scripted transport standing in for the HTTP layer."""
import json
from urllib.parse import urlsplit

import pytest

from tuyalink.clients.cloud import Client
from tuyalink.core.errors import TransportError
from tuyalink.transports.base import Transport


class FakeTransport(Transport):
    """Replays queued responses and records every request it receives."""

    def __init__(self):
        self.responses = []
        self.requests = []
        self.closed = False

    def queue(self, *payloads):
        for payload in payloads:
            if isinstance(payload, (bytes, Exception)):
                self.responses.append(payload)
            else:
                self.responses.append(json.dumps(payload).encode())
        return self

    def request(self, method, url, headers, body=None):
        parts = urlsplit(url)
        target = parts.path + (f"?{parts.query}" if parts.query else "")
        self.requests.append({"method": method, "url": url, "target": target, "headers": dict(headers), "body": body})
        if not self.responses:
            raise TransportError("no response queued", path=url)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


TOKEN_RESPONSE = {
    "success": True,
    "t": 1700000000000,
    "result": {"access_token": "tok123", "expire_time": 7200, "refresh_token": "ref456", "uid": "u1"},
}


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    return Client("client-id", "client-secret", region="eu", transport=transport)


@pytest.fixture
def authed_client(client, transport):
    """A client whose first request will be answered with a token."""
    transport.queue(TOKEN_RESPONSE)
    return client
