"""
Shared fixtures.

``FakeBlobService`` stands in for the Azure endpoint: it records every
request and answers with queued responses through ``httpx.MockTransport``.
"""

from typing import Dict, List, Optional, Tuple

import httpx
import pytest

from azstore.core.transport import HttpxTransport
from azstore.storage.client import Client

ACCOUNT = "testaccount"
DATE = "Wed, 23 Oct 2024 10:00:00 GMT"
LAST_MODIFIED = "Tue, 22 Oct 2024 08:30:00 GMT"
LEASE_ID = "f35a5fd8-bc9f-4aa8-b2a7-9b2c5d0d27a1"
PROPOSED_LEASE_ID = "0e5c2b31-6f0c-4f35-98a7-3c1f5a6b7d90"


def common_headers(**extra: str) -> Dict[str, str]:
    headers = {"x-ms-request-id": "req-1", "Date": DATE}
    headers.update(extra)
    return headers


def modified_headers(**extra: str) -> Dict[str, str]:
    headers = common_headers(**{"ETag": '"0x8D4BCC2E4835CD0"', "Last-Modified": LAST_MODIFIED})
    headers.update(extra)
    return headers


class FakeBlobService:
    """Records requests and replays queued responses in order."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._responses: List[Tuple[int, Dict[str, str], bytes]] = []

    def respond(self, status_code: int, headers: Optional[Dict[str, str]] = None, body: bytes = b"") -> None:
        self._responses.append((status_code, headers or {}, body))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, headers, body = self._responses.pop(0)
        return httpx.Response(status_code, headers=headers, content=body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def service() -> FakeBlobService:
    return FakeBlobService()


@pytest.fixture
async def client(service):
    """Client wired to the fake service."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(service))
    client = Client(ACCOUNT, transport=HttpxTransport(client=http_client))
    yield client
    await http_client.aclose()
