"""Shared fixtures: an InfaktClient wired to an in-memory fake of the inFakt API."""

import json
from typing import Any, List, Optional

import httpx
import pytest
import pytest_asyncio

from mcp_server_infakt.config import InfaktConfig
from mcp_server_infakt.infakt_client import InfaktClient

API_KEY = "test-api-key-1234567890"
BASE_URL = "https://api.sandbox-infakt.pl/api/v3"


class FakeInfakt:
    """Records every request and answers with a configurable response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.payload: Any = {}
        self.content: Optional[bytes] = None
        self.exception: Optional[Exception] = None

    def reply(self, status_code: int = 200, payload: Any = None, content: Optional[bytes] = None) -> None:
        self.status_code = status_code
        self.payload = payload
        self.content = content

    def fail_with(self, exception: Exception) -> None:
        self.exception = exception

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exception is not None:
            raise self.exception
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        if self.payload is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def config() -> InfaktConfig:
    return InfaktConfig(api_key=API_KEY, base_url=BASE_URL, use_sandbox=True)


@pytest.fixture
def fake_api() -> FakeInfakt:
    return FakeInfakt()


@pytest_asyncio.fixture
async def client(config, fake_api):
    async with InfaktClient(config, transport=httpx.MockTransport(fake_api.handler)) as infakt:
        yield infakt


def response_json(content) -> Any:
    """Decode the JSON text of the first content block of a tool result."""
    return json.loads(content[0].text)
