"""
Aurex Test Configuration
------------------------
Shared fixtures for all tests.

The network is never touched: every client gets an httpx.MockTransport
that records requests and answers with a configurable body.
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import httpx
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


class RecordingTransport(httpx.MockTransport):
    """
    Mock transport that records every request.

    Responds with ``body`` serialized as JSON, or with ``raw`` bytes, or
    raises ``error`` when set.
    """

    def __init__(
        self,
        body: Any = None,
        raw: Optional[bytes] = None,
        error: Optional[Exception] = None,
        status_code: int = 200,
    ):
        self.requests: List[httpx.Request] = []
        self.body = {"success": True, "data": None} if body is None else body
        self.raw = raw
        self.error = error
        self.status_code = status_code
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for recording transports."""
    return RecordingTransport


@pytest.fixture
def transport() -> RecordingTransport:
    """Transport answering a successful empty envelope."""
    return RecordingTransport()


@pytest.fixture(scope="session")
def api_key() -> str:
    return "sk_test_123456"


@pytest.fixture(scope="session")
def base_url() -> str:
    return "https://dashboard.test/api"
