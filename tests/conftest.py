"""
Pytest configuration and shared fixtures for the test suite.
"""

import gzip
import json
from typing import Any, Callable, List, Optional, Union

import httpx
import pytest

from expo_push.config import ClientConfig
from expo_push.core.message import PushMessage


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_config() -> ClientConfig:
    """Create a test configuration."""
    return ClientConfig(
        access_token="test-access-token",
        base_url="https://exp.test",
        max_concurrent_requests=6,
        retry_min_timeout=1.0,
        max_retry_attempts=2,
        attempt_timeout=5.0,
        total_request_timeout=30.0,
        log_level="DEBUG",
    )


# ============================================================================
# Test Data Generators
# ============================================================================

def generate_test_token(index: int = 0) -> str:
    """Generate a deterministic Expo push token."""
    return f"ExponentPushToken[{index:022d}]"


def generate_tokens(count: int, start: int = 0) -> List[str]:
    """Generate several distinct push tokens."""
    return [generate_test_token(start + i) for i in range(count)]


def make_message(recipients: Union[int, List[str]] = 1, **fields: Any) -> PushMessage:
    """Create a message for `recipients` generated tokens or the given tokens."""
    if isinstance(recipients, int):
        recipients = generate_tokens(recipients)
    return PushMessage(to=recipients, **fields)


def ok_tickets(count: int, prefix: str = "ticket") -> List[dict]:
    """Wire form of `count` success tickets."""
    return [{"status": "ok", "id": f"{prefix}-{i}"} for i in range(count)]


@pytest.fixture
def sample_message() -> PushMessage:
    """Create a sample single-recipient message."""
    return make_message(1, title="Hello", body="World")


@pytest.fixture
def sample_messages() -> List[PushMessage]:
    """Create messages with 1, 2 and 3 recipients."""
    return [
        make_message(generate_tokens(1, start=0), body="one"),
        make_message(generate_tokens(2, start=10), body="two"),
        make_message(generate_tokens(3, start=20), body="three"),
    ]


# ============================================================================
# Mock Expo Server
# ============================================================================

class RecordedRequest:
    """A request received by the mock server."""

    def __init__(self, request: httpx.Request):
        self.method = request.method
        self.url = str(request.url)
        self.path = request.url.path
        self.headers = request.headers
        self.raw_body = request.content
        self.compressed = request.headers.get("Content-Encoding") == "gzip"

    @property
    def body(self) -> bytes:
        if self.compressed:
            return gzip.decompress(self.raw_body)
        return self.raw_body

    def json(self) -> Any:
        return json.loads(self.body)


class MockExpoServer:
    """
    Scripted stand-in for the Expo push API.

    Responses are consumed in order; the last one repeats once the script
    runs out. A callable responder can compute responses from the request.
    """

    def __init__(self):
        self.requests: List[RecordedRequest] = []
        self._responses: List[Callable[[], httpx.Response]] = []
        self._responder: Optional[Callable[[RecordedRequest], httpx.Response]] = None

    def respond_json(self, body: Any, status_code: int = 200) -> "MockExpoServer":
        self._responses.append(lambda: httpx.Response(status_code, json=body))
        return self

    def respond_text(self, text: str, status_code: int = 200) -> "MockExpoServer":
        self._responses.append(lambda: httpx.Response(status_code, text=text))
        return self

    def respond_using(self, responder: Callable[[RecordedRequest], httpx.Response]) -> "MockExpoServer":
        self._responder = responder
        return self

    def handle(self, request: httpx.Request) -> httpx.Response:
        recorded = RecordedRequest(request)
        self.requests.append(recorded)

        if self._responder is not None:
            return self._responder(recorded)
        if len(self._responses) > 1:
            return self._responses.pop(0)()
        if self._responses:
            return self._responses[0]()
        return httpx.Response(500, text="no scripted response")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


def echo_tickets(request: RecordedRequest) -> httpx.Response:
    """Respond to a send request with one ok ticket per recipient."""
    count = 0
    for message in request.json():
        to = message["to"]
        count += 1 if isinstance(to, str) else len(to)
    return httpx.Response(200, json={"data": ok_tickets(count)})


@pytest.fixture
def mock_server() -> MockExpoServer:
    """Create a mock Expo server."""
    return MockExpoServer()

