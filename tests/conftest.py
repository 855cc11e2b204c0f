"""
Shared Test Fixtures
====================

Fixtures used across the test suite:

- A fake HTTP session standing in for the execution engine, so engine
  and workspace tests never touch the network
- Canned engine responses for a short three-instruction script
"""

import json

import pytest
import requests


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, payload=None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if self._text is not None:
            return json.loads(self._text)
        return self._payload


class FakeSession:
    """
    Records posted requests and replays queued responses.

    Queue either a FakeResponse or an exception instance; exceptions are
    raised from post() as a real transport failure would be.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls: list[dict] = []
        self.closed = False

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


# Trace for "1 OP_DUP OP_ADD": pcs 0, 1, 2 then the end-of-program pc 3
SUCCESS_PAYLOAD = {
    "status": "success",
    "trace": [
        {"pc": 0, "stack": [], "altstack": []},
        {"pc": 1, "stack": ["01"], "altstack": []},
        {"pc": 2, "stack": ["01", "01"], "altstack": []},
        {"pc": 3, "stack": ["02"], "altstack": []},
    ],
}

ERROR_PAYLOAD = {
    "status": "error",
    "error": "OP_VERIFY failed",
    "trace": [
        {"pc": 0, "stack": [], "altstack": []},
        {"pc": 1, "stack": ["00"], "altstack": ["aa"]},
    ],
}


@pytest.fixture
def success_payload() -> dict:
    return json.loads(json.dumps(SUCCESS_PAYLOAD))


@pytest.fixture
def error_payload() -> dict:
    return json.loads(json.dumps(ERROR_PAYLOAD))


@pytest.fixture
def fake_session():
    """Factory fixture: fake_session(response, ...) -> FakeSession."""
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def connection_refused() -> Exception:
    return requests.ConnectionError("connection refused")
