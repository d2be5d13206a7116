import json

import pytest

from mistral_chat.config import Settings


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            return json.loads(self.text)
        return self._body


class FakeSession:
    """Records posts instead of touching the network."""

    def __init__(self, response=None):
        self.response = response or FakeResponse(200, {})
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.response


COMPLETION = {
    "id": "cmpl-42",
    "object": "chat.completion",
    "created": 1700000000,
    "model": "mistral-large-latest",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Bonjour!"},
            "finish_reason": "stop",
        }
    ],
    "usage": {"prompt_tokens": 9, "completion_tokens": 3, "total_tokens": 12},
}


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def completion():
    return json.loads(json.dumps(COMPLETION))
