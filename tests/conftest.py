"""Shared fixtures: settings, a fake `requests.post`, and an HTTP test client."""

from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from bfhl.config import AIProvider, Settings

TEST_EMAIL = "tester@chitkara.edu.in"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, raw: str = ""):
        self.status_code = status_code
        self._body = body
        self._raw = raw

    def json(self) -> Any:
        if self._body is None:
            raise ValueError(f"Expecting value: {self._raw!r}")
        return self._body


class FakePost:
    """Stands in for `requests.post`; records calls and replays one outcome."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.response = FakeResponse(200, {})
        self.error = None

    def __call__(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        official_email=TEST_EMAIL,
        max_array_len=10,
        max_abs_value=1000,
        max_fib_n=100,
        max_ai_question_len=50,
        ai_provider=AIProvider.GEMINI,
        gemini_api_key="gemini-test-key",
        openai_api_key="openai-test-key",
        ai_timeout_seconds=3,
    )


@pytest.fixture
def fake_post(monkeypatch) -> FakePost:
    fake = FakePost()
    monkeypatch.setattr("bfhl.ai_gateway.requests.post", fake)
    return fake


@pytest.fixture
def client(settings, fake_post):
    from main import create_app

    with TestClient(create_app(settings)) as test_client:
        yield test_client
