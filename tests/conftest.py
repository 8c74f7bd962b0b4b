from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from texttune.core.config import Settings
from texttune.main import create_app
from texttune.services.gemini import GeminiClient


def gemini_body(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class FakeGemini:
    """Records outbound calls and answers with a canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: Any = gemini_body("  Polished text.  ")
        self.exc: Exception | None = None

    def reply(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body

    def fail_with(self, exc: Exception) -> None:
        self.exc = exc

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=str(self.body))

    @property
    def last_payload(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    @property
    def last_prompt(self) -> str:
        return self.last_payload["contents"][0]["parts"][0]["text"]


@pytest.fixture
def settings(monkeypatch) -> Settings:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    return Settings(GEMINI_API_KEY="test-key", LOG_JSON=False, _env_file=None)


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def gemini_client(settings, fake_gemini) -> GeminiClient:
    return GeminiClient(settings, transport=httpx.MockTransport(fake_gemini))


@pytest.fixture
def app(settings, gemini_client):
    return create_app(settings, gemini_client=gemini_client)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
