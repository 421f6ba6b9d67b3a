"""
Pytest configuration and fixtures.

Provides common test fixtures for all test modules.
"""

import json
from typing import Any, Callable

import httpx
import pytest

from src.config import Settings


# ==============================================================================
# Async Backend
# ==============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


# ==============================================================================
# Settings Fixtures
# ==============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with mocked values."""
    return Settings(
        gemini_api_key="test-api-key-for-testing",
        gemini_base_url="https://test.api.local",
        gemini_api_version="v1",
        gemini_model="test-model",
        request_timeout=5.0,
        cors_origin="http://localhost:3000",
        startup_probe=False,
    )


# ==============================================================================
# Upstream Response Fixtures
# ==============================================================================


def _gemini_reply(text: str) -> dict[str, Any]:
    """Build a generateContent response body carrying one text part."""
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
            }
        ]
    }


def _gemini_error(status_code: int, message: str) -> dict[str, Any]:
    """Build a generateContent error body."""
    return {"error": {"code": status_code, "message": message, "status": "ERROR"}}


@pytest.fixture
def gemini_reply() -> Callable[[str], dict[str, Any]]:
    """Builder for successful upstream bodies."""
    return _gemini_reply


@pytest.fixture
def gemini_error() -> Callable[[int, str], dict[str, Any]]:
    """Builder for upstream error bodies."""
    return _gemini_error


@pytest.fixture
def sample_question() -> str:
    """Sample question text returned by the model."""
    return (
        "Design a rate limiter for a distributed REST API. How would you keep "
        "counters consistent across nodes, and what trade-offs does your design make?"
    )


@pytest.fixture
def sample_feedback() -> str:
    """Sample grading feedback returned by the model."""
    return "Score: 78/100\nFeedback: solid understanding"


# ==============================================================================
# Mock Transport Fixtures
# ==============================================================================


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def prompts(self) -> list[str]:
        """Prompt texts of all recorded requests."""
        return [
            json.loads(request.content)["contents"][0]["parts"][0]["text"]
            for request in self.requests
        ]


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for transports answering every request the same way."""

    def factory(
        status_code: int = 200,
        json_body: Any = None,
        content: bytes | None = None,
    ) -> RecordingTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json_body)

        return RecordingTransport(handler)

    return factory


@pytest.fixture
def reply_transport(make_transport) -> Callable[[str], RecordingTransport]:
    """Factory for transports replying with the given text."""

    def factory(text: str) -> RecordingTransport:
        return make_transport(200, _gemini_reply(text))

    return factory
