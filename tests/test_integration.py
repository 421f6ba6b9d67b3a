"""
Integration tests for the full request pipeline.

Drives the HTTP app end to end with only the upstream network faked,
to verify routing, services, the client and score extraction together.
"""

import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api import create_app
from src.api.app import run_startup_probe
from src.config import Settings
from src.interview import GeminiClient


class TestFullPipeline:
    """Integration tests for the complete request pipeline."""

    def test_grade_answer_end_to_end(self, test_settings: Settings, reply_transport) -> None:
        feedback = "Score: 78/100\nFeedback: solid understanding"
        transport = reply_transport(feedback)

        with TestClient(create_app(test_settings, transport=transport)) as client:
            response = client.post(
                "/grade-answer",
                json={"domain": "backend", "question": "Explain REST", "userAnswer": "REST is..."},
            )

        assert response.status_code == 200
        assert response.json() == {"score": 78, "feedback": feedback}

        assert len(transport.requests) == 1
        prompt = transport.prompts()[0]
        assert "backend" in prompt
        assert '"Explain REST"' in prompt
        assert '"REST is..."' in prompt

    def test_grade_answer_default_score(self, test_settings: Settings, reply_transport) -> None:
        transport = reply_transport("Great answer, well explained")

        with TestClient(create_app(test_settings, transport=transport)) as client:
            response = client.post(
                "/grade-answer",
                json={"domain": "backend", "question": "Explain REST", "userAnswer": "REST is..."},
            )

        assert response.json() == {"score": 70, "feedback": "Great answer, well explained"}

    def test_generate_question_end_to_end(
        self, test_settings: Settings, reply_transport, sample_question: str
    ) -> None:
        transport = reply_transport(sample_question)

        with TestClient(create_app(test_settings, transport=transport)) as client:
            response = client.post("/generate-question", json={"domain": "distributed systems"})

        assert response.status_code == 200
        assert response.json() == {"question": sample_question}
        assert len(transport.requests) == 1
        assert "distributed systems domain" in transport.prompts()[0]

    def test_missing_domain_makes_no_upstream_call(
        self, test_settings: Settings, reply_transport
    ) -> None:
        transport = reply_transport("unused")

        with TestClient(create_app(test_settings, transport=transport)) as client:
            response = client.post("/generate-question", json={"domain": ""})

        assert response.status_code == 400
        assert transport.requests == []

    def test_upstream_401_during_grading(
        self, test_settings: Settings, make_transport, gemini_error
    ) -> None:
        transport = make_transport(401, gemini_error(401, "API key not valid. Please pass a valid API key."))

        with TestClient(create_app(test_settings, transport=transport)) as client:
            response = client.post(
                "/grade-answer",
                json={"domain": "backend", "question": "Explain REST", "userAnswer": "REST is..."},
            )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to grade answer"
        assert "API key not valid" in body["details"]

    def test_question_without_reply_text(self, test_settings: Settings, make_transport) -> None:
        transport = make_transport(200, {"candidates": []})

        with TestClient(create_app(test_settings, transport=transport)) as client:
            response = client.post("/generate-question", json={"domain": "backend"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to generate question",
            "details": "No question received from API",
        }

    def test_transport_failure(self, test_settings: Settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Name or service not known", request=request)

        app = create_app(test_settings, transport=httpx.MockTransport(handler))
        with TestClient(app) as client:
            response = client.post("/generate-question", json={"domain": "backend"})

        assert response.status_code == 500
        assert response.json()["details"] == "Name or service not known"


class TestStartupProbe:
    """Tests for the startup connectivity probe."""

    def test_failed_probe_is_not_fatal(
        self, test_settings: Settings, make_transport, gemini_error
    ) -> None:
        settings = test_settings.model_copy(update={"startup_probe": True})
        transport = make_transport(400, gemini_error(400, "API key not valid"))

        with TestClient(create_app(settings, transport=transport)) as client:
            response = client.get("/health")

        assert response.status_code == 200

    @pytest.mark.anyio
    async def test_probe_logs_success(
        self, test_settings: Settings, reply_transport, caplog: pytest.LogCaptureFixture
    ) -> None:
        transport = reply_transport("ok")

        with caplog.at_level(logging.INFO, logger="src.api.app"):
            async with GeminiClient(test_settings, transport=transport) as client:
                ok = await run_startup_probe(client)

        assert ok
        assert transport.prompts() == ["Test connection"]
        assert "Server is ready to handle requests" in caplog.text

    @pytest.mark.anyio
    async def test_probe_logs_failure(
        self, test_settings: Settings, make_transport, gemini_error, caplog: pytest.LogCaptureFixture
    ) -> None:
        transport = make_transport(401, gemini_error(401, "API key not valid"))

        with caplog.at_level(logging.INFO, logger="src.api.app"):
            async with GeminiClient(test_settings, transport=transport) as client:
                ok = await run_startup_probe(client)

        assert not ok
        assert "API key not valid" in caplog.text
        assert "check your API key" in caplog.text
