"""
LLM Client for the Gemini generative-language API.

Wraps a single generateContent call: builds the request body, sends it with
the API key as a query credential and pulls the reply text out of the
first candidate. There is deliberately no retry loop; every call is one
HTTP request.
"""

import logging
from typing import Any

import httpx

from src.config import Settings
from src.interview.prompt_builder import PromptBuilder
from src.models import ErrorKind, ProbeResult

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Raised when an upstream API call fails or returns no reply text."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UPSTREAM_FAILURE,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.kind = kind
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)


class GeminiClient:
    """
    Client for the Gemini generateContent endpoint.

    Holds a pooled async HTTP client for its lifetime; close it with
    aclose() or use the client as an async context manager.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None):
        """
        Initialize the client.

        Args:
            settings: Configuration carrying the API key, endpoint and timeout.
            transport: Optional httpx transport, used to fake the upstream in tests.
        """
        self._settings = settings
        self._url = settings.generate_content_url
        self._http = httpx.AsyncClient(timeout=settings.request_timeout, transport=transport)

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._http.aclose()

    @staticmethod
    def build_payload(prompt: str) -> dict[str, Any]:
        """Nest a prompt in the content/parts shape the API expects."""
        return {"contents": [{"parts": [{"text": prompt}]}]}

    async def complete(self, prompt: str) -> str:
        """
        Send a prompt and return the reply text.

        Args:
            prompt: The prompt text.

        Returns:
            Text of the first part of the first candidate.

        Raises:
            LLMError: On transport errors, non-2xx responses, undecodable
                bodies, or when the reply text is missing.
        """
        response = await self._post(prompt)

        try:
            data = response.json()
        except ValueError as e:
            raise LLMError(
                "Invalid JSON in upstream response",
                status_code=response.status_code,
                cause=e,
            ) from e

        text = self._extract_text(data)
        if text is None:
            raise LLMError(
                "Upstream response contained no reply text",
                kind=ErrorKind.EMPTY_UPSTREAM_REPLY,
                status_code=response.status_code,
            )
        return text

    async def probe(self) -> ProbeResult:
        """
        Check that the API accepts our credentials.

        Never raises; failures are reported in the returned ProbeResult.
        """
        try:
            response = await self._post(PromptBuilder.PROBE_PROMPT)
        except LLMError as e:
            return ProbeResult(ok=False, status_code=e.status_code, message=str(e))
        return ProbeResult(ok=True, status_code=response.status_code)

    async def _post(self, prompt: str) -> httpx.Response:
        """
        Issue the generateContent request.

        Raises:
            LLMError: On transport errors and non-2xx responses.
        """
        try:
            response = await self._http.post(
                self._url,
                params={"key": self._settings.gemini_api_key},
                json=self.build_payload(prompt),
            )
        except httpx.HTTPError as e:
            raise LLMError(str(e) or e.__class__.__name__, cause=e) from e

        if response.is_success:
            return response

        message = self._extract_error_message(response)
        raise LLMError(
            message or f"Request failed with status code {response.status_code}",
            status_code=response.status_code,
        )

    @staticmethod
    def _extract_text(data: Any) -> str | None:
        """Read candidates[0].content.parts[0].text, or None if any level is missing."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return None
        return text if isinstance(text, str) else None

    @staticmethod
    def _extract_error_message(response: httpx.Response) -> str | None:
        """Read error.message from an error body, if there is one."""
        try:
            data = response.json()
        except ValueError:
            return None

        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            message = data["error"].get("message")
            if isinstance(message, str) and message:
                return message
        return None
