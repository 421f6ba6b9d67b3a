"""
Pydantic models for the Interview Proxy.

These models define the request and response schemas for:
- Question generation and answer grading requests
- Results returned to the front-end client
- Connectivity probe outcomes

Nothing here is persisted; every object lives for a single request.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    """Classification of failures surfaced by the services."""

    INVALID_INPUT = "InvalidInput"  # Client-caused, maps to HTTP 400
    UPSTREAM_EMPTY = "UpstreamEmpty"  # Upstream answered without usable text
    EMPTY_UPSTREAM_REPLY = "EmptyUpstreamReply"  # Reply text path missing
    UPSTREAM_FAILURE = "UpstreamFailure"  # Transport, non-2xx or malformed body


# ==============================================================================
# Request Models
# ==============================================================================


class GenerationRequest(BaseModel):
    """
    Body of a question generation request.

    The field is optional at the schema level so that a missing domain
    is reported with the route's own error message.
    """

    model_config = ConfigDict(extra="ignore")

    domain: str | None = Field(
        default=None,
        description="Subject area the question should cover (e.g. 'backend')",
    )


class GradingRequest(BaseModel):
    """Body of an answer grading request."""

    model_config = ConfigDict(extra="ignore")

    domain: str | None = Field(default=None, description="Subject area of the question")
    question: str | None = Field(default=None, description="The interview question")
    user_answer: str | None = Field(
        default=None,
        alias="userAnswer",
        description="The candidate's answer",
    )


# ==============================================================================
# Result Models
# ==============================================================================


class QuestionResult(BaseModel):
    """A generated interview question."""

    model_config = ConfigDict(frozen=True)

    question: str = Field(..., description="Question text exactly as returned upstream")


class GradeResult(BaseModel):
    """
    Outcome of grading a candidate's answer.

    The score is derived from the feedback text and is always present;
    it falls back to a default when no score can be read from the text.
    It is not clamped to 0-100.
    """

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., description="Score extracted from the feedback")
    feedback: str = Field(..., description="Feedback text exactly as returned upstream")


class ErrorResponse(BaseModel):
    """Error body returned by the API."""

    error: str
    details: str | None = None


class ProbeResult(BaseModel):
    """Outcome of a connectivity probe against the upstream API."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    status_code: int | None = None
    message: str | None = None
