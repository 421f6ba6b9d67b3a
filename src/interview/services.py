"""
Question and grading services.

Each operation validates its input, builds one prompt, makes exactly one
upstream call and shapes the reply. Input errors are raised before any
network traffic happens.
"""

import logging

from src.interview.llm_client import GeminiClient, LLMError
from src.interview.prompt_builder import PromptBuilder
from src.interview.scorer import score_feedback
from src.models import ErrorKind, GradeResult, QuestionResult

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a required request field is missing or empty."""

    kind = ErrorKind.INVALID_INPUT


class UpstreamEmptyError(Exception):
    """Raised when the upstream API answers without usable text."""

    kind = ErrorKind.UPSTREAM_EMPTY


def _is_missing(value: str | None) -> bool:
    return value is None or value == ""


class QuestionService:
    """Generates interview questions for a domain."""

    def __init__(self, client: GeminiClient):
        self._client = client

    async def generate_question(self, domain: str | None) -> QuestionResult:
        """
        Ask the upstream model for an interview question.

        Args:
            domain: Subject area of the question.

        Returns:
            The question, verbatim.

        Raises:
            InvalidInputError: If domain is missing or empty.
            UpstreamEmptyError: If the reply carries no question text.
            LLMError: If the upstream call fails.
        """
        if _is_missing(domain):
            raise InvalidInputError("Domain is required")

        prompt = PromptBuilder.build_question_prompt(domain)

        try:
            text = await self._client.complete(prompt)
        except LLMError as e:
            if e.kind is ErrorKind.EMPTY_UPSTREAM_REPLY:
                raise UpstreamEmptyError("No question received from API") from e
            raise

        if not text:
            raise UpstreamEmptyError("No question received from API")

        logger.debug("Generated question for domain %r (%d chars)", domain, len(text))
        return QuestionResult(question=text)


class GradingService:
    """Grades candidate answers and extracts a score from the feedback."""

    def __init__(self, client: GeminiClient):
        self._client = client

    async def grade_answer(
        self,
        domain: str | None,
        question: str | None,
        user_answer: str | None,
    ) -> GradeResult:
        """
        Ask the upstream model to evaluate an answer.

        A reply without a recognizable score still succeeds; the score
        falls back to the default.

        Args:
            domain: Subject area of the question.
            question: The interview question.
            user_answer: The candidate's answer.

        Returns:
            GradeResult with the extracted score and the verbatim feedback.

        Raises:
            InvalidInputError: If any field is missing or empty.
            LLMError: If the upstream call fails.
        """
        if _is_missing(domain) or _is_missing(question) or _is_missing(user_answer):
            raise InvalidInputError("Missing required fields")

        prompt = PromptBuilder.build_grading_prompt(domain, question, user_answer)
        feedback = await self._client.complete(prompt)
        score = score_feedback(feedback)

        logger.debug("Graded answer for domain %r: score=%d", domain, score)
        return GradeResult(score=score, feedback=feedback)
