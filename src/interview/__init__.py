"""
Interview Module.

Upstream client, prompts, score extraction and the two services built on them.
"""

from src.interview.llm_client import GeminiClient, LLMError
from src.interview.prompt_builder import PromptBuilder
from src.interview.scorer import DEFAULT_SCORE, extract_score, score_feedback
from src.interview.services import (
    GradingService,
    InvalidInputError,
    QuestionService,
    UpstreamEmptyError,
)

__all__ = [
    "DEFAULT_SCORE",
    "GeminiClient",
    "GradingService",
    "InvalidInputError",
    "LLMError",
    "PromptBuilder",
    "QuestionService",
    "UpstreamEmptyError",
    "extract_score",
    "score_feedback",
]
