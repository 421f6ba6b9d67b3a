"""
HTTP routes for question generation and answer grading.

Each handler delegates to its service and translates the outcome:
input errors become 400 responses, upstream failures become 500 responses
with the upstream message in "details".
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.interview import (
    GradingService,
    InvalidInputError,
    LLMError,
    QuestionService,
    UpstreamEmptyError,
)
from src.models import ErrorResponse, GenerationRequest, GradeResult, GradingRequest, QuestionResult

logger = logging.getLogger(__name__)

router = APIRouter()

QUESTION_PATHS = ("/generate-question", "/api/get-question")
GRADE_PATHS = ("/grade-answer", "/api/grade-answer")

# 400 message for each route when its body cannot be read at all
REQUIRED_FIELDS_MESSAGES = {
    **{path: "Domain is required" for path in QUESTION_PATHS},
    **{path: "Missing required fields" for path in GRADE_PATHS},
}

_ERROR_RESPONSES = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


def get_question_service(request: Request) -> QuestionService:
    return request.app.state.question_service


def get_grading_service(request: Request) -> GradingService:
    return request.app.state.grading_service


def error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    """Build a JSON error response, omitting details when there are none."""
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.get("/health")
async def health(request: Request) -> dict[str, str]:
    """Liveness check; does not call the upstream API."""
    return {"status": "ok", "model": request.app.state.settings.gemini_model}


@router.post(QUESTION_PATHS[0], response_model=QuestionResult, responses=_ERROR_RESPONSES)
@router.post(QUESTION_PATHS[1], response_model=QuestionResult, include_in_schema=False)
async def generate_question(
    payload: GenerationRequest,
    service: QuestionService = Depends(get_question_service),
):
    """Generate an interview question for a domain."""
    try:
        return await service.generate_question(payload.domain)
    except InvalidInputError as e:
        return error_response(400, str(e))
    except (LLMError, UpstreamEmptyError) as e:
        logger.error(
            "Question generation failed (status=%s): %s",
            getattr(e, "status_code", None),
            e,
        )
        return error_response(500, "Failed to generate question", str(e))


@router.post(GRADE_PATHS[0], response_model=GradeResult, responses=_ERROR_RESPONSES)
@router.post(GRADE_PATHS[1], response_model=GradeResult, include_in_schema=False)
async def grade_answer(
    payload: GradingRequest,
    service: GradingService = Depends(get_grading_service),
):
    """Grade a candidate's answer and return score and feedback."""
    try:
        return await service.grade_answer(payload.domain, payload.question, payload.user_answer)
    except InvalidInputError as e:
        return error_response(400, str(e))
    except LLMError as e:
        logger.error("Grading failed (status=%s): %s", e.status_code, e)
        return error_response(500, "Failed to grade answer", str(e))
