"""
FastAPI application factory.

Wires configuration, CORS, the upstream client and the services together,
and schedules the startup connectivity probe.
"""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src import __version__
from src.api.routes import REQUIRED_FIELDS_MESSAGES, error_response, router
from src.config import Settings, get_settings
from src.interview import GeminiClient, GradingService, QuestionService
from src.logging_config import configure_logging

logger = logging.getLogger(__name__)


async def run_startup_probe(client: GeminiClient) -> bool:
    """Probe the upstream API once and log the outcome."""
    logger.info("Testing Gemini API connection...")
    result = await client.probe()

    if result.ok:
        logger.info("API test successful (status %s)", result.status_code)
        logger.info("Server is ready to handle requests")
    else:
        logger.error("API test failed (status=%s): %s", result.status_code, result.message)
        logger.warning("Server started but API connection test failed - check your API key")
    return result.ok


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the startup probe in the background and release the client on shutdown."""
    settings: Settings = app.state.settings
    client: GeminiClient = app.state.gemini_client

    logger.info("Server starting on port %d...", settings.port)

    probe_task: asyncio.Task | None = None
    if settings.startup_probe:
        probe_task = asyncio.create_task(run_startup_probe(client))

    try:
        yield
    finally:
        if probe_task is not None and not probe_task.done():
            probe_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await probe_task
        await client.aclose()


async def _validation_error_handler(request: Request, exc: RequestValidationError):
    """Answer unreadable bodies on the POST routes with the route's 400 message."""
    message = REQUIRED_FIELDS_MESSAGES.get(request.url.path)
    if message is None:
        return await request_validation_exception_handler(request, exc)
    return error_response(400, message)


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration. Loaded from the environment if not provided.
        transport: Optional httpx transport for the upstream client.

    Returns:
        The configured FastAPI app.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Interview Proxy",
        description="Generates interview questions and grades answers using Gemini",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_methods=["GET", "POST"],
        allow_credentials=True,
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    client = GeminiClient(settings, transport=transport)
    app.state.settings = settings
    app.state.gemini_client = client
    app.state.question_service = QuestionService(client)
    app.state.grading_service = GradingService(client)

    app.include_router(router)
    return app
