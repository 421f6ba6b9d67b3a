"""
Interview Proxy CLI Application.

Provides a command-line interface for running the HTTP server and for
one-off question generation and grading from the terminal.
"""

import asyncio
from typing import Annotated, Optional

import typer
import uvicorn
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from src.config import Settings, get_settings
from src.interview import (
    GeminiClient,
    GradingService,
    InvalidInputError,
    LLMError,
    QuestionService,
    UpstreamEmptyError,
)
from src.logging_config import configure_logging
from src.models import GradeResult, QuestionResult

# Create Typer app
app = typer.Typer(
    name="interview-proxy",
    help="Interview question generation and answer grading over Gemini",
    add_completion=False,
)

console = Console()


def _load_settings() -> Settings:
    """Load settings or exit with a readable message."""
    try:
        return get_settings()
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]).upper() for err in e.errors())
        console.print(f"[red]Configuration Error:[/red] invalid or missing settings: {fields}")
        console.print("[dim]Set GEMINI_API_KEY in the environment or in a .env file.[/dim]")
        raise typer.Exit(1)


@app.command()
def serve(
    host: Annotated[
        Optional[str],
        typer.Option("--host", help="Interface to bind (defaults to HOST)"),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("--port", "-p", help="Port to listen on (defaults to PORT)"),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option("--reload", help="Restart the server when code changes"),
    ] = False,
) -> None:
    """
    Run the HTTP server.

    Exits immediately if the API key is not configured.
    """
    settings = _load_settings()
    configure_logging(settings.log_level)

    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_config=None,
    )


@app.command()
def health() -> None:
    """
    Check that the Gemini API accepts the configured key.

    Prints the configuration (without the key) and sends one probe request.
    """
    settings = _load_settings()
    console.print("[bold]Interview Proxy Health Check[/bold]\n")

    console.print("[dim]Checking configuration...[/dim]")
    console.print(f"  API Base URL: {settings.gemini_base_url}")
    console.print(f"  API Version: {settings.gemini_api_version}")
    console.print(f"  Model: {settings.gemini_model}")
    console.print(f"  Timeout: {settings.request_timeout or 'none'}")
    console.print(f"  CORS Origin: {settings.cors_origin}")

    console.print("\n[dim]Checking API connectivity...[/dim]")
    result = asyncio.run(_probe(settings))

    if result.ok:
        console.print(f"[green]✓ API is reachable[/green] (status {result.status_code})")
        console.print("\n[green]All systems operational[/green]")
    else:
        console.print(f"[red]✗ API test failed:[/red] {result.message}")
        raise typer.Exit(1)


@app.command()
def question(
    domain: Annotated[str, typer.Argument(help="Domain to ask about, e.g. 'backend'")],
) -> None:
    """Generate one interview question and print it."""
    settings = _load_settings()

    try:
        with console.status("Generating question..."):
            result = asyncio.run(_generate_question(settings, domain))
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except (LLMError, UpstreamEmptyError) as e:
        console.print(f"[red]Failed to generate question:[/red] {e}")
        raise typer.Exit(1)

    console.print(Panel(result.question, title=f"{domain} question"))


@app.command()
def grade(
    domain: Annotated[str, typer.Argument(help="Domain of the question")],
    question_text: Annotated[str, typer.Argument(metavar="QUESTION", help="The interview question")],
    answer: Annotated[str, typer.Argument(help="The candidate's answer")],
) -> None:
    """Grade an answer and print the score and feedback."""
    settings = _load_settings()

    try:
        with console.status("Grading answer..."):
            result = asyncio.run(_grade_answer(settings, domain, question_text, answer))
    except InvalidInputError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    except LLMError as e:
        console.print(f"[red]Failed to grade answer:[/red] {e}")
        raise typer.Exit(1)

    _display_grade(result)


async def _probe(settings: Settings):
    async with GeminiClient(settings) as client:
        return await client.probe()


async def _generate_question(settings: Settings, domain: str) -> QuestionResult:
    async with GeminiClient(settings) as client:
        return await QuestionService(client).generate_question(domain)


async def _grade_answer(settings: Settings, domain: str, question_text: str, answer: str) -> GradeResult:
    async with GeminiClient(settings) as client:
        return await GradingService(client).grade_answer(domain, question_text, answer)


def _display_grade(result: GradeResult) -> None:
    """Display a grade with a colour matching the score band."""
    score_color = "green" if result.score >= 70 else "yellow" if result.score >= 50 else "red"
    console.print(
        Panel(f"[{score_color}][bold]{result.score} / 100[/bold][/{score_color}]", title="Score")
    )
    console.print(Panel(result.feedback, title="Feedback"))


if __name__ == "__main__":
    app()
