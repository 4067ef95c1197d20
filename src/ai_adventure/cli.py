"""
cli.py

PURPOSE: Command-line interface for the story service.
DEPENDENCIES: typer, rich, uvicorn

ARCHITECTURE NOTES:
The CLI provides commands for:
- serve: Run the HTTP API
- play: Play a story in the terminal against the same orchestrator
- config: Show the effective configuration
"""

import asyncio
import logging
import uuid
from collections.abc import Awaitable
from typing import Annotated

import typer
import uvicorn
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from ai_adventure import __version__
from ai_adventure.config import Settings, get_settings
from ai_adventure.models.reply import StoryReply
from ai_adventure.observability import init_telemetry, shutdown_telemetry
from ai_adventure.story.errors import StoryError
from ai_adventure.story.factory import create_orchestrator
from ai_adventure.story.orchestrator import StoryOrchestrator
from ai_adventure.ui import plain

app = typer.Typer(
    name="ai-adventure",
    help="Play LLM-narrated choose-your-own-adventure stories.",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"ai-adventure version {__version__}")
        raise typer.Exit()


def configure_logging(settings: Settings) -> None:
    """Route log records through Rich at the configured level."""
    level = "DEBUG" if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def require_api_key(settings: Settings) -> None:
    """Exit with an error if the generator credential is missing."""
    if not settings.llm.anthropic_api_key:
        plain.print_error("ANTHROPIC_API_KEY environment variable not set.")
        plain.print_error("Please set it to talk to the story generator.")
        raise typer.Exit(1)


def pick_choice(user_input: str, choices: list[str]) -> str:
    """
    Translate player input into the prompt to send.

    A number selects one of the offered choices; anything else is sent as
    the player's own words.
    """
    text = user_input.strip()
    if text.isdigit():
        index = int(text) - 1
        if 0 <= index < len(choices):
            return choices[index]
    return text


@app.callback()
def main(
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """AI Adventure - choose-your-own-adventure stories told by an LLM."""
    pass


@app.command()
def serve(
    host: Annotated[
        str | None,
        typer.Option(
            "--host",
            help="Bind address (default from settings)",
        ),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option(
            "--port",
            "-p",
            help="Bind port (default from settings)",
        ),
    ] = None,
) -> None:
    """Run the story HTTP API."""
    settings = get_settings()
    configure_logging(settings)
    init_telemetry(settings.otel)
    require_api_key(settings)

    uvicorn.run(
        "ai_adventure.server.app:create_app",
        factory=True,
        host=host or settings.server.host,
        port=port or settings.server.port,
        log_level=settings.log_level.lower(),
    )


@app.command()
def play(
    max_exchanges: Annotated[
        int | None,
        typer.Option(
            "--max-exchanges",
            help="End the story locally after this many choices",
            min=1,
        ),
    ] = None,
) -> None:
    """Play a story interactively in the terminal."""
    settings = get_settings()
    configure_logging(settings)
    init_telemetry(settings.otel)
    require_api_key(settings)

    if max_exchanges is not None:
        settings.story.max_exchanges = max_exchanges

    story = create_orchestrator(settings)
    try:
        asyncio.run(_play(story))
    finally:
        shutdown_telemetry()


async def _play(story: StoryOrchestrator) -> None:
    """Main story loop."""
    session_id = uuid.uuid4().hex
    plain.print_title("AI Adventure")
    console.print()

    reply = await _with_spinner(story.start(session_id), "Setting the scene...")
    if reply is None:
        raise typer.Exit(1)

    while True:
        plain.print_story(reply.story_text)
        console.print()

        if reply.is_ending:
            plain.print_ending()
            if not typer.confirm("Play again?", default=False):
                break
            next_reply = await _with_spinner(story.start(session_id), "Setting the scene...")
        else:
            plain.print_choices(reply.choices)
            console.print()
            try:
                user_input = plain.print_prompt()
            except (EOFError, KeyboardInterrupt):
                console.print()
                break
            if not user_input.strip():
                continue
            prompt_text = pick_choice(user_input, reply.choices)
            next_reply = await _with_spinner(
                story.continue_story(session_id, prompt_text), "The story unfolds..."
            )

        console.print()
        # On failure keep showing the last passage so the player can retry
        if next_reply is not None:
            reply = next_reply

    story.end(session_id)
    plain.print_message("Thanks for playing!")


async def _with_spinner(call: Awaitable[StoryReply], description: str) -> StoryReply | None:
    """Await a story call behind a spinner, reporting story errors."""
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(description, total=None)
            return await call
    except StoryError as e:
        plain.print_error(f"The narrator stumbled: {e}")
        return None


@app.command("config")
def config_cmd(
    show: Annotated[
        bool,
        typer.Option(
            "--show",
            "-s",
            help="Show current configuration",
        ),
    ] = True,
) -> None:
    """Show configuration."""
    if show:
        settings = get_settings()
        console.print("[bold]Current Configuration:[/bold]")
        console.print(f"  Log level: {settings.log_level}")
        console.print(f"  Debug: {settings.debug}")
        console.print()
        console.print("[bold]LLM Settings:[/bold]")
        console.print(f"  Provider: {settings.llm.provider}")
        console.print(f"  Model: {settings.llm.model}")
        console.print(f"  Temperature: {settings.llm.temperature}")
        console.print(f"  Timeout: {settings.llm.timeout_seconds}s")
        api_key_status = "set" if settings.llm.anthropic_api_key else "not set"
        console.print(f"  API Key: {api_key_status}")
        console.print()
        console.print("[bold]Story Settings:[/bold]")
        console.print(f"  Story length: {settings.story.story_length} choices")
        cap = settings.story.max_exchanges or "(narrator decides)"
        console.print(f"  Local cap: {cap}")
        console.print()
        console.print("[bold]Session Settings:[/bold]")
        console.print(f"  Max sessions: {settings.session.max_sessions or '(unbounded)'}")
        console.print(f"  Idle TTL: {settings.session.ttl_seconds or '(none)'}")
        console.print()
        console.print("[bold]Server Settings:[/bold]")
        console.print(f"  Bind: {settings.server.host}:{settings.server.port}")
        console.print(f"  Environment: {settings.server.app_env}")
        console.print()
        console.print("[bold]OpenTelemetry Settings:[/bold]")
        console.print(f"  Enabled: {settings.otel.enabled}")
        console.print(f"  Service name: {settings.otel.service_name}")
        endpoint_status = settings.otel.endpoint if settings.otel.endpoint else "(console only)"
        console.print(f"  Endpoint: {endpoint_status}")


if __name__ == "__main__":
    app()
