"""
app.py

PURPOSE: HTTP API for the story service.
DEPENDENCIES: fastapi

ARCHITECTURE NOTES:
Thin layer over StoryOrchestrator:
- POST /start/{session_id}     begin (or restart) a story
- POST /prompt/{session_id}    send the player's choice as a plain-text body
- DELETE /session/{session_id} forget a session
- GET /health                  liveness probe

Story errors are mapped to status codes by one exception handler; no
error is turned into a default reply. Session ids are opaque and only
checked for being non-blank.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ai_adventure import __version__
from ai_adventure.config import Settings, get_settings
from ai_adventure.models.reply import StoryReply
from ai_adventure.observability import shutdown_telemetry
from ai_adventure.story.errors import (
    InvalidRequestError,
    MalformedReplyError,
    StoryError,
    UpstreamUnavailableError,
)
from ai_adventure.story.factory import create_orchestrator
from ai_adventure.story.orchestrator import StoryOrchestrator

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[StoryError], int] = {
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
    UpstreamUnavailableError: status.HTTP_502_BAD_GATEWAY,
    MalformedReplyError: status.HTTP_502_BAD_GATEWAY,
}


def get_orchestrator(request: Request) -> StoryOrchestrator:
    """Dependency returning the orchestrator attached to the app."""
    return request.app.state.orchestrator


async def handle_story_error(request: Request, exc: StoryError) -> JSONResponse:
    """Turn a StoryError into a JSON error response."""
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.kind}: {exc}")
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.kind, "detail": str(exc)},
    )


async def read_prompt(request: Request) -> str:
    """Read the plain-text request body as the player's prompt."""
    raw = await request.body()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidRequestError("Prompt must be UTF-8 text") from e


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    shutdown_telemetry()


def create_app(
    settings: Settings | None = None,
    orchestrator: StoryOrchestrator | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings; loaded from the environment when omitted.
        orchestrator: Story orchestrator; built from settings when omitted.

    Returns:
        The configured application.
    """
    settings = settings or get_settings()
    if orchestrator is None:
        orchestrator = create_orchestrator(settings)

    app = FastAPI(title="AI Adventure", version=__version__, lifespan=lifespan)
    app.state.orchestrator = orchestrator
    app.add_exception_handler(StoryError, handle_story_error)  # type: ignore[arg-type]

    # CORS: allow a local frontend during development
    if settings.server.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.post("/start/{session_id}", response_model=StoryReply)
    async def start(
        session_id: str,
        story: StoryOrchestrator = Depends(get_orchestrator),
    ) -> StoryReply:
        logger.info(f"POST /start session={session_id}")
        return await story.start(session_id)

    @app.post("/prompt/{session_id}", response_model=StoryReply)
    async def prompt(
        session_id: str,
        prompt_text: str = Depends(read_prompt),
        story: StoryOrchestrator = Depends(get_orchestrator),
    ) -> StoryReply:
        logger.info(f"POST /prompt session={session_id} prompt_len={len(prompt_text)}")
        return await story.continue_story(session_id, prompt_text)

    @app.delete("/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
    def end_session(
        session_id: str,
        story: StoryOrchestrator = Depends(get_orchestrator),
    ) -> Response:
        story.end(session_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
