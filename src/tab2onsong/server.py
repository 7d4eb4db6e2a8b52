"""
FastAPI application - OnSong conversion and Drive submission proxy
"""

import json
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from .adapters.ultimate_guitar import UltimateGuitarAdapter
from .adapters.worshipchords import WorshipChordsAdapter
from .config import Settings
from .exceptions import (
    FetchError,
    InvalidSourceError,
    MalformedInputError,
    NoChordContentError,
    WebhookError,
)
from .forwarding import DriveSubmission, forward_submission, prepare_submission
from .pipeline import to_onsong

logger = logging.getLogger(__name__)


class OnSongRequest(BaseModel):
    """Ultimate Guitar conversion request (tab id or page URL)"""

    id: int | str | None = None


class WorshipChordsRequest(BaseModel):
    """worshipchords.com conversion request"""

    url: str | None = None


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="tab2onsong",
        description="Chord sheet to OnSong converter and Drive submission proxy",
    )
    app.state.settings = settings

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return PlainTextResponse("Invalid JSON request", status_code=400)

    @app.exception_handler(MalformedInputError)
    async def malformed_input(request: Request, exc: MalformedInputError):
        return PlainTextResponse(exc.reason, status_code=400)

    @app.exception_handler(InvalidSourceError)
    async def invalid_source(request: Request, exc: InvalidSourceError):
        return PlainTextResponse(str(exc), status_code=400)

    @app.exception_handler(NoChordContentError)
    async def no_chord_content(request: Request, exc: NoChordContentError):
        return PlainTextResponse(str(exc), status_code=422)

    @app.exception_handler(FetchError)
    async def fetch_failed(request: Request, exc: FetchError):
        logger.warning("Upstream fetch failed: %s", exc)
        status = exc.status_code if exc.status_code >= 400 else 502
        return PlainTextResponse(str(exc), status_code=status)

    @app.exception_handler(WebhookError)
    async def webhook_failed(request: Request, exc: WebhookError):
        logger.error("Error forwarding to webhook: %s", exc)
        return _webhook_error_response(exc)

    @app.get("/health")
    def health():
        return PlainTextResponse("OK")

    @app.post("/onsong")
    def onsong(request: OnSongRequest):
        """Convert an Ultimate Guitar tab to OnSong text."""
        if request.id is None or request.id == "":
            raise MalformedInputError("Missing required parameter: id")
        adapter = UltimateGuitarAdapter()
        adapter.timeout = app.state.settings.fetch_timeout
        sheet = adapter.scrape(adapter.url_for(request.id))
        return PlainTextResponse(to_onsong(sheet))

    @app.post("/worshipchords")
    def worshipchords(request: WorshipChordsRequest):
        """Convert a worshipchords.com page to OnSong text."""
        if not request.url:
            raise MalformedInputError("Missing required parameter: url")
        adapter = WorshipChordsAdapter()
        adapter.timeout = app.state.settings.fetch_timeout
        sheet = adapter.scrape(request.url)
        return PlainTextResponse(to_onsong(sheet))

    @app.post("/send-to-drive")
    def drive(submission: DriveSubmission):
        """
        Relay a chord sheet to the Drive workflow webhook

        Flow:
        1. Reject submissions missing content, song, artist or id
        2. Annotate manual submissions with Nashville numbers
        3. Forward to the webhook and relay its answer
        """
        prepare_submission(submission)
        resp = forward_submission(
            app.state.settings.webhook_url,
            submission,
            timeout=app.state.settings.webhook_timeout,
        )
        return Response(
            content=resp.content,
            status_code=resp.status_code,
            media_type="application/json",
        )

    return app


def _webhook_error_response(exc: WebhookError) -> Response:
    """Mirror the webhook status, merging the message into a JSON body if possible."""
    try:
        payload = json.loads(exc.body) if exc.body else None
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        payload["error"] = exc.message
        return JSONResponse(payload, status_code=exc.status_code)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


app = create_app()
