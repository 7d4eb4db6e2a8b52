"""Drive submissions relayed to the n8n workflow webhook.

A submission carries a finished (or hand-written) chord sheet plus the song
and artist it belongs to.  Manual submissions are run through the OnSong
pipeline first so the workflow always receives Nashville-annotated text.
"""

import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .analysis import analyze
from .config import WEBHOOK_TIMEOUT
from .exceptions import MalformedInputError, WebhookError
from .pipeline import Analyzer, format_manual_submission

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("content", "song", "artist", "id")
MISSING_FIELDS_MESSAGE = "Missing required fields: content, song, artist, id"

CONNECT_FAILED_MESSAGE = "Failed to connect to Google Drive service"
NOT_FOUND_MESSAGE = (
    "n8n webhook not found. Please check if the workflow is active "
    "and the webhook URL is correct."
)
SEND_FAILED_MESSAGE = "Failed to send to Google Drive"


class DriveSubmission(BaseModel):
    """Drive submission request"""

    model_config = ConfigDict(populate_by_name=True)

    content: str = ""
    song: str = ""
    artist: str = ""
    id: str = ""
    is_manual_submission: bool = Field(default=False, alias="isManualSubmission")
    requires_automation: bool = Field(default=False, alias="requiresAutomation")

    def check_required(self) -> None:
        """Raise MalformedInputError if any required field is empty."""
        if any(not getattr(self, name) for name in REQUIRED_FIELDS):
            raise MalformedInputError(MISSING_FIELDS_MESSAGE)


def prepare_submission(submission: DriveSubmission, analyzer: Analyzer = analyze) -> DriveSubmission:
    """Validate *submission* and annotate manual content in place."""
    submission.check_required()
    if submission.is_manual_submission:
        logger.info(
            "Manual submission detected - requires automation: %s",
            submission.requires_automation,
        )
        submission.content = format_manual_submission(
            submission.song, submission.artist, submission.content, analyzer=analyzer
        )
    return submission


def forward_submission(
    webhook_url: str,
    submission: DriveSubmission,
    timeout: float = WEBHOOK_TIMEOUT,
) -> httpx.Response:
    """POST *submission* as JSON to *webhook_url* and return the response.

    Raises WebhookError on transport failure or any status >= 400; a 404 is
    reported as a misconfigured webhook.
    """
    if not webhook_url:
        raise WebhookError(500, "Webhook URL is not configured")

    logger.info("Forwarding request to n8n webhook: %s", webhook_url)
    try:
        resp = httpx.post(
            webhook_url,
            json=submission.model_dump(by_alias=True),
            timeout=timeout,
        )
    except httpx.RequestError as exc:
        raise WebhookError(500, CONNECT_FAILED_MESSAGE) from exc

    logger.info("n8n webhook response: %d", resp.status_code)
    if resp.status_code == 404:
        raise WebhookError(404, NOT_FOUND_MESSAGE, resp.content)
    if resp.status_code >= 400:
        raise WebhookError(resp.status_code, SEND_FAILED_MESSAGE, resp.content)
    return resp
