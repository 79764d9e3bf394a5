# src/moodtunes/client/api.py
import logging

import requests
from pydantic import ValidationError

from ..app.schemas import PlaylistResult
from ..curator.config import API_BASE

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate-playlist"
REQUEST_TIMEOUT = 60


class PlaylistRequestError(Exception):
    """A failed playlist request, with a message fit for the user."""

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return f"Request failed with status {response.status_code}."


def submit_mood(text: str, api_base: str = None, timeout: float = REQUEST_TIMEOUT) -> PlaylistResult:
    """
    Sends the mood text to the playlist service and returns its result.

    Any network failure, non-2xx status or malformed body raises
    PlaylistRequestError. For error statuses the service's 'error' field is
    used verbatim when the body carries one.
    """
    url = f"{(api_base or API_BASE).rstrip('/')}{GENERATE_PATH}"
    try:
        response = requests.post(url, json={"text": text}, timeout=timeout)
    except requests.RequestException as e:
        logger.error(f"Could not reach playlist service at {url}: {e}")
        raise PlaylistRequestError(
            "Could not reach the playlist service. Please try again."
        ) from e

    if not response.ok:
        raise PlaylistRequestError(_error_message(response), response.status_code)

    try:
        return PlaylistResult.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.error(f"Playlist service sent an unexpected body: {e}")
        raise PlaylistRequestError(
            "Received an invalid response from the playlist service."
        ) from e
