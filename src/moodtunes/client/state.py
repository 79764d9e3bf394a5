# src/moodtunes/client/state.py
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from ..app.schemas import PlaylistResult, Track
from .api import PlaylistRequestError, submit_mood

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong while generating your playlist. Please try again."


class UIState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class PlaylistSession:
    """
    Local UI state of the playlist client.

    Holds the mood text and whatever the last request produced. Only one
    request can be outstanding at a time: `submit` does nothing while the
    session is loading.
    """

    text: str = ""
    state: UIState = UIState.IDLE
    mood: Optional[str] = None
    playlist: list[Track] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def can_submit(self) -> bool:
        return bool(self.text.strip()) and self.state is not UIState.LOADING

    def _clear_result(self) -> None:
        self.mood = None
        self.playlist = []
        self.error = None

    def update_text(self, text: str) -> None:
        self.text = text
        if not text.strip() and self.state is not UIState.LOADING:
            self._clear_result()
            self.state = UIState.IDLE

    def begin(self) -> bool:
        """Enters LOADING and drops the previous result. False if submitting is not allowed."""
        if not self.can_submit:
            return False
        self._clear_result()
        self.state = UIState.LOADING
        return True

    def complete(
        self, fetch: Callable[[str], PlaylistResult] = submit_mood
    ) -> Optional[PlaylistResult]:
        """
        Runs the request of a session that `begin` put into LOADING.

        Returns the result on success, None on failure or when no request
        is pending.
        """
        if self.state is not UIState.LOADING:
            return None
        try:
            result = fetch(self.text.strip())
        except PlaylistRequestError as e:
            self.error = e.message
            self.state = UIState.ERROR
            return None
        except Exception:
            logger.exception("Playlist request failed unexpectedly")
            self.error = UNEXPECTED_ERROR_MESSAGE
            self.state = UIState.ERROR
            return None

        self.mood = result.mood
        self.playlist = list(result.playlist)
        self.state = UIState.SUCCESS
        return result

    def submit(
        self, fetch: Callable[[str], PlaylistResult] = submit_mood
    ) -> Optional[PlaylistResult]:
        """
        Runs one request through `fetch` and records its outcome.

        Returns the result on success, None on failure or when submitting
        is not allowed.
        """
        if not self.begin():
            return None
        return self.complete(fetch)
