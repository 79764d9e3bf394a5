# src/moodtunes/curator/playlist.py
import json
import logging

import openai
from openai import OpenAI

from .artwork import artwork_url
from .config import ProviderSettings
from .errors import (
    EmptyProviderResponse,
    InvalidInput,
    InvalidProviderSchema,
    MalformedProviderJSON,
    ProviderUnavailable,
)
from .prompt import DEFAULT_MOOD, MOODS, build_messages

logger = logging.getLogger(__name__)

_PROVIDER_STATUS_MESSAGES = {
    401: "The music curator rejected our credentials. Please contact the site owner.",
    403: "The music curator refused the request. Please contact the site owner.",
    429: "The music curator is receiving too many requests. Please try again shortly.",
}


def validate_text(text) -> str:
    """Returns the trimmed mood text, or raises InvalidInput if there is none."""
    if not isinstance(text, str) or not text.strip():
        raise InvalidInput()
    return text.strip()


def request_completion(text: str, client: OpenAI, settings: ProviderSettings) -> str:
    """
    Asks the provider for a JSON-mode chat completion and returns the raw reply text.

    Provider failures are translated into ProviderUnavailable; the provider's
    own message is logged but never put into the public message.
    """
    try:
        response = client.chat.completions.create(
            model=settings.model,
            messages=build_messages(text),
            response_format={"type": "json_object"},
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
            n=1,
        )
    except openai.APIStatusError as e:
        logger.error(f"Provider returned status {e.status_code}: {e}")
        # Auth and rate-limit statuses are passed through, anything else is a 500
        if e.status_code in _PROVIDER_STATUS_MESSAGES:
            raise ProviderUnavailable(
                _PROVIDER_STATUS_MESSAGES[e.status_code], status_code=e.status_code
            ) from e
        raise ProviderUnavailable() from e
    except openai.APIConnectionError as e:
        logger.error(f"Could not reach the provider: {e}")
        raise ProviderUnavailable() from e

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise EmptyProviderResponse()

    logger.debug(f"Raw provider reply: {content}")
    return content


def parse_reply(raw: str) -> dict:
    """Parses the provider reply and checks the top-level shape."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Provider reply is not valid JSON ({e}): {raw!r}")
        raise MalformedProviderJSON() from e

    if (
        not isinstance(data, dict)
        or not isinstance(data.get("mood"), str)
        or not isinstance(data.get("playlist"), list)
    ):
        logger.error(f"Provider reply has missing keys or wrong types: {data!r}")
        raise InvalidProviderSchema()
    return data


def filter_tracks(entries: list) -> list[dict]:
    """
    Keeps the entries whose 'name' and 'artist' are non-empty strings, trimmed.

    Bad entries are dropped rather than failing the request. Entries that
    already satisfy the constraint come back unchanged and in order.
    """
    tracks = []
    for position, entry in enumerate(entries):
        name = entry.get("name") if isinstance(entry, dict) else None
        artist = entry.get("artist") if isinstance(entry, dict) else None
        if not isinstance(name, str) or not isinstance(artist, str):
            logger.warning(f"Dropping playlist entry {position}: {entry!r}")
            continue
        if not name.strip() or not artist.strip():
            logger.warning(f"Dropping playlist entry {position}: {entry!r}")
            continue
        tracks.append({"name": name.strip(), "artist": artist.strip()})
    return tracks


def normalize_mood(value: str) -> str:
    """
    Maps the provider's mood onto the fixed mood set, case-insensitively.
    Empty and unknown moods become the default mood.
    """
    mood = value.strip()
    if not mood:
        return DEFAULT_MOOD
    for known in MOODS:
        if known.lower() == mood.lower():
            return known
    logger.warning(f"Provider returned unknown mood '{mood}', using {DEFAULT_MOOD}")
    return DEFAULT_MOOD


def curate_playlist(text: str, client: OpenAI, settings: ProviderSettings) -> dict:
    """
    Detects the dominant mood of `text` and curates a matching playlist.

    Returns a dict with 'mood' and 'playlist' (name, artist, artworkUrl per
    track). Raises a PlaylistError subclass on any failure; invalid input is
    rejected before the provider is called.
    """
    text = validate_text(text)
    logger.info(f"Curating playlist for mood text of {len(text)} characters")

    data = parse_reply(request_completion(text, client, settings))
    mood = normalize_mood(data["mood"])
    tracks = filter_tracks(data["playlist"])
    if not tracks:
        logger.warning("Provider reply contained no valid tracks; returning empty playlist")

    playlist = [
        {**track, "artworkUrl": artwork_url(mood, track["name"], index)}
        for index, track in enumerate(tracks)
    ]
    logger.info(f"Generated '{mood}' playlist with {len(playlist)} tracks")
    return {"mood": mood, "playlist": playlist}
