# tests/conftest.py
import json
from types import SimpleNamespace

import httpx
import pytest
import requests

from moodtunes.curator.config import ProviderSettings

PROMOTION_REPLY = {
    "mood": "Happy",
    "playlist": [
        {"name": "Good Vibrations", "artist": "The Beach Boys"},
        {"name": "Walking on Sunshine", "artist": "Katrina & The Waves"},
        {"name": "Happy", "artist": "Pharrell Williams"},
        {"name": "Don't Stop Me Now", "artist": "Queen"},
        {"name": "Uptown Funk", "artist": "Mark Ronson"},
        {"name": "Dancing Queen", "artist": "ABBA"},
        {"name": "Here Comes the Sun", "artist": "The Beatles"},
    ],
}


class FakeCompletions:
    """Stands in for `client.chat.completions`, recording every call."""

    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, content=None, error=None):
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self):
        return self.completions.calls


def provider_response(status_code: int) -> httpx.Response:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return httpx.Response(status_code, request=request)


def make_response(status_code: int, body=None, text: str = "") -> requests.Response:
    """A playlist-service reply as `requests` would return it."""
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = (json.dumps(body) if body is not None else text).encode()
    return resp


def with_artwork(reply: dict) -> dict:
    return {
        "mood": reply["mood"],
        "playlist": [
            {**track, "artworkUrl": f"https://picsum.photos/seed/{i}/150/150"}
            for i, track in enumerate(reply["playlist"])
        ],
    }


@pytest.fixture
def settings():
    return ProviderSettings(api_key="sk-test-key")


@pytest.fixture
def fake_openai():
    """Factory: fake_openai(reply) where reply is a dict (sent as JSON) or raw text."""

    def _make(reply=None, error=None):
        content = json.dumps(reply) if isinstance(reply, dict) else reply
        return FakeOpenAI(content=content, error=error)

    return _make
