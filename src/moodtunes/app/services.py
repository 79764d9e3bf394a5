from dataclasses import dataclass

from openai import OpenAI

from ..curator.config import ProviderSettings
from ..curator.playlist import curate_playlist
from .schemas import PlaylistResult, Track


@dataclass(frozen=True)
class Provider:
    """The provider settings and client, built once at startup and shared read-only."""

    settings: ProviderSettings
    client: OpenAI


def generate_playlist(text: str, provider: Provider) -> PlaylistResult:
    """
    Service layer function to get a mood playlist.
    """
    # The curator does the provider call and all reply validation
    result = curate_playlist(text, provider.client, provider.settings)

    # Format the curated output into a clean API response
    tracks = [Track(**track) for track in result["playlist"]]
    return PlaylistResult(mood=result["mood"], playlist=tracks)
