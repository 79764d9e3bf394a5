# src/moodtunes/curator/artwork.py
from urllib.parse import quote

PLACEHOLDER_BASE_URL = "https://picsum.photos/seed/"
ARTWORK_SIZE = 150
SEED_NAME_LENGTH = 30


def _seeded_url(seed: str) -> str:
    return f"{PLACEHOLDER_BASE_URL}{quote(seed, safe='')}/{ARTWORK_SIZE}/{ARTWORK_SIZE}"


def artwork_url(mood: str, track_name: str, index: int) -> str:
    """
    Placeholder artwork for the track at `index` of a playlist.

    The seed mixes mood, a truncated track name and the position, so every
    track of a playlist gets its own image while the same inputs always
    give the same URL.
    """
    seed = f"{mood}-{track_name[:SEED_NAME_LENGTH]}-{index}"
    return _seeded_url(seed)


def fallback_artwork_url(track_name: str) -> str:
    """Artwork seeded by the track name alone, used when the primary image fails."""
    return _seeded_url(track_name.strip() or "track")
