import openai
import pytest

from moodtunes.curator.artwork import artwork_url, fallback_artwork_url
from moodtunes.curator.errors import (
    EmptyProviderResponse,
    InvalidInput,
    InvalidProviderSchema,
    MalformedProviderJSON,
    ProviderUnavailable,
)
from moodtunes.curator.playlist import (
    curate_playlist,
    filter_tracks,
    normalize_mood,
    parse_reply,
)
from moodtunes.curator.prompt import MOODS, SYSTEM_PROMPT

from conftest import PROMOTION_REPLY, provider_response


def test_curate_playlist_builds_tracks_with_artwork(fake_openai, settings):
    result = curate_playlist("  I just got promoted!  ", fake_openai(PROMOTION_REPLY), settings)

    assert result["mood"] == "Happy"
    assert [t["name"] for t in result["playlist"]] == [
        t["name"] for t in PROMOTION_REPLY["playlist"]
    ]
    assert result["playlist"][2]["artworkUrl"] == artwork_url("Happy", "Happy", 2)


def test_provider_call_uses_json_mode_and_trimmed_text(fake_openai, settings):
    fake = fake_openai(PROMOTION_REPLY)

    curate_playlist("  sunny day \n", fake, settings)

    call = fake.calls[0]
    assert call["response_format"] == {"type": "json_object"}
    assert call["model"] == settings.model
    assert call["temperature"] == 0.6
    assert call["max_tokens"] == 800
    assert call["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert call["messages"][1] == {"role": "user", "content": "sunny day"}


def test_system_prompt_lists_every_mood():
    for mood in MOODS:
        assert mood in SYSTEM_PROMPT
    assert "7" in SYSTEM_PROMPT


@pytest.mark.parametrize("text", ["", "   ", None, 12])
def test_invalid_text_never_reaches_provider(fake_openai, settings, text):
    fake = fake_openai(PROMOTION_REPLY)
    with pytest.raises(InvalidInput) as exc_info:
        curate_playlist(text, fake, settings)
    assert exc_info.value.status_code == 400
    assert fake.calls == []


def test_empty_reply_raises(fake_openai, settings):
    with pytest.raises(EmptyProviderResponse):
        curate_playlist("hello", fake_openai(None), settings)


def test_rate_limit_keeps_provider_status(fake_openai, settings):
    error = openai.RateLimitError("slow down", response=provider_response(429), body=None)
    with pytest.raises(ProviderUnavailable) as exc_info:
        curate_playlist("hello", fake_openai(error=error), settings)
    assert exc_info.value.status_code == 429
    assert "slow down" not in exc_info.value.message


def test_connection_error_is_500(fake_openai, settings):
    error = openai.APIConnectionError(request=provider_response(500).request)
    with pytest.raises(ProviderUnavailable) as exc_info:
        curate_playlist("hello", fake_openai(error=error), settings)
    assert exc_info.value.status_code == 500


def test_parse_reply_rejects_invalid_json():
    with pytest.raises(MalformedProviderJSON):
        parse_reply("Sure! Here is your playlist: ...")


@pytest.mark.parametrize(
    "raw",
    [
        "[]",
        '{"playlist": []}',
        '{"mood": 3, "playlist": []}',
        '{"mood": "Sad", "playlist": {"name": "x"}}',
    ],
)
def test_parse_reply_rejects_wrong_shape(raw):
    with pytest.raises(InvalidProviderSchema):
        parse_reply(raw)


def test_filter_tracks_drops_bad_entries_and_trims():
    entries = [
        {"name": " Hurt ", "artist": "Johnny Cash "},
        {"name": "", "artist": "Nobody"},
        {"name": "No Artist"},
        {"name": "Creep", "artist": None},
        "Yesterday - The Beatles",
        {"name": "Mad World", "artist": "Gary Jules"},
    ]

    assert filter_tracks(entries) == [
        {"name": "Hurt", "artist": "Johnny Cash"},
        {"name": "Mad World", "artist": "Gary Jules"},
    ]


def test_filter_tracks_keeps_valid_playlist_unchanged():
    entries = PROMOTION_REPLY["playlist"]
    assert filter_tracks(entries) == entries
    assert filter_tracks(filter_tracks(entries)) == entries


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Happy", "Happy"),
        ("  sad ", "Sad"),
        ("ENERGETIC", "Energetic"),
        ("", "Neutral"),
        ("   ", "Neutral"),
        ("Melancholic", "Neutral"),
    ],
)
def test_normalize_mood(raw, expected):
    assert normalize_mood(raw) == expected


def test_artwork_url_is_deterministic_and_url_safe():
    url = artwork_url("Sad", "Tears / Rain & Fire?", 3)
    assert url == artwork_url("Sad", "Tears / Rain & Fire?", 3)
    assert url.startswith("https://picsum.photos/seed/")
    assert url.endswith("/150/150")
    seed = url[len("https://picsum.photos/seed/"):-len("/150/150")]
    assert "/" not in seed and "?" not in seed and "&" not in seed


def test_artwork_url_differs_by_position_and_mood():
    assert artwork_url("Calm", "Weightless", 0) != artwork_url("Calm", "Weightless", 1)
    assert artwork_url("Calm", "Weightless", 0) != artwork_url("Sad", "Weightless", 0)


def test_fallback_artwork_depends_on_name_only():
    assert fallback_artwork_url("Clair de Lune") == fallback_artwork_url(" Clair de Lune ")
    assert fallback_artwork_url("Clair de Lune") != fallback_artwork_url("Nocturne")


def test_other_provider_statuses_become_500(fake_openai, settings):
    error = openai.BadRequestError("context too long", response=provider_response(400), body=None)
    with pytest.raises(ProviderUnavailable) as exc_info:
        curate_playlist("hello", fake_openai(error=error), settings)
    assert exc_info.value.status_code == 500
