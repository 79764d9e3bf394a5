# src/moodtunes/curator/prompt.py
from .config import PLAYLIST_SIZE

MOODS = (
    "Happy",
    "Sad",
    "Calm",
    "Energetic",
    "Angry",
    "Anxious",
    "Reflective",
    "Neutral",
)
DEFAULT_MOOD = "Neutral"

SYSTEM_PROMPT = f"""You are a music curator for a mood-based playlist app.
Analyze the user's mood from the provided text and identify exactly one dominant mood,
chosen from: {", ".join(MOODS)}.

Then suggest exactly {PLAYLIST_SIZE} distinct, real songs (with their artists) that fit this mood.
Favor a variety of artists; do not repeat an artist unless the mood truly calls for it.

Respond ONLY with a single valid JSON object, with no text before or after it. The object has two keys:
- "mood": the detected mood as a capitalized string
- "playlist": an array of objects, each with "name" and "artist" string keys

Example format:
{{"mood": "Happy", "playlist": [{{"name": "Good Vibrations", "artist": "The Beach Boys"}}, {{"name": "Walking on Sunshine", "artist": "Katrina & The Waves"}}]}}
"""


def build_messages(text: str) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": text},
    ]
