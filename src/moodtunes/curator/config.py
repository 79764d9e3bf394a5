# src/moodtunes/curator/config.py
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv
from openai import OpenAI

load_dotenv(".env")

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.6
DEFAULT_MAX_TOKENS = 800
DEFAULT_PROVIDER_TIMEOUT = 30.0
DEFAULT_PORT = 3001
PLAYLIST_SIZE = 7


class MissingApiKeyError(ValueError):
    """Raised at startup when the provider API key is not configured."""


def env_number(name: str, default, cast=float):
    """Reads a numeric env variable; the ValueError names the variable when it is not a number."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return cast(default)
    try:
        return cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from None


@dataclass(frozen=True)
class ProviderSettings:
    api_key: str
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_PROVIDER_TIMEOUT

    @classmethod
    def from_env(cls) -> "ProviderSettings":
        """
        Builds the provider settings from environment variables.
        Raises MissingApiKeyError if OPENAI_API_KEY is absent or blank, and
        ValueError if a numeric setting is not a number.
        """
        api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
        if not api_key:
            raise MissingApiKeyError(
                "OPENAI_API_KEY not found in environment variables. "
                "Set it in the environment or in .env."
            )
        return cls(
            api_key=api_key,
            model=os.getenv("OPENAI_MODEL") or DEFAULT_MODEL,
            temperature=env_number("MOODTUNES_TEMPERATURE", DEFAULT_TEMPERATURE),
            max_tokens=env_number("MOODTUNES_MAX_TOKENS", DEFAULT_MAX_TOKENS, int),
            timeout=env_number("MOODTUNES_PROVIDER_TIMEOUT", DEFAULT_PROVIDER_TIMEOUT),
        )


def get_openai_client(settings: ProviderSettings) -> OpenAI:
    """Returns an OpenAI client instance based on the given settings."""
    # A failed call is surfaced to the user right away, never retried.
    return OpenAI(api_key=settings.api_key, timeout=settings.timeout, max_retries=0)


def configure_logging_from_env() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


# --- Server & client constants ---
HOST = os.getenv("HOST", "0.0.0.0")


def server_port() -> int:
    return env_number("PORT", DEFAULT_PORT, int)


CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("MOODTUNES_CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
API_BASE = os.getenv("MOODTUNES_API_BASE", f"http://localhost:{DEFAULT_PORT}")
