import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..curator.config import (
    CORS_ORIGINS,
    HOST,
    ProviderSettings,
    configure_logging_from_env,
    get_openai_client,
    server_port,
)
from ..curator.errors import InvalidInput, PlaylistError
from . import schemas, services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Raises MissingApiKeyError before the server accepts any connection
    settings = ProviderSettings.from_env()
    app.state.provider = services.Provider(
        settings=settings, client=get_openai_client(settings)
    )
    logger.info(f"OpenAI client initialized (model: {settings.model})")
    yield


app = FastAPI(title="MoodTunes API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_provider(request: Request) -> services.Provider:
    return request.app.state.provider


@app.exception_handler(PlaylistError)
async def playlist_error_handler(request: Request, exc: PlaylistError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = InvalidInput()
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error while handling {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Failed to generate playlist."})


@app.get("/health")
def health_check():
    """Liveness check; answers without calling the provider."""
    return {"status": "healthy", "service": "moodtunes"}


@app.post(
    "/api/generate-playlist",
    response_model=schemas.PlaylistResult,
    responses={
        400: {"model": schemas.ErrorResponse},
        500: {"model": schemas.ErrorResponse},
    },
)
def generate_playlist(
    request: schemas.MoodRequest,
    provider: services.Provider = Depends(get_provider),
):
    """
    Endpoint to detect the mood of free text and get a matching playlist.
    """
    # The endpoint's only job is to delegate to the service layer
    return services.generate_playlist(request.text, provider)


def main() -> None:
    """Entry point for `moodtunes-api`."""
    configure_logging_from_env()
    try:
        ProviderSettings.from_env()
        port = server_port()
    except ValueError as e:
        # MissingApiKeyError included
        logger.critical(f"FATAL ERROR: {e}")
        sys.exit(1)

    logger.info(f"Backend server running at http://{HOST}:{port}")
    uvicorn.run(app, host=HOST, port=port)


if __name__ == "__main__":
    main()
