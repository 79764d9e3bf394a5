from pydantic import BaseModel, Field


class MoodRequest(BaseModel):
    text: str


class Track(BaseModel):
    name: str = Field(min_length=1)
    artist: str = Field(min_length=1)
    artworkUrl: str


class PlaylistResult(BaseModel):
    mood: str = Field(min_length=1)
    playlist: list[Track]


class ErrorResponse(BaseModel):
    error: str
