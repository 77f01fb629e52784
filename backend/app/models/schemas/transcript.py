"""Video transcript import schemas."""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class TranscriptEntry(CamelModel):
    """One caption line. Times are in seconds."""

    text: str
    start: float = 0.0
    duration: float = 0.0


class VideoInfo(CamelModel):
    video_id: str
    title: str = "YouTube Video"
    channel_name: str = "Unknown Channel"
    description: str = ""
    thumbnail: str = ""


class TranscriptImportRequest(CamelModel):
    """Body of ``POST /books/transcript``.

    The caption lines are fetched by the client; the server resolves the
    video's title and channel itself.
    """

    url: str
    transcript: list[TranscriptEntry] = Field(min_length=1)
    title: Optional[str] = None
