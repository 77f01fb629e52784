"""Video transcript ingestion.

Turns the caption lines of a YouTube video into a ``Book`` whose sections
are consecutive runs of ``WORDS_PER_SECTION`` words, titled "Part N".
Caption lines are supplied by the caller; only the video's title and
channel are looked up here.
"""

import logging
import re
from typing import Iterable, Optional

import httpx

from app.core.context import ServiceContext
from app.core.epub.parser import collapse_whitespace, count_words, generate_book_id
from app.core.errors import ParseError
from app.models.database.base import utcnow
from app.models.schemas.book import Book, Section
from app.models.schemas.transcript import TranscriptEntry, VideoInfo

logger = logging.getLogger(__name__)

WORDS_PER_SECTION = 2000

INVALID_URL_MESSAGE = "Invalid YouTube URL. Please provide a valid YouTube video URL."

_VIDEO_ID_PATTERNS = [
    re.compile(
        r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/"
        r"|youtube\.com/watch\?.*&v=)([^#&?]*)"
    ),
    re.compile(r"youtube\.com/shorts/([^#&?]*)"),
]


def extract_video_id(url: str) -> Optional[str]:
    """Video id from any of the usual YouTube URL shapes."""
    for pattern in _VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match and match.group(1):
            return match.group(1)
    return None


def transcript_text(entries: Iterable[TranscriptEntry]) -> str:
    return collapse_whitespace(" ".join(entry.text for entry in entries))


def split_into_parts(text: str, words_per_section: int = WORDS_PER_SECTION) -> list[str]:
    words = text.split()
    return [
        " ".join(words[start:start + words_per_section])
        for start in range(0, len(words), words_per_section)
    ]


def transcript_to_book(video: VideoInfo, entries: Iterable[TranscriptEntry]) -> Book:
    """Build a reader ``Book`` from caption lines.

    Raises:
        ParseError: If the captions contain no words
    """
    text = transcript_text(entries)
    parts = split_into_parts(text)
    if not parts:
        raise ParseError("Transcript is empty")

    sections = [
        Section(
            id=f"section-{index + 1}",
            title=f"Part {index + 1}",
            content=part,
            word_count=count_words(part),
        )
        for index, part in enumerate(parts)
    ]

    return Book(
        id=generate_book_id(),
        title=video.title,
        author=video.channel_name,
        sections=sections,
        total_words=sum(section.word_count for section in sections),
        file_name=f"youtube-{video.video_id}.json",
        date_added=utcnow(),
        completed=False,
    )


class TranscriptService:
    """Resolve video metadata and convert transcripts to books."""

    def __init__(self, context: ServiceContext):
        self.context = context
        self.settings = context.settings

    async def fetch_video_info(self, video_id: str) -> VideoInfo:
        """Title and channel from YouTube's oEmbed endpoint.

        Falls back to placeholder names when the lookup fails.
        """
        try:
            response = await self.context.http_client.get(
                self.settings.youtube_oembed_url,
                params={
                    "url": f"https://www.youtube.com/watch?v={video_id}",
                    "format": "json",
                },
                timeout=self.settings.upstream_timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("oEmbed lookup for video %s failed: %s", video_id, e)
            return VideoInfo(video_id=video_id)

        if not isinstance(data, dict):
            return VideoInfo(video_id=video_id)

        return VideoInfo(
            video_id=video_id,
            title=data.get("title") or "Unknown Title",
            channel_name=data.get("author_name") or "Unknown Channel",
            description=data.get("description") or "",
            thumbnail=data.get("thumbnail_url") or "",
        )

    async def import_transcript(
        self,
        url: str,
        entries: list[TranscriptEntry],
        title: Optional[str] = None,
    ) -> Book:
        """Convert a video's transcript into a book. Nothing is persisted.

        Raises:
            ParseError: If ``url`` is not a YouTube video URL or the
                transcript has no words
        """
        video_id = extract_video_id(url)
        if not video_id:
            raise ParseError(INVALID_URL_MESSAGE)

        video = await self.fetch_video_info(video_id)
        if title:
            video = video.model_copy(update={"title": title})

        book = transcript_to_book(video, entries)
        logger.info(
            "Converted transcript of %s: %d parts, %d words",
            video_id, len(book.sections), book.total_words,
        )
        return book
