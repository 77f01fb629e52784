from __future__ import annotations

import httpx
import pytest

from app.core.context import ServiceContext
from app.core.errors import ParseError
from app.core.transcript.service import (
    INVALID_URL_MESSAGE,
    TranscriptService,
    extract_video_id,
    split_into_parts,
    transcript_to_book,
)
from app.models.schemas.transcript import TranscriptEntry, VideoInfo

OEMBED_HOST = "www.youtube.com"


def _entries(words: int, per_line: int = 7) -> list[TranscriptEntry]:
    tokens = [f"w{i}" for i in range(words)]
    return [
        TranscriptEntry(text=" ".join(tokens[i:i + per_line]), start=float(i))
        for i in range(0, words, per_line)
    ]


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.youtube.com/watch?v=abc123XYZ_-", "abc123XYZ_-"),
        ("https://youtu.be/abc123?t=30", "abc123"),
        ("https://www.youtube.com/embed/abc123", "abc123"),
        ("https://www.youtube.com/watch?feature=share&v=abc123", "abc123"),
        ("https://www.youtube.com/shorts/short42", "short42"),
        ("https://vimeo.com/12345", None),
    ],
)
def test_extract_video_id(url: str, expected) -> None:
    assert extract_video_id(url) == expected


def test_split_into_parts() -> None:
    text = " ".join(f"w{i}" for i in range(4500))

    parts = split_into_parts(text)

    assert [len(p.split()) for p in parts] == [2000, 2000, 500]


def test_transcript_to_book() -> None:
    video = VideoInfo(video_id="abc123", title="Lesson 1", channel_name="French Daily")

    book = transcript_to_book(video, _entries(4001))

    assert book.title == "Lesson 1"
    assert book.author == "French Daily"
    assert book.file_name == "youtube-abc123.json"
    assert [s.id for s in book.sections] == ["section-1", "section-2", "section-3"]
    assert [s.title for s in book.sections] == ["Part 1", "Part 2", "Part 3"]
    assert [s.word_count for s in book.sections] == [2000, 2000, 1]
    assert book.total_words == 4001


def test_empty_transcript_is_rejected() -> None:
    with pytest.raises(ParseError):
        transcript_to_book(VideoInfo(video_id="x"), [TranscriptEntry(text="  \n ")])


async def test_import_uses_oembed_metadata(context: ServiceContext, upstream) -> None:
    upstream.handlers[OEMBED_HOST] = lambda request: httpx.Response(
        200, json={"title": "Lesson 1", "author_name": "French Daily"}
    )

    book = await TranscriptService(context).import_transcript(
        "https://youtu.be/abc123", _entries(10)
    )

    assert (book.title, book.author) == ("Lesson 1", "French Daily")
    (request,) = upstream.requests
    assert request.url.params["url"] == "https://www.youtube.com/watch?v=abc123"


async def test_import_falls_back_when_oembed_fails(context: ServiceContext, upstream) -> None:
    upstream.handlers[OEMBED_HOST] = lambda request: httpx.Response(500)

    book = await TranscriptService(context).import_transcript(
        "https://youtu.be/abc123", _entries(10)
    )

    assert (book.title, book.author) == ("YouTube Video", "Unknown Channel")


async def test_import_rejects_non_youtube_url(context: ServiceContext) -> None:
    with pytest.raises(ParseError) as excinfo:
        await TranscriptService(context).import_transcript("https://example.com", _entries(3))
    assert excinfo.value.message == INVALID_URL_MESSAGE


async def test_transcript_route_adds_book(
    client: httpx.AsyncClient, user_headers: dict, upstream
) -> None:
    upstream.handlers[OEMBED_HOST] = lambda request: httpx.Response(
        200, json={"title": "Lesson 1", "author_name": "French Daily"}
    )

    response = await client.post(
        "/api/v1/books/transcript",
        json={
            "url": "https://www.youtube.com/watch?v=abc123",
            "transcript": [{"text": "Bonjour tout le monde", "start": 0, "duration": 2.5}],
        },
        headers=user_headers,
    )

    assert response.status_code == 200
    entry = response.json()["book"]
    assert entry["title"] == "Lesson 1"
    assert entry["totalWords"] == 4

    book = (await client.get(f"/api/v1/books/{entry['bookId']}", headers=user_headers)).json()
    assert book["sections"][0]["content"] == "Bonjour tout le monde"


async def test_transcript_route_reports_bad_url(
    client: httpx.AsyncClient, user_headers: dict
) -> None:
    response = await client.post(
        "/api/v1/books/transcript",
        json={"url": "not a url", "transcript": [{"text": "hi"}]},
        headers=user_headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": INVALID_URL_MESSAGE}
