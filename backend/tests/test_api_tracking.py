from __future__ import annotations

import httpx


async def test_word_routes(client: httpx.AsyncClient, user_headers: dict) -> None:
    await client.post(
        "/api/v1/words/batch",
        json={"words": ["le", "la", "de"], "type": "known"},
        headers=user_headers,
    )
    await client.put("/api/v1/words/chat", headers=user_headers)
    await client.patch("/api/v1/words/le", json={"type": "ignored"}, headers=user_headers)
    await client.delete("/api/v1/words/de", headers=user_headers)

    response = await client.get("/api/v1/words", headers=user_headers)

    assert response.status_code == 200
    assert response.json() == {"le": "ignored", "la": "known", "chat": "tracking"}


async def test_word_batch_rejects_unknown_type(client: httpx.AsyncClient, user_headers: dict) -> None:
    response = await client.post(
        "/api/v1/words/batch",
        json={"words": ["le"], "type": "unknown"},
        headers=user_headers,
    )

    assert response.status_code == 422


async def test_sentence_routes(client: httpx.AsyncClient, user_headers: dict) -> None:
    created = await client.post(
        "/api/v1/sentences", json={"text": "Hello world."}, headers=user_headers
    )
    assert created.status_code == 200
    sentence = created.json()
    assert sentence["text"] == "Hello world."
    assert "createdAt" in sentence

    listed = (await client.get("/api/v1/sentences", headers=user_headers)).json()
    assert [s["id"] for s in listed] == [sentence["id"]]

    await client.delete(f"/api/v1/sentences/{sentence['id']}", headers=user_headers)
    assert (await client.get("/api/v1/sentences", headers=user_headers)).json() == []


async def test_reading_session_routes(client: httpx.AsyncClient, user_headers: dict) -> None:
    for book_id in ("book-1", "book-2"):
        response = await client.post(
            "/api/v1/reading-sessions",
            json={
                "bookId": book_id,
                "bookTitle": "Title",
                "sectionId": "0-0",
                "sectionTitle": "Chapter One",
                "wordCount": 250,
            },
            headers=user_headers,
        )
        assert response.status_code == 200

    one_book = await client.get(
        "/api/v1/reading-sessions", params={"bookId": "book-1"}, headers=user_headers
    )
    assert [s["bookId"] for s in one_book.json()] == ["book-1"]

    removed = await client.delete(
        "/api/v1/reading-sessions",
        params={"sectionId": "0-0", "bookId": "book-1"},
        headers=user_headers,
    )
    assert removed.json()["count"] == 1

    remaining = (await client.get("/api/v1/reading-sessions", headers=user_headers)).json()
    assert [s["bookId"] for s in remaining] == ["book-2"]


async def test_word_routes_accept_slashes(client: httpx.AsyncClient, user_headers: dict) -> None:
    await client.put("/api/v1/words/and/or", json={"type": "known"}, headers=user_headers)
    await client.patch("/api/v1/words/and/or", json={"type": "ignored"}, headers=user_headers)

    assert (await client.get("/api/v1/words", headers=user_headers)).json() == {"and/or": "ignored"}

    await client.delete("/api/v1/words/and/or", headers=user_headers)
    assert (await client.get("/api/v1/words", headers=user_headers)).json() == {}
