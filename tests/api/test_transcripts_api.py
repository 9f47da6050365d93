"""Integration tests for POST /mock-transcript."""

from httpx import AsyncClient

from meetsync.events import TranscriptBroadcast
from meetsync.models import Participant
from meetsync.rooms import RoomStore


async def test_appends_entry(client: AsyncClient, store: RoomStore, collector) -> None:
    """Entry is stored, echoed back and broadcast to the room."""
    store.add_participant("r1", Participant(user_id="u2", connection_id="c2"))

    response = await client.post(
        "/mock-transcript",
        json={"room": "r1", "userId": "u1", "text": "hello there"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["room"] == "r1"
    assert data["entry"]["displayName"] == "u1"
    assert data["entry"]["ts"] > 0
    [entry] = store.get_transcripts("r1")
    assert entry.text == "hello there"
    [broadcast] = collector.of_type(TranscriptBroadcast)
    assert broadcast.recipients == ("c2",)


async def test_keeps_client_timestamp(client: AsyncClient) -> None:
    response = await client.post(
        "/mock-transcript",
        json={"room": "r1", "userId": "u1", "displayName": "Ann", "text": "x", "ts": 42},
    )
    assert response.json()["entry"] == {
        "userId": "u1",
        "displayName": "Ann",
        "text": "x",
        "ts": 42,
    }


async def test_missing_text_returns_400(client: AsyncClient, store: RoomStore) -> None:
    response = await client.post(
        "/mock-transcript", json={"room": "r1", "userId": "u1"}
    )

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "bad_request"
    assert "text" in data["message"]
    assert store.list_rooms() == []


async def test_empty_body_returns_400(client: AsyncClient) -> None:
    response = await client.post("/mock-transcript")
    assert response.status_code == 400
