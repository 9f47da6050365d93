"""Tests for the in-memory room store."""

import pytest

from meetsync.models import Mom, Participant, TranscriptEntry
from meetsync.rooms import RoomStore


def participant(user_id: str, connection_id: str | None = None) -> Participant:
    return Participant(user_id=user_id, connection_id=connection_id or f"conn-{user_id}")


def entry(text: str, ts: int, user_id: str = "u1") -> TranscriptEntry:
    return TranscriptEntry(user_id=user_id, text=text, ts=ts)


class TestEnsureRoom:
    """Tests for lazy room creation."""

    def test_creates_empty_room(self, store: RoomStore) -> None:
        room = store.ensure_room("r1")
        assert room.key == "r1"
        assert room.participants == {}
        assert room.transcripts == []
        assert room.mom is None
        assert store.has_room("r1")

    def test_second_call_leaves_state_untouched(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1"))
        store.add_transcript("r1", entry("hello", 10))
        first = store.ensure_room("r1")

        second = store.ensure_room("r1")

        assert second is first
        assert list(second.participants) == ["u1"]
        assert [t.text for t in second.transcripts] == ["hello"]

    def test_rejects_non_positive_cap(self) -> None:
        with pytest.raises(ValueError):
            RoomStore(transcript_cap=0)


class TestParticipants:
    """Tests for participant upsert and removal."""

    def test_add_creates_room(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1"))
        assert [p.user_id for p in store.get_participants("r1")] == ["u1"]

    def test_rejoin_overwrites_same_user(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1", "old"))
        store.add_participant("r1", participant("u1", "new"))

        participants = store.get_participants("r1")
        assert len(participants) == 1
        assert participants[0].connection_id == "new"
        assert store.rooms_for_connection("old") == []
        assert store.rooms_for_connection("new") == ["r1"]

    def test_shared_connection_replaces_other_user_in_same_room(
        self, store: RoomStore
    ) -> None:
        store.add_participant("r1", participant("u1", "c1"))
        store.add_participant("r1", participant("u2", "c1"))

        assert [p.user_id for p in store.get_participants("r1")] == ["u2"]

    def test_remove_participant(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1"))
        store.add_participant("r1", participant("u2"))

        assert store.remove_participant("r1", "u1") is True
        assert [p.user_id for p in store.get_participants("r1")] == ["u2"]

    def test_remove_missing_is_noop(self, store: RoomStore) -> None:
        assert store.remove_participant("nope", "u1") is False
        store.add_participant("r1", participant("u1"))
        assert store.remove_participant("r1", "ghost") is False
        assert store.has_room("r1")

    def test_last_leave_releases_room_without_transcripts(
        self, store: RoomStore
    ) -> None:
        store.add_participant("r1", participant("u1"))
        store.set_participant_metrics("r1", "u1", {"bitrate": 1})

        store.remove_participant("r1", "u1")

        assert not store.has_room("r1")
        assert store.list_rooms() == []
        assert store.get_metrics("r1") == {}

    def test_room_with_transcripts_survives_last_leave(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1"))
        store.add_transcript("r1", entry("hello", 10))

        store.remove_participant("r1", "u1")

        assert store.has_room("r1")
        [summary] = store.list_rooms()
        assert summary.participants == 0
        assert summary.last_updated == 10

    def test_find_participant(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1"))
        assert store.find_participant_by_user_id("r1", "u1").user_id == "u1"
        assert store.find_participant_by_user_id("r1", "u2") is None
        assert store.find_participant_by_user_id("r2", "u1") is None

    def test_get_participants_returns_snapshot(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1"))
        snapshot = store.get_participants("r1")
        store.add_participant("r1", participant("u2"))
        assert len(snapshot) == 1
        assert store.get_participants("missing") == []

    def test_connection_ids_excludes_sender(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1", "c1"))
        store.add_participant("r1", participant("u2", "c2"))
        store.add_participant("r1", participant("u3", "c3"))

        assert set(store.connection_ids("r1")) == {"c1", "c2", "c3"}
        assert set(store.connection_ids("r1", exclude="c2")) == {"c1", "c3"}
        assert store.connection_ids("missing") == ()


class TestRemoveByConnection:
    """Tests for disconnect cleanup across rooms."""

    def test_removes_from_every_room(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1", "c1"))
        store.add_participant("r2", participant("u1", "c1"))
        store.add_participant("r2", participant("u2", "c2"))

        affected = store.remove_participant_by_connection_id("c1")

        assert affected == ["r1", "r2"]
        assert not store.has_room("r1")
        assert [p.user_id for p in store.get_participants("r2")] == ["u2"]
        assert store.rooms_for_connection("c1") == []

    def test_restricted_to_one_room(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1", "c1"))
        store.add_participant("r2", participant("u1", "c1"))

        assert store.remove_participant_by_connection_id("c1", room="r1") == ["r1"]
        assert store.rooms_for_connection("c1") == ["r2"]

    def test_unknown_connection(self, store: RoomStore) -> None:
        assert store.remove_participant_by_connection_id("nobody") == []


class TestTranscripts:
    """Tests for the bounded transcript sequence."""

    def test_append_preserves_order(self, store: RoomStore) -> None:
        store.add_transcript("r1", entry("a", 3))
        store.add_transcript("r1", entry("b", 1))
        assert [t.text for t in store.get_transcripts("r1")] == ["a", "b"]

    def test_cap_evicts_oldest(self, store: RoomStore) -> None:
        for i in range(2001):
            store.add_transcript("r1", entry(f"line {i}", i + 1))

        transcripts = store.get_transcripts("r1")
        assert len(transcripts) == 2000
        assert transcripts[0].text == "line 1"
        assert transcripts[-1].text == "line 2000"
        assert [t.ts for t in transcripts] == list(range(2, 2002))

    def test_custom_cap(self) -> None:
        small = RoomStore(transcript_cap=3)
        for i in range(5):
            small.add_transcript("r1", entry(str(i), i + 1))
        assert [t.text for t in small.get_transcripts("r1")] == ["2", "3", "4"]

    def test_missing_room_has_no_transcripts(self, store: RoomStore) -> None:
        assert store.get_transcripts("r1") == []
        assert not store.has_room("r1")


class TestMomAndMetrics:
    """Tests for minutes and metrics storage."""

    def test_set_mom_creates_room(self, store: RoomStore) -> None:
        mom = Mom(room="r1", summary="s")
        store.set_mom("r1", mom)
        assert store.get_mom("r1") is mom

    def test_get_mom_missing(self, store: RoomStore) -> None:
        assert store.get_mom("r1") is None

    def test_metrics_replace_on_write(self, store: RoomStore) -> None:
        store.set_participant_metrics("r1", "u1", {"rtt": 10})
        store.set_participant_metrics("r1", "u1", {"jitter": 2})
        store.set_participant_metrics("r1", "u2", {"rtt": 5})
        assert store.get_metrics("r1") == {"u1": {"jitter": 2}, "u2": {"rtt": 5}}

    def test_release_if_vacant_drops_minutes_only_room(self, store: RoomStore) -> None:
        store.set_mom("r1", Mom(room="r1"))
        store.set_participant_metrics("r1", "u1", {"rtt": 1})

        assert store.release_if_vacant("r1") is True
        assert not store.has_room("r1")
        assert store.release_if_vacant("r1") is False

    def test_release_if_vacant_keeps_active_room(self, store: RoomStore) -> None:
        store.add_transcript("r1", entry("x", 1))
        store.add_participant("r2", participant("u1"))

        assert store.release_if_vacant("r1") is False
        assert store.release_if_vacant("r2") is False
        assert store.has_room("r1") and store.has_room("r2")

    def test_list_rooms(self, store: RoomStore) -> None:
        store.add_participant("r1", participant("u1"))
        store.add_participant("r1", participant("u2"))
        store.add_transcript("r2", entry("x", 42))

        rooms = {r.room: r for r in store.list_rooms()}
        assert rooms["r1"].participants == 2
        assert rooms["r1"].last_updated == 0
        assert rooms["r2"].last_updated == 42
        assert rooms["r2"].to_wire() == {
            "room": "r2",
            "participants": 0,
            "lastUpdated": 42,
        }
