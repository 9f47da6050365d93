"""Tests for domain models."""

import pytest
from pydantic import ValidationError

from meetsync.models import (
    ActionItem,
    EngagementStats,
    Mom,
    Participant,
    Room,
    RoomSummary,
    TranscriptEntry,
)


class TestParticipant:
    """Tests for Participant."""

    def test_display_name_defaults_to_user_id(self):
        assert Participant(user_id="u1").display_name == "u1"

    def test_blank_display_name_defaults_to_user_id(self):
        p = Participant.model_validate({"userId": "u1", "displayName": "  "})
        assert p.display_name == "u1"

    def test_accepts_wire_names(self):
        p = Participant.model_validate(
            {"userId": "u1", "displayName": "Ann", "connectionId": "c1"}
        )
        assert (p.user_id, p.display_name, p.connection_id) == ("u1", "Ann", "c1")
        assert p.joined_at > 0

    def test_requires_user_id(self):
        with pytest.raises(ValidationError):
            Participant(user_id="")


class TestTranscriptEntry:
    """Tests for TranscriptEntry."""

    def test_missing_ts_gets_arrival_time(self):
        assert TranscriptEntry(user_id="u1", text="hi").ts > 0

    def test_zero_ts_gets_arrival_time(self):
        assert TranscriptEntry(user_id="u1", text="hi", ts=0).ts > 0

    def test_keeps_client_ts(self):
        assert TranscriptEntry(user_id="u1", text="hi", ts=123).ts == 123

    def test_is_immutable(self):
        entry = TranscriptEntry(user_id="u1", text="hi")
        with pytest.raises(ValidationError):
            entry.text = "changed"  # type: ignore[misc]

    def test_requires_text(self):
        with pytest.raises(ValidationError):
            TranscriptEntry(user_id="u1", text="")


class TestMom:
    """Tests for Mom and its parts."""

    def test_defaults(self):
        mom = Mom(room="r1")
        assert mom.summary == ""
        assert mom.action_items == []
        assert mom.engagement == {}
        assert mom.confidence == 0.5
        assert mom.generated_at > 0

    def test_engagement_accepts_counts_and_stats(self):
        mom = Mom(
            room="r1",
            engagement={"u1": 2, "u2": {"turns": 1, "words": 4, "speakingShare": 1.0}},
        )
        assert mom.engagement["u1"] == 2
        assert isinstance(mom.engagement["u2"], EngagementStats)
        assert mom.to_wire()["engagement"]["u2"]["speakingShare"] == 1.0

    def test_confidence_is_bounded(self):
        with pytest.raises(ValidationError):
            Mom(room="r1", confidence=1.5)
        with pytest.raises(ValidationError):
            ActionItem(assignee="a", text="t", confidence=-0.1)

    def test_wire_names(self):
        item = ActionItem(assignee="Bob", text="Bob will fix it", due="Friday")
        data = Mom(room="r1", action_items=[item]).to_wire()
        assert data["actionItems"][0] == {
            "assignee": "Bob",
            "text": "Bob will fix it",
            "due": "Friday",
            "confidence": 0.6,
        }


class TestRoom:
    """Tests for Room state."""

    def test_vacancy(self):
        room = Room(key="r1")
        assert room.is_vacant
        room.transcripts.append(TranscriptEntry(user_id="u1", text="hi", ts=9))
        assert not room.is_vacant
        assert room.last_updated == 9

    def test_metrics_or_mom_do_not_keep_room_alive(self):
        room = Room(key="r1", mom=Mom(room="r1"), metrics={"u1": {}})
        assert room.is_vacant
        assert room.last_updated == 0

    def test_summary_wire(self):
        summary = RoomSummary(room="r1", participants=2, last_updated=5)
        assert summary.to_wire() == {"room": "r1", "participants": 2, "lastUpdated": 5}


class TestWireModel:
    """Tests for string handling on the wire."""

    def test_transcript_text_kept_verbatim(self):
        entry = TranscriptEntry(user_id="u1", text="  well, \n so ", ts=1)
        assert entry.to_wire()["text"] == "  well, \n so "
