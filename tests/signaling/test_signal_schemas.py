"""Tests for tagged signal variants."""

import pytest
from pydantic import ValidationError

from meetsync.signaling import (
    AnswerSignal,
    IceCandidateSignal,
    OfferSignal,
    parse_signal,
)


class TestParseSignal:
    """Tests for boundary validation of signals."""

    def test_offer(self) -> None:
        signal = parse_signal(
            {
                "room": "r1",
                "from": "u1",
                "to": "u2",
                "type": "offer",
                "data": {"sdp": "v=0...", "sdpType": "offer"},
            }
        )
        assert isinstance(signal, OfferSignal)
        assert signal.from_ == "u1"
        assert signal.data.sdp_type == "offer"

    def test_answer_without_target(self) -> None:
        signal = parse_signal(
            {"room": "r1", "from": "u2", "type": "answer", "data": {"sdp": "v=0"}}
        )
        assert isinstance(signal, AnswerSignal)
        assert signal.to is None

    def test_ice_candidate_object(self) -> None:
        signal = parse_signal(
            {
                "room": "r1",
                "from": "u1",
                "type": "ice-candidate",
                "data": {"candidate": {"candidate": "candidate:1 1 udp", "sdpMid": "0"}},
            }
        )
        assert isinstance(signal, IceCandidateSignal)

    def test_unknown_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_signal({"room": "r1", "from": "u1", "type": "bye", "data": {}})

    def test_offer_without_sdp_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_signal({"room": "r1", "from": "u1", "type": "offer", "data": {}})

    def test_missing_routing_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_signal({"type": "offer", "data": {"sdp": "v=0"}})

    def test_wire_form_round_trips_fields(self) -> None:
        payload = {
            "room": "r1",
            "from": "u1",
            "type": "ice-candidate",
            "data": {"candidate": "candidate:1", "sdpMid": "0", "sdpMLineIndex": 0},
        }
        assert parse_signal(payload).to_wire() == payload

    def test_sdp_forwarded_unchanged(self) -> None:
        """SDP lines keep their CRLF endings, including the last one."""
        sdp = "v=0\r\no=- 1 2 IN IP4 127.0.0.1\r\ns=-\r\n"
        payload = {
            "room": "r1",
            "from": "u1",
            "type": "offer",
            "data": {"sdp": sdp, "sdpType": "offer"},
        }
        assert parse_signal(payload).to_wire() == payload

    def test_candidate_string_forwarded_unchanged(self) -> None:
        candidate = " candidate:1 1 udp 2122260223 10.0.0.1 54400 typ host "
        signal = parse_signal(
            {
                "room": "r1",
                "from": "u1",
                "type": "ice-candidate",
                "data": {"candidate": candidate},
            }
        )
        assert signal.to_wire()["data"]["candidate"] == candidate
