"""Typed outbound events.

- ParticipantsUpdate: a room's participant list changed
- SignalDelivery: a WebRTC signal relayed to one or more peers
- TranscriptBroadcast: a transcript entry was appended
- MomUpdate: new minutes were generated for a room
- ParticipantsMetrics: a participant's metrics were replaced
- ErrorNotice: an inbound event was rejected
"""

from typing import Any, ClassVar

from pydantic import Field

from meetsync.events.base import Event
from meetsync.models import Mom, Participant, TranscriptEntry
from meetsync.signaling.schemas import Signal


class ParticipantsUpdate(Event):
    """Emitted after a join, leave or disconnect changes a room's members."""

    wire_name: ClassVar[str] = "participants_update"

    participants: tuple[Participant, ...] = Field(default=())

    def payload(self) -> dict[str, Any]:
        return {
            "room": self.room,
            "participants": [p.to_wire() for p in self.participants],
        }


class SignalDelivery(Event):
    """Emitted when a signal is relayed; payload is the signal as sent."""

    wire_name: ClassVar[str] = "signal"

    signal: Signal

    def payload(self) -> dict[str, Any]:
        return self.signal.to_wire()


class TranscriptBroadcast(Event):
    """Emitted after a transcript entry is appended to a room."""

    wire_name: ClassVar[str] = "transcript_broadcast"

    entry: TranscriptEntry

    def payload(self) -> dict[str, Any]:
        return {"room": self.room, "entry": self.entry.to_wire()}


class MomUpdate(Event):
    """Emitted after new minutes are stored for a room."""

    wire_name: ClassVar[str] = "mom_update"

    mom: Mom

    def payload(self) -> dict[str, Any]:
        return self.mom.to_wire()


class ParticipantsMetrics(Event):
    """Emitted after a participant's metrics are replaced."""

    wire_name: ClassVar[str] = "participants_metrics"

    metrics: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def payload(self) -> dict[str, Any]:
        return {"room": self.room, "metrics": self.metrics}


class ErrorNotice(Event):
    """Sent to the originator of a rejected event only."""

    wire_name: ClassVar[str] = "error"

    code: str = Field(description="bad_request | invalid_target")
    message: str

    def payload(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


OUTBOUND_EVENTS: tuple[type[Event], ...] = (
    ParticipantsUpdate,
    SignalDelivery,
    TranscriptBroadcast,
    MomUpdate,
    ParticipantsMetrics,
    ErrorNotice,
)
