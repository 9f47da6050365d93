"""Room state and the room listing snapshot."""

from dataclasses import dataclass, field
from typing import Any

from meetsync.models.base import WireModel
from meetsync.models.mom import Mom
from meetsync.models.participant import Participant
from meetsync.models.transcript import TranscriptEntry


@dataclass
class Room:
    """Mutable state of one room, owned by the RoomStore."""

    key: str
    participants: dict[str, Participant] = field(default_factory=dict)
    transcripts: list[TranscriptEntry] = field(default_factory=list)
    mom: Mom | None = None
    metrics: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def is_vacant(self) -> bool:
        """True when the room has neither participants nor transcripts."""
        return not self.participants and not self.transcripts

    @property
    def last_updated(self) -> int:
        """Timestamp of the newest transcript entry, 0 if none."""
        return self.transcripts[-1].ts if self.transcripts else 0


class RoomSummary(WireModel):
    """Listing entry for a live room."""

    room: str
    participants: int
    last_updated: int
