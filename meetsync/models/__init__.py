"""Data models for rooms, participants, transcripts and minutes.

- Participant: a user connected to a room
- TranscriptEntry: one utterance
- Mom / ActionItem / EngagementStats: generated minutes
- Room / RoomSummary: room state and listing entry
"""

from meetsync.models.base import WireModel, now_ms
from meetsync.models.mom import ActionItem, EngagementStats, Mom
from meetsync.models.participant import Participant
from meetsync.models.room import Room, RoomSummary
from meetsync.models.transcript import TranscriptEntry

__all__ = [
    # Base
    "WireModel",
    "now_ms",
    # Room
    "Room",
    "RoomSummary",
    "Participant",
    "TranscriptEntry",
    # Minutes
    "Mom",
    "ActionItem",
    "EngagementStats",
]
