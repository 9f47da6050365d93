"""Session event handling: inbound schemas and the event router."""

from meetsync.sessions.router import SessionEventRouter
from meetsync.sessions.schemas import (
    JoinRoom,
    LeaveRoom,
    MomRequest,
    StatsUpdate,
    TranscriptSubmission,
)

__all__ = [
    "SessionEventRouter",
    "JoinRoom",
    "LeaveRoom",
    "TranscriptSubmission",
    "MomRequest",
    "StatsUpdate",
]
