"""Outbound notification infrastructure.

Provides:
- Event: Base class for outbound notifications
- EventBus: In-process pub/sub used as the notification port
- Typed events for every message the core sends to clients
"""

from meetsync.events.base import Event
from meetsync.events.bus import EventBus
from meetsync.events.types import (
    OUTBOUND_EVENTS,
    ErrorNotice,
    MomUpdate,
    ParticipantsMetrics,
    ParticipantsUpdate,
    SignalDelivery,
    TranscriptBroadcast,
)

__all__ = [
    # Base
    "Event",
    # Infrastructure
    "EventBus",
    # Event types
    "OUTBOUND_EVENTS",
    "ParticipantsUpdate",
    "SignalDelivery",
    "TranscriptBroadcast",
    "MomUpdate",
    "ParticipantsMetrics",
    "ErrorNotice",
]
