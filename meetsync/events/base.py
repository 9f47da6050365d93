"""Base class for outbound notifications."""

from datetime import UTC, datetime
from typing import Any, ClassVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """Base class for everything the core asks the transport to deliver.

    Events are immutable and carry their own recipient list, computed by
    the producer right after the state change that caused them. The
    transport only looks up ``recipients`` and sends ``to_wire()``.

    Attributes:
        event_id: Unique identifier for this event instance
        timestamp: When the event was produced
        room: Room the event concerns, if any
        recipients: Connection ids that should receive the event
    """

    model_config = ConfigDict(
        frozen=True,
    )

    wire_name: ClassVar[str] = "event"

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the event was produced",
    )
    room: str | None = Field(default=None, description="Room concerned")
    recipients: tuple[str, ...] = Field(
        default=(),
        description="Connection ids to deliver to",
    )

    @property
    def event_type(self) -> str:
        """Return the event type name (class name)."""
        return self.__class__.__name__

    def payload(self) -> dict[str, Any]:
        """Wire payload for the ``data`` part of the frame."""
        return {"room": self.room}

    def to_wire(self) -> dict[str, Any]:
        """Frame sent to clients: ``{"event": name, "data": payload}``."""
        return {"event": self.wire_name, "data": self.payload()}
