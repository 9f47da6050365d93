"""Inbound session event payloads.

Each model lists the fields an event requires; anything missing is
reported back to the originator as ``bad_request``.
"""

from typing import Any

from pydantic import Field, ValidationError, field_validator

from meetsync.models.base import WireModel


class JoinRoom(WireModel):
    """``join-room {room, userId, displayName?}``"""

    room: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    display_name: str | None = None


class LeaveRoom(WireModel):
    """``leave-room {room, userId}``; a no-op unless both are present."""

    room: str | None = None
    user_id: str | None = None


class TranscriptSubmission(WireModel):
    """``transcript {room, userId, displayName?, text, ts?}``"""

    room: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    display_name: str | None = None
    text: str = Field(min_length=1)
    ts: int | None = None


class MomRequest(WireModel):
    """``request_mom {room}``"""

    room: str = Field(min_length=1)


class StatsUpdate(WireModel):
    """``stats_update {room, userId, stats}``; stats is an arbitrary map."""

    room: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    stats: dict[str, Any] = Field(default_factory=dict)

    @field_validator("stats", mode="before")
    @classmethod
    def none_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v


def describe_validation_error(event: str, exc: ValidationError) -> str:
    """Human-readable list of the offending fields.

    Example: ``"join-room: missing or invalid field(s): room, userId"``
    """
    fields: list[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        name = ".".join(str(part) for part in loc) if loc else "payload"
        if name not in fields:
            fields.append(name)
    return f"{event}: missing or invalid field(s): {', '.join(fields)}"
