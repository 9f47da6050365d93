"""Participant model for users connected to a room."""

from typing import Any

from pydantic import Field, model_validator

from meetsync.models.base import WireModel, fill_display_name, now_ms


class Participant(WireModel):
    """One connected user's presence record within one room.

    A user id maps to at most one Participant per room; joining again
    under the same id replaces the earlier record (reconnect).
    """

    user_id: str = Field(min_length=1, description="Caller-supplied user id")
    display_name: str = Field(min_length=1, description="Name shown to others")
    connection_id: str | None = Field(
        default=None,
        description="Opaque transport connection id used for targeted delivery",
    )
    joined_at: int = Field(
        default_factory=now_ms,
        description="Join time in epoch milliseconds",
    )

    @model_validator(mode="before")
    @classmethod
    def default_display_name(cls, data: Any) -> Any:
        """Fall back to the user id when no display name is given."""
        return fill_display_name(data)
