"""Transcript entry model."""

from typing import Any

from pydantic import ConfigDict, Field, model_validator

from meetsync.models.base import WireModel, fill_display_name, now_ms


class TranscriptEntry(WireModel):
    """One timestamped utterance attributed to a user.

    Entries are immutable once appended to a room.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1)
    display_name: str = Field(min_length=1)
    text: str = Field(min_length=1)
    ts: int = Field(
        default_factory=now_ms,
        description="Client timestamp, or arrival time when not supplied",
    )

    @model_validator(mode="before")
    @classmethod
    def apply_defaults(cls, data: Any) -> Any:
        """Default display name to user id and a missing ts to arrival time."""
        data = fill_display_name(data)
        if isinstance(data, dict) and not data.get("ts"):
            data = {k: v for k, v in data.items() if k != "ts"}
        return data
