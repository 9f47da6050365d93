"""Minutes of meeting (MOM) models."""

from pydantic import Field

from meetsync.models.base import WireModel, now_ms


class ActionItem(WireModel):
    """A task detected in the transcript."""

    assignee: str = Field(description="Who is expected to do it")
    text: str = Field(description="Source utterance or task description")
    due: str | None = Field(default=None, description="Due date as spoken")
    confidence: float = Field(default=0.6, ge=0.0, le=1.0)


class EngagementStats(WireModel):
    """Per-user speaking statistics."""

    turns: int = Field(default=0, ge=0)
    words: int = Field(default=0, ge=0)
    speaking_share: float | None = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Fraction of all words spoken by this user",
    )


class Mom(WireModel):
    """Auto-generated minutes of meeting for a room.

    Only the latest generation is kept per room.
    """

    room: str
    generated_at: int = Field(
        default_factory=now_ms,
        description="Generation time in epoch milliseconds",
    )
    summary: str = ""
    action_items: list[ActionItem] = Field(default_factory=list)
    engagement: dict[str, int | EngagementStats] = Field(
        default_factory=dict,
        description="user id -> turn count, or richer stats",
    )
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)
