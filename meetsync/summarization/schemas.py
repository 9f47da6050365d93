"""Pydantic models for LLM minutes output.

These are intentionally different from the ``Mom`` domain model: the LLM
does not produce room keys, timestamps or engagement statistics, which are
added when converting to a ``Mom``.
"""

from pydantic import BaseModel, Field


class ExtractedActionItem(BaseModel):
    """Schema for LLM extraction of action items."""

    description: str = Field(
        description="What needs to be done - clear, actionable statement"
    )
    assignee_name: str | None = Field(
        default=None,
        description="Name of person assigned, exactly as mentioned in transcript",
    )
    due_date_raw: str | None = Field(
        default=None,
        description="Due date as mentioned (e.g., 'Friday', 'end of month')",
    )
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description="Confidence this is a real action item (0.0-1.0)",
    )


class ExtractedMinutes(BaseModel):
    """Summary and action items for one meeting transcript."""

    summary: str = Field(description="Concise abstractive summary of the meeting")
    action_items: list[ExtractedActionItem] = Field(
        default_factory=list,
        description="Action items committed to during the meeting",
    )
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description="Overall confidence in the minutes (0.0-1.0)",
    )
