"""Summarization port: the capability that turns transcripts into minutes."""

from collections.abc import Awaitable, Sequence
from typing import Protocol, runtime_checkable

from meetsync.models import Mom, TranscriptEntry


@runtime_checkable
class Summarizer(Protocol):
    """Anything that can produce minutes for a room.

    Implementations read only their arguments. They may be sync or async,
    may be slow, and may fail; ``SummarizationService`` guards every call.
    """

    def summarize(
        self,
        transcripts: Sequence[TranscriptEntry],
        room: str,
    ) -> Mom | Awaitable[Mom]: ...
