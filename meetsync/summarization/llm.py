"""LLM-backed minutes generator.

Summary and action items come from the model; engagement statistics are
computed from the transcript directly since they need no language
understanding.
"""

from collections.abc import Sequence

import structlog

from meetsync.models import ActionItem, EngagementStats, Mom, TranscriptEntry
from meetsync.summarization.llm_client import LLMClient
from meetsync.summarization.prompts import MINUTES_PROMPT
from meetsync.summarization.rule_based import EMPTY_CONFIDENCE, EMPTY_SUMMARY
from meetsync.summarization.schemas import ExtractedMinutes

logger = structlog.get_logger()


def format_transcript(transcripts: Sequence[TranscriptEntry]) -> str:
    """Format entries as ``Name: text`` lines for the prompt."""
    return "\n".join(f"{t.display_name}: {t.text}" for t in transcripts)


def engagement_stats(
    transcripts: Sequence[TranscriptEntry],
) -> dict[str, EngagementStats]:
    """Speaking turns, word counts and share of words per user id."""
    turns: dict[str, int] = {}
    words: dict[str, int] = {}
    for entry in transcripts:
        turns[entry.user_id] = turns.get(entry.user_id, 0) + 1
        words[entry.user_id] = words.get(entry.user_id, 0) + len(entry.text.split())

    total = sum(words.values())
    return {
        user_id: EngagementStats(
            turns=turns[user_id],
            words=words[user_id],
            speaking_share=round(words[user_id] / total, 2) if total else None,
        )
        for user_id in turns
    }


class LLMSummarizer:
    """Abstractive minutes via Anthropic structured outputs."""

    def __init__(self, llm_client: LLMClient, confidence_threshold: float = 0.5):
        """Initialize summarizer.

        Args:
            llm_client: LLM client for structured extraction
            confidence_threshold: Minimum confidence to keep an action item
        """
        self._llm_client = llm_client
        self._confidence_threshold = confidence_threshold

    async def summarize(self, transcripts: Sequence[TranscriptEntry], room: str) -> Mom:
        if not transcripts:
            return Mom(room=room, summary=EMPTY_SUMMARY, confidence=EMPTY_CONFIDENCE)

        prompt = MINUTES_PROMPT.format(transcript=format_transcript(transcripts))
        extracted = await self._llm_client.extract(prompt, ExtractedMinutes)

        items = [
            ActionItem(
                assignee=item.assignee_name or "unassigned",
                text=item.description,
                due=item.due_date_raw,
                confidence=item.confidence,
            )
            for item in extracted.action_items
            if item.confidence >= self._confidence_threshold
        ]
        logger.debug(
            "llm minutes extracted",
            room=room,
            action_items=len(items),
            dropped=len(extracted.action_items) - len(items),
        )

        return Mom(
            room=room,
            summary=extracted.summary,
            action_items=items,
            engagement=engagement_stats(transcripts),
            confidence=extracted.confidence,
        )
