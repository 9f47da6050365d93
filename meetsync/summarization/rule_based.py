"""Deterministic rule-based minutes generator.

Used directly when no other summarizer is configured and as the fallback
whenever the configured one fails.
"""

import re
from collections.abc import Sequence

from meetsync.models import ActionItem, Mom, TranscriptEntry

EMPTY_SUMMARY = "No transcript available yet."
EMPTY_CONFIDENCE = 0.2
BASE_CONFIDENCE = 0.5
CONFIDENCE_PER_ACTION = 0.05
MAX_CONFIDENCE_BONUS = 0.4
ACTION_CONFIDENCE = 0.6

SUMMARY_TAIL = 6
SUMMARY_MAX_CHARS = 800
MAX_ACTION_ITEMS = 10

ACTION_KEYWORDS = re.compile(
    r"\b(action|todo|will|by|due|assign|please|follow up|deadline"
    r"|review|implement|test|fix)\b",
    re.IGNORECASE,
)
LEADING_NAME = re.compile(r"^\s*([A-Z][a-z0-9_-]{1,20})\b")
NAME_WILL = re.compile(r"\b([A-Z][a-z0-9_-]{1,20})\s+will\b")
DUE_DATE = re.compile(r"\b(?:by|due)\s+([A-Za-z0-9\-/]+)", re.IGNORECASE)


def infer_assignee(text: str, default: str) -> str:
    """Guess who an action belongs to.

    Tries the leading capitalized token ("Alice: send it"), then the
    "<Name> will" pattern, then falls back to ``default``. A leading token
    that is itself an action keyword ("Please ...") is not a name.
    """
    lead = LEADING_NAME.match(text)
    if lead and not ACTION_KEYWORDS.fullmatch(lead.group(1)):
        return lead.group(1)
    will = NAME_WILL.search(text)
    if will:
        return will.group(1)
    return default


def infer_due(text: str) -> str | None:
    """Return the token after "by" or "due", if any."""
    match = DUE_DATE.search(text)
    return match.group(1) if match else None


def extract_action_items(transcripts: Sequence[TranscriptEntry]) -> list[ActionItem]:
    """One action item per entry that mentions an action keyword."""
    return [
        ActionItem(
            assignee=infer_assignee(entry.text, entry.display_name),
            text=entry.text,
            due=infer_due(entry.text),
            confidence=ACTION_CONFIDENCE,
        )
        for entry in transcripts
        if ACTION_KEYWORDS.search(entry.text)
    ]


def speaking_turns(transcripts: Sequence[TranscriptEntry]) -> dict[str, int]:
    """Number of transcript entries per user id."""
    counts: dict[str, int] = {}
    for entry in transcripts:
        counts[entry.user_id] = counts.get(entry.user_id, 0) + 1
    return counts


class RuleBasedSummarizer:
    """Keyword and tail-extract summarizer with no external dependencies."""

    def summarize(self, transcripts: Sequence[TranscriptEntry], room: str) -> Mom:
        if not transcripts:
            return Mom(room=room, summary=EMPTY_SUMMARY, confidence=EMPTY_CONFIDENCE)

        tail = transcripts[-SUMMARY_TAIL:]
        summary = " | ".join(f"{t.display_name}: {t.text}" for t in tail)

        actions = extract_action_items(transcripts)
        bonus = min(MAX_CONFIDENCE_BONUS, CONFIDENCE_PER_ACTION * len(actions))

        return Mom(
            room=room,
            summary=summary[:SUMMARY_MAX_CHARS],
            action_items=actions[:MAX_ACTION_ITEMS],
            engagement=speaking_turns(transcripts),
            confidence=round(BASE_CONFIDENCE + bonus, 2),
        )
