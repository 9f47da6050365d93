"""Prompt for LLM minutes generation.

Follows the "instructions after content" pattern: the transcript comes
first, then the extraction instructions.
"""

MINUTES_PROMPT = """You are an expert meeting assistant writing minutes of meeting.

Transcript:
{transcript}

---

Write minutes for the transcript above.

Provide:
- summary: 2-5 sentences covering key decisions, outcomes and open questions. Do not quote the transcript line by line.
- action_items: every commitment someone made to do something. For each:
  - description: What needs to be done (clear, actionable statement)
  - assignee_name: Name of the person responsible, exactly as it appears in the transcript (null if unclear)
  - due_date_raw: Due date as spoken (e.g., "Friday", "end of Q1") - null if not mentioned
  - confidence: Your confidence this is a real action item (0.0-1.0)
- confidence: Your overall confidence that the minutes reflect the meeting (0.0-1.0)

CONFIDENCE RUBRIC:
- 0.9-1.0: Explicit commitment with clear owner ("I will send the report")
- 0.7-0.9: Implied commitment or clear task with likely owner
- 0.5-0.7: Task mentioned but owner unclear or commitment tentative
- Below 0.5: DO NOT EXTRACT as an action item

If the transcript is too short to summarize, say so in the summary and use a low confidence."""
