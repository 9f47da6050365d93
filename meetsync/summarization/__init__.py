"""Summarization port and periodic minutes generation.

Provides:
- Summarizer: protocol for minutes generators
- RuleBasedSummarizer: deterministic built-in generator and fallback
- LLMSummarizer: Anthropic-backed generator (optional)
- SummarizationService: timeout + fallback guard around the configured one
- MomScanner: periodic scan for rooms with new transcript activity
"""

from meetsync.summarization.base import Summarizer
from meetsync.summarization.rule_based import RuleBasedSummarizer
from meetsync.summarization.service import (
    SummarizationService,
    build_summarization_service,
)

__all__ = [
    "Summarizer",
    "RuleBasedSummarizer",
    "SummarizationService",
    "build_summarization_service",
]
