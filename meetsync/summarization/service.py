"""Guarded access to the configured summarizer.

Any failure of the configured summarizer (exception, timeout, malformed
output) is logged and replaced by the rule-based generator, so callers
always get minutes back.
"""

import asyncio
import inspect
from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from meetsync.models import Mom, TranscriptEntry
from meetsync.summarization.base import Summarizer
from meetsync.summarization.rule_based import RuleBasedSummarizer

if TYPE_CHECKING:
    from meetsync.config import Settings

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 20.0


class SummarizationService:
    """Runs the configured summarizer with a timeout and a fallback.

    Sync summarizers run in a worker thread so a slow summary never
    blocks the event loop.
    """

    def __init__(
        self,
        summarizer: Summarizer | None = None,
        fallback: RuleBasedSummarizer | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """Initialize service.

        Args:
            summarizer: Preferred summarizer; None uses the fallback only
            fallback: Rule-based generator (a default one if None)
            timeout_seconds: Upper bound for one summarizer call
        """
        self._fallback = fallback or RuleBasedSummarizer()
        self._summarizer = summarizer
        self._timeout = timeout_seconds

    @property
    def backend(self) -> str:
        """Class name of the preferred summarizer."""
        return type(self._summarizer or self._fallback).__name__

    async def summarize(self, transcripts: Sequence[TranscriptEntry], room: str) -> Mom:
        """Produce minutes for ``room``, never raising."""
        entries = list(transcripts)
        if self._summarizer is None:
            return self._fallback.summarize(entries, room)

        try:
            result = await asyncio.wait_for(
                self._invoke(entries, room), timeout=self._timeout
            )
            mom = result if isinstance(result, Mom) else Mom.model_validate(result)
        except TimeoutError:
            logger.warning(
                "summarizer timed out, using rule-based minutes",
                room=room,
                backend=self.backend,
                timeout=self._timeout,
            )
            return self._fallback.summarize(entries, room)
        except Exception as e:
            logger.error(
                "summarizer failed, using rule-based minutes",
                room=room,
                backend=self.backend,
                error=str(e),
            )
            return self._fallback.summarize(entries, room)

        if mom.room != room:
            mom = mom.model_copy(update={"room": room})
        return mom

    async def _invoke(self, entries: list[TranscriptEntry], room: str) -> object:
        summarize = self._summarizer.summarize
        if inspect.iscoroutinefunction(summarize):
            return await summarize(entries, room)
        result = await asyncio.to_thread(summarize, entries, room)
        if inspect.isawaitable(result):
            result = await result
        return result


def build_summarization_service(settings: "Settings") -> SummarizationService:
    """Create the service for the backend selected in configuration."""
    summarizer: Summarizer | None = None
    if settings.summarizer_backend == "llm":
        from meetsync.summarization.llm import LLMSummarizer
        from meetsync.summarization.llm_client import LLMClient

        client = LLMClient(model=settings.anthropic_model)
        if not client.is_configured:
            logger.warning("LLM summarizer selected without ANTHROPIC_API_KEY")
        summarizer = LLMSummarizer(client)

    service = SummarizationService(
        summarizer=summarizer,
        timeout_seconds=settings.summarizer_timeout_seconds,
    )
    logger.info("Summarization configured", backend=service.backend)
    return service
