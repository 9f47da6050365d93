"""LLM client wrapper for Anthropic structured outputs."""

import asyncio
from typing import TypeVar

import structlog
from anthropic import Anthropic, APIConnectionError, APIError, RateLimitError
from pydantic import BaseModel
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from meetsync.config import settings

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)

# Transient failures worth another attempt before giving up
RETRIABLE_EXCEPTIONS = (APIConnectionError, RateLimitError)


class LLMClientError(Exception):
    """Raised when LLM extraction fails."""

    pass


class LLMClient:
    """Anthropic client wrapper with structured output support.

    Uses client.beta.messages.parse with Pydantic models for
    guaranteed schema-valid output. The blocking SDK call runs in a
    worker thread so the event loop keeps serving other rooms.
    """

    def __init__(
        self,
        client: Anthropic | None = None,
        model: str | None = None,
        max_attempts: int = 3,
    ):
        """Initialize LLM client.

        Args:
            client: Optional Anthropic client for dependency injection.
                   If not provided, creates one from settings.
            model: Model name (defaults to settings.anthropic_model)
            max_attempts: Attempts for transient API failures
        """
        if client is not None:
            self._client = client
        elif settings.anthropic_api_key:
            self._client = Anthropic(api_key=settings.anthropic_api_key)
        else:
            # Allow initialization without API key for testing
            self._client = None
        self._model = model or settings.anthropic_model
        self._max_attempts = max_attempts

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def extract(self, prompt: str, response_model: type[T]) -> T:
        """Extract structured data from text using LLM.

        Args:
            prompt: The user prompt containing text to extract from
            response_model: Pydantic model defining the output schema

        Returns:
            Parsed response matching the response_model type

        Raises:
            LLMClientError: If extraction fails
        """
        if self._client is None:
            raise LLMClientError(
                "Anthropic client not initialized. "
                "Set ANTHROPIC_API_KEY environment variable."
            )

        @retry(
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=8),
            retry=retry_if_exception_type(RETRIABLE_EXCEPTIONS),
            before_sleep=before_sleep_log(logger, log_level=20),  # INFO level
            reraise=True,
        )
        def call() -> T:
            response = self._client.beta.messages.parse(
                model=self._model,
                max_tokens=4096,
                betas=["structured-outputs-2025-11-13"],
                messages=[{"role": "user", "content": prompt}],
                output_format=response_model,
            )
            return response.parsed_output

        try:
            return await asyncio.to_thread(call)
        except APIError as e:
            raise LLMClientError(f"Anthropic API error: {e}") from e
        except Exception as e:
            raise LLMClientError(f"Extraction failed: {e}") from e
