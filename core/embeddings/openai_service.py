"""
OpenAI Embedding Service - Embedding generation via the OpenAI API.

Works with any OpenAI-compatible endpoint through ``base_url``. Every call is
bounded by ``timeout_seconds``; the client's own retries are disabled and
transient errors are retried here with tenacity up to ``max_attempts``.
"""
from typing import Any, List, Optional
import logging

import openai
from openai import AsyncOpenAI
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.config_loader import EmbeddingConfig
from core.embeddings.interfaces import EmbeddingProvider
from core.exceptions import ProviderFailureError, ProviderUnavailableError

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = (
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)

MAX_RETRY_AFTER_SECONDS = 30


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Embedding rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient embedding API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _retry_after_seconds(exc: BaseException) -> float:
    """Seconds from a rate limit response's ``retry-after`` header, 0.0 if absent."""
    response = getattr(exc, 'response', None)
    if response is None:
        return 0.0
    try:
        return max(0.0, float(response.headers.get("retry-after", "")))
    except (TypeError, ValueError):
        return 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Honour ``retry-after`` on rate limits, otherwise exponential backoff."""
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _retry_after_seconds(exc)
        if wait > 0:
            return min(wait, MAX_RETRY_AFTER_SECONDS)

    exp = wait_exponential(multiplier=1, min=1, max=10)
    return exp(retry_state)


class OpenAIEmbeddingService(EmbeddingProvider):
    """
    OpenAI embedding provider.

    embed_text never raises; failures are logged and returned as None.
    """

    def __init__(
        self,
        config: Optional[EmbeddingConfig] = None,
        client: Optional[Any] = None
    ):
        self.config = config or EmbeddingConfig()
        self.model = self.config.model
        self.dimensions = self.config.dimensions

        if client is not None:
            self.client = client
        else:
            if not self.config.api_key:
                raise ProviderUnavailableError("No embedding API key configured")

            client_kwargs = {
                'api_key': self.config.api_key,
                'timeout': self.config.timeout_seconds,
                'max_retries': 0,
            }
            if self.config.base_url:
                client_kwargs['base_url'] = self.config.base_url
            self.client = AsyncOpenAI(**client_kwargs)

    async def _request_embedding(self, text: str) -> List[float]:
        """Single provider round trip, retried on transient errors."""
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(TRANSIENT_ERRORS),
                wait=_wait_respecting_retry_after,
                stop=stop_after_attempt(self.config.max_attempts),
                before_sleep=_log_retry,
                reraise=True,
            ):
                with attempt:
                    response = await self.client.embeddings.create(
                        input=text,
                        model=self.model,
                        dimensions=self.dimensions
                    )
        except openai.OpenAIError as e:
            raise ProviderFailureError(f"Embedding request failed: {e}") from e

        try:
            embedding = [float(x) for x in response.data[0].embedding]
        except (AttributeError, IndexError, TypeError, ValueError) as e:
            raise ProviderFailureError(f"Malformed embedding response: {e}") from e

        if len(embedding) != self.dimensions:
            raise ProviderFailureError(
                f"Expected {self.dimensions} dimensions, provider returned {len(embedding)}"
            )
        return embedding

    async def embed_text(self, text: str) -> Optional[List[float]]:
        """Embed ``text`` (truncated to max_input_chars). None on blank input or failure."""
        if not text or not text.strip():
            return None

        text = text[:self.config.max_input_chars]
        try:
            return await self._request_embedding(text)
        except ProviderFailureError as e:
            logger.warning(f"Embedding generation failed: {e}")
            return None
