"""
Unit tests for the OpenAI embedding service.

Tests verify:
- Requests carry model, dimensions and truncated input
- Every provider failure becomes None instead of an exception
- Transient errors are retried only when max_attempts allows it
"""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from core.config_loader import EmbeddingConfig
from core.embeddings.openai_service import OpenAIEmbeddingService
from core.exceptions import ProviderUnavailableError


def embedding_response(vector):
    return SimpleNamespace(data=[SimpleNamespace(embedding=vector)])


def timeout_error():
    return openai.APITimeoutError(request=httpx.Request("POST", "https://api.openai.com/v1/embeddings"))


@pytest.fixture
def config():
    return EmbeddingConfig(api_key="test", dimensions=3, max_input_chars=10)


@pytest.fixture
def service(config):
    """Create service with mocked client."""
    svc = OpenAIEmbeddingService(config)
    svc.client = MagicMock()
    svc.client.embeddings.create = AsyncMock(return_value=embedding_response([0.1, 0.2, 0.3]))
    return svc


class TestClientConstruction:

    def test_client_has_timeout_and_no_builtin_retries(self):
        svc = OpenAIEmbeddingService(EmbeddingConfig(api_key="test", timeout_seconds=7))

        assert svc.client.max_retries == 0
        assert svc.client.timeout == 7
        assert svc.model == "text-embedding-3-small"
        assert svc.dimensions == 1536

    def test_missing_api_key_raises(self):
        with pytest.raises(ProviderUnavailableError):
            OpenAIEmbeddingService(EmbeddingConfig(api_key=None))

    def test_injected_client_needs_no_key(self):
        client = MagicMock()
        svc = OpenAIEmbeddingService(EmbeddingConfig(), client=client)

        assert svc.client is client


class TestEmbedText:

    @pytest.mark.asyncio
    async def test_returns_vector(self, service):
        assert await service.embed_text("python") == [0.1, 0.2, 0.3]

        service.client.embeddings.create.assert_awaited_once_with(
            input="python",
            model="text-embedding-3-small",
            dimensions=3
        )

    @pytest.mark.asyncio
    async def test_input_truncated(self, service):
        await service.embed_text("abcdefghijklmnop")

        call_kwargs = service.client.embeddings.create.call_args.kwargs
        assert call_kwargs["input"] == "abcdefghij"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   ", None])
    async def test_blank_input_skips_provider(self, service, text):
        assert await service.embed_text(text) is None
        service.client.embeddings.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_dimensions_is_none(self, service):
        service.client.embeddings.create.return_value = embedding_response([0.1, 0.2])

        assert await service.embed_text("python") is None

    @pytest.mark.asyncio
    async def test_malformed_response_is_none(self, service):
        service.client.embeddings.create.return_value = SimpleNamespace(data=[])

        assert await service.embed_text("python") is None

    @pytest.mark.asyncio
    async def test_timeout_is_none_and_not_retried_by_default(self, service):
        service.client.embeddings.create.side_effect = timeout_error()

        assert await service.embed_text("python") is None
        assert service.client.embeddings.create.await_count == 1

    @pytest.mark.asyncio
    async def test_transient_error_retried_when_allowed(self, service):
        service.config.max_attempts = 2
        service.client.embeddings.create.side_effect = [
            timeout_error(),
            embedding_response([1.0, 0.0, 0.0]),
        ]

        with patch("core.embeddings.openai_service._wait_respecting_retry_after", return_value=0):
            result = await service.embed_text("python")

        assert result == [1.0, 0.0, 0.0]
        assert service.client.embeddings.create.await_count == 2

    @pytest.mark.asyncio
    async def test_embed_agent_uses_profile_text(self, service):
        agent = SimpleNamespace(name="Bot", bio=None, tagline=None, skills=[])

        await service.embed_agent(agent)

        call_kwargs = service.client.embeddings.create.call_args.kwargs
        assert call_kwargs["input"] == "Agent: Bot"
