#!/usr/bin/env python3
"""
Embedding Backfill - Batch-compute profile embeddings for agents lacking one.

Agents are processed in fixed-size batches. Within a batch the provider calls
run concurrently and each vector is stored and committed as soon as it
arrives, so a failure only loses that one agent. Batches are separated by a
pause to stay under provider rate limits.
"""
import asyncio
import logging
from typing import Any, List, Optional, Tuple

from core.config_loader import EMBEDDING_DIMENSIONS, BackfillConfig
from core.embeddings.interfaces import EmbeddingProvider
from core.embeddings.profile_text import build_agent_profile_text
from core.exceptions import ProviderUnavailableError
from core.matcher.models import BackfillResult, EmbeddingStats
from core.utils import round_half_up

logger = logging.getLogger(__name__)


class EmbeddingBackfillJob:
    """Computes and stores agent embeddings through an AgentRepository."""

    def __init__(
        self,
        repo,
        embedding_client: Optional[EmbeddingProvider] = None,
        config: Optional[BackfillConfig] = None
    ):
        self.repo = repo
        self.embedding_client = embedding_client
        self.config = config or BackfillConfig()

    def _require_client(self) -> EmbeddingProvider:
        if self.embedding_client is None:
            raise ProviderUnavailableError("Cannot compute embeddings: no embedding API key configured")
        return self.embedding_client

    async def _embed_and_store(self, agent_id: Any, profile_text: str) -> bool:
        client = self._require_client()
        try:
            embedding = await client.embed_text(profile_text) if profile_text.strip() else None
            if embedding is None:
                logger.warning(f"No embedding produced for agent {agent_id}")
                return False

            if not self.repo.store_embedding(agent_id, embedding):
                return False
            self.repo.commit()
            return True
        except Exception as e:
            logger.error(f"Failed to process agent {agent_id} in backfill: {e}")
            self.repo.rollback()
            return False

    async def run(
        self,
        batch_size: Optional[int] = None,
        delay_ms: Optional[int] = None,
        stop_event: Optional[asyncio.Event] = None
    ) -> BackfillResult:
        """
        Embed every active agent that has no embedding yet.

        Args:
            batch_size: Agents per batch (config default when None)
            delay_ms: Pause between batches in milliseconds (config default when None)
            stop_event: When set, the run stops before the next batch

        Returns:
            BackfillResult with totals; ``cancelled`` is True if stopped early

        Raises:
            ProviderUnavailableError: If no embedding client is configured
        """
        self._require_client()
        batch_size = max(1, batch_size if batch_size is not None else self.config.batch_size)
        delay_ms = max(0, delay_ms if delay_ms is not None else self.config.delay_ms)

        # Snapshot profiles up front; per-agent commits expire loaded instances
        pending: List[Tuple[Any, str]] = [
            (agent.id, build_agent_profile_text(agent))
            for agent in self.repo.get_agents_without_embeddings()
        ]
        result = BackfillResult(total=len(pending))
        logger.info(f"Starting embedding backfill for {result.total} agents")

        for start in range(0, len(pending), batch_size):
            if stop_event is not None and stop_event.is_set():
                logger.info(f"Backfill stopped after {result.batches} batches")
                result.cancelled = True
                break

            batch = pending[start:start + batch_size]
            outcomes = await asyncio.gather(*(
                self._embed_and_store(agent_id, text) for agent_id, text in batch
            ))
            succeeded = sum(1 for ok in outcomes if ok)
            result.processed += succeeded
            result.failed += len(outcomes) - succeeded
            result.batches += 1

            logger.info(f"Backfill progress: {start + len(batch)}/{result.total}")

            if start + batch_size < len(pending) and delay_ms > 0:
                await self._pause(delay_ms / 1000, stop_event)

        logger.info(f"Backfill complete: {result.processed} processed, {result.failed} failed")
        return result

    @staticmethod
    async def _pause(seconds: float, stop_event: Optional[asyncio.Event]) -> None:
        """Sleep between batches, waking early if a stop is requested."""
        if stop_event is None:
            await asyncio.sleep(seconds)
            return
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    async def compute_agent_embedding(self, agent_id: Any) -> bool:
        """
        Recompute and overwrite one agent's embedding.

        Returns:
            True if a new vector was stored, False if the agent is missing or
            the provider produced nothing

        Raises:
            ProviderUnavailableError: If no embedding client is configured
        """
        client = self._require_client()
        agent = self.repo.get_by_id(agent_id)
        if agent is None:
            logger.warning(f"Agent {agent_id} not found for embedding")
            return False

        embedding = await client.embed_agent(agent)
        if embedding is None:
            return False

        stored = self.repo.store_embedding(agent_id, embedding)
        if stored:
            self.repo.commit()
            logger.info(f"Computed and stored embedding for agent {agent_id} ({agent.name})")
        return stored

    def get_embedding_stats(self) -> EmbeddingStats:
        """Embedding coverage over active agents."""
        total, with_embeddings = self.repo.count_embedding_coverage()
        coverage = round_half_up(with_embeddings / total * 100) if total > 0 else 0
        client = self.embedding_client

        return EmbeddingStats(
            total_agents=total,
            with_embeddings=with_embeddings,
            without_embeddings=total - with_embeddings,
            coverage_percent=coverage,
            embeddings_available=client is not None,
            model=getattr(client, 'model', None) or None,
            dimensions=getattr(client, 'dimensions', None) or EMBEDDING_DIMENSIONS
        )
