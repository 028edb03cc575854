#!/usr/bin/env python3
"""
Matcher Service - Semantic agent search over stored profile embeddings.

Flow:
1. Embed the query (no client or a failed embed selects the text fallback)
2. Score every active embedded agent that passes the filters by cosine similarity
3. Keep hits at or above min_similarity, best first, up to limit
4. Fill remaining slots with text-matched agents that have no embedding yet,
   reported separately as supplements

Provider problems never reach the caller; store read failures do.
"""
from typing import Any, List, Optional
import logging

from core.config_loader import EMBEDDING_DIMENSIONS, SemanticSearchConfig
from core.embeddings.interfaces import EmbeddingProvider
from core.matcher.models import (
    SemanticResult, TextSupplement, SemanticSearchResponse,
    METHOD_SEMANTIC, METHOD_TEXT_FALLBACK
)
from core.matcher.similarity import coerce_embedding, cosine_similarity
from core.matcher.text_fallback import matching_skill_names, text_fallback_search
from core.utils import active_skills, trust_tiers_at_or_above

logger = logging.getLogger(__name__)

SIMILARITY_DECIMALS = 3


class SemanticMatcher:
    """
    Semantic search over the agent store.

    The embedding client is injected; None means semantic search is
    unavailable and every search takes the text fallback.
    """

    def __init__(
        self,
        repo,
        embedding_client: Optional[EmbeddingProvider] = None,
        config: Optional[SemanticSearchConfig] = None,
        dimensions: int = EMBEDDING_DIMENSIONS
    ):
        """
        Initialize matcher with dependencies.

        Args:
            repo: AgentRepository for store reads
            embedding_client: Provider used to embed queries, or None
            config: Default limit and similarity threshold
            dimensions: Expected stored vector size
        """
        self.repo = repo
        self.embedding_client = embedding_client
        self.config = config or SemanticSearchConfig()
        self.dimensions = dimensions

    async def semantic_search(
        self,
        query: Optional[str],
        limit: Optional[int] = None,
        min_similarity: Optional[float] = None,
        category: Optional[str] = None,
        trust_tier: Optional[str] = None
    ) -> SemanticSearchResponse:
        """
        Find agents whose profiles are semantically close to ``query``.

        Args:
            query: Natural language request
            limit: Maximum ranked results (config default when None)
            min_similarity: Minimum cosine similarity (config default when None)
            category: Only agents with an active skill in this category
            trust_tier: Only agents at or above this trust tier

        Returns:
            SemanticSearchResponse; method is "text-fallback" when no query
            vector could be produced
        """
        limit = self.config.default_limit if limit is None else max(0, limit)
        min_similarity = self.config.min_similarity if min_similarity is None else min_similarity
        trust_tiers = trust_tiers_at_or_above(trust_tier)

        query_embedding = None
        if self.embedding_client is None:
            logger.info("No embedding client configured, using text fallback")
        elif not query or not query.strip():
            logger.info("Blank query, using text fallback")
        else:
            query_embedding = await self.embedding_client.embed_text(query)
            if query_embedding is None:
                logger.info(f"Could not embed query '{query}', using text fallback")

        if query_embedding is None:
            return self._text_fallback(query, limit, category, trust_tiers)

        agents = self.repo.get_agents_with_embeddings(category=category, trust_tiers=trust_tiers)
        query_lower = query.strip().lower()

        results: List[SemanticResult] = []
        for agent in agents:
            agent_embedding = coerce_embedding(agent.embedding, self.dimensions)
            if agent_embedding is None:
                logger.debug(f"Agent {agent.id} has an undecodable embedding, skipping")
                continue

            # Threshold applies to the reported (rounded) value
            similarity = round(cosine_similarity(query_embedding, agent_embedding), SIMILARITY_DECIMALS)
            if similarity < min_similarity:
                continue

            results.append(SemanticResult(
                agent=agent,
                similarity=similarity,
                matched_skills=matching_skill_names(agent, query_lower),
                method=METHOD_SEMANTIC
            ))

        # Stable sort, so equal similarities keep store order
        results.sort(key=lambda r: r.similarity, reverse=True)
        results = results[:limit]

        supplements = self._find_supplements(
            query.strip(),
            exclude_ids=[r.agent.id for r in results],
            slots=limit - len(results)
        )

        logger.info(
            f"Semantic search '{query}': {len(results)} results, "
            f"{len(supplements)} supplements from {len(agents)} embedded agents"
        )

        return SemanticSearchResponse(
            results=results,
            supplements=supplements,
            method=METHOD_SEMANTIC,
            query=query,
            total_with_embeddings=len(agents)
        )

    def _text_fallback(
        self,
        query: Optional[str],
        limit: int,
        category: Optional[str],
        trust_tiers: Optional[List[str]]
    ) -> SemanticSearchResponse:
        results = text_fallback_search(
            self.repo, query, limit, category=category, trust_tiers=trust_tiers
        )
        return SemanticSearchResponse(
            results=results,
            supplements=[],
            method=METHOD_TEXT_FALLBACK,
            query=query,
            total_with_embeddings=0
        )

    def _find_supplements(self, query: str, exclude_ids: List[Any], slots: int) -> List[TextSupplement]:
        """Unembedded agents matching the query text. Search filters do not apply."""
        if slots <= 0:
            return []

        agents = self.repo.search_unembedded_agents_by_text(query, exclude_ids=exclude_ids, limit=slots)
        return [
            TextSupplement(
                agent_id=agent.id,
                name=agent.name,
                skills=[s.name for s in active_skills(agent)]
            )
            for agent in agents
        ]
