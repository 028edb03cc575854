#!/usr/bin/env python3
"""
Agent service - keyword recommendations, semantic search and embedding stats.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.app_context import AppContext
from core.matcher import SemanticMatcher, EmbeddingBackfillJob
from core.scorer import get_recommendations, resolve_requirement
from database.repositories import AgentRepository
from ..models.responses import (
    RecommendationsResponse,
    RequirementResponse,
    SearchResponse,
    EmbeddingStatsResponse
)
from . import serializers

logger = logging.getLogger(__name__)


class AgentService:
    """Service for agent discovery over a request-scoped session."""

    def __init__(self, db: Session, context: AppContext):
        self.repo = AgentRepository(db)
        self.context = context
        self.config = context.config

    def get_recommendations(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        budget: Optional[float] = None,
        skills: Optional[str] = None,
        limit: Optional[int] = None
    ) -> RecommendationsResponse:
        """
        Rank active agents for a request.

        Args:
            query: Free-text request.
            category: Explicit category filter.
            budget: Budget for price matching.
            skills: Comma-separated skills, overriding those parsed from the query.
            limit: Maximum results (config default when None).

        Returns:
            Recommendations with the resolved requirement.
        """
        limit = limit or self.config.scoring.default_limit
        requirement = resolve_requirement(query, category, budget, skills)

        results = get_recommendations(
            self.repo.get_active_agents(),
            query=query,
            category=category,
            budget=budget,
            skills=skills,
            limit=limit,
            weights=self.config.scoring.weights
        )

        return RecommendationsResponse(
            success=True,
            count=len(results),
            requirement=RequirementResponse(
                skills=requirement.skills,
                category=requirement.category,
                budget=requirement.budget
            ),
            recommendations=[serializers.recommendation(r) for r in results]
        )

    async def search(
        self,
        query: Optional[str],
        limit: Optional[int] = None,
        min_similarity: Optional[float] = None,
        category: Optional[str] = None,
        trust_tier: Optional[str] = None
    ) -> SearchResponse:
        matcher = SemanticMatcher(
            self.repo,
            self.context.embedding_client,
            self.config.semantic_search,
            dimensions=self.config.embeddings.dimensions
        )
        response = await matcher.semantic_search(
            query,
            limit=limit,
            min_similarity=min_similarity,
            category=category,
            trust_tier=trust_tier
        )

        return SearchResponse(
            success=True,
            method=response.method,
            query=response.query,
            count=len(response.results),
            total_with_embeddings=response.total_with_embeddings,
            timestamp=response.timestamp,
            results=[serializers.semantic_result(r) for r in response.results],
            supplements=[serializers.supplement(s) for s in response.supplements]
        )

    def get_embedding_stats(self) -> EmbeddingStatsResponse:
        stats = EmbeddingBackfillJob(
            self.repo, self.context.embedding_client, self.config.backfill
        ).get_embedding_stats()

        return EmbeddingStatsResponse(
            success=True,
            total_agents=stats.total_agents,
            with_embeddings=stats.with_embeddings,
            without_embeddings=stats.without_embeddings,
            coverage_percent=stats.coverage_percent,
            embeddings_available=stats.embeddings_available,
            model=stats.model or self.config.embeddings.model,
            dimensions=stats.dimensions
        )
