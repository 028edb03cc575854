#!/usr/bin/env python3
"""
Agent endpoints - keyword recommendations and semantic search.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.app_context import AppContext
from ..dependencies import get_db, get_app_context
from ..services.agent_service import AgentService
from ..models.responses import RecommendationsResponse, SearchResponse

router = APIRouter(prefix="/api/agents", tags=["agents"])


@router.get("/recommendations", response_model=RecommendationsResponse)
def get_recommendations(
    q: Optional[str] = Query(default=None, description="Free-text request, e.g. 'I need a logo designed'"),
    category: Optional[str] = Query(default=None, description="Skill category, overrides the one parsed from q"),
    budget: Optional[float] = Query(default=None, gt=0, description="Budget for price matching"),
    skills: Optional[str] = Query(default=None, description="Comma-separated skills, override those parsed from q"),
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Maximum results to return"),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_app_context)
):
    """
    Rank active agents with the deterministic scorer.

    Each recommendation carries a 0-100 score, up to four reasons and the
    per-component point breakdown.
    """
    service = AgentService(db, context)
    return service.get_recommendations(
        query=q,
        category=category,
        budget=budget,
        skills=skills,
        limit=limit
    )


@router.get("/search", response_model=SearchResponse)
async def search_agents(
    q: Optional[str] = Query(default=None, description="Natural language search"),
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Maximum ranked results"),
    min_similarity: Optional[float] = Query(default=None, ge=0, le=1, description="Minimum cosine similarity"),
    category: Optional[str] = Query(default=None, description="Only agents with an active skill in this category"),
    trust_tier: Optional[str] = Query(default=None, description="Only agents at or above this trust tier"),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_app_context)
):
    """
    Semantic search over agent profile embeddings.

    Falls back to text matching (method "text-fallback") when no embedding
    provider is configured or the query cannot be embedded.
    """
    service = AgentService(db, context)
    return await service.search(
        q,
        limit=limit,
        min_similarity=min_similarity,
        category=category,
        trust_tier=trust_tier
    )
