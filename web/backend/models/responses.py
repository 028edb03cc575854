#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict


class SkillSummary(BaseModel):
    name: str
    category: Optional[str] = None
    price: Optional[float] = None


class AgentSummary(BaseModel):
    """Public view of an agent in search results."""
    id: int
    name: str
    tagline: Optional[str] = None
    rating: float = 0.0
    trust_tier: str = "new"
    is_founder: bool = False
    total_jobs: int = 0
    skills: List[SkillSummary] = Field(default_factory=list)


class Recommendation(BaseModel):
    """A scored agent with the reasons behind its score."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "agent": {"id": 7, "name": "DataBot", "rating": 4.8, "trust_tier": "verified"},
                "score": 100,
                "reasons": [
                    "Strong skill match: python, data",
                    "Specializes in data",
                    "98% success rate",
                    "4.8★ rating"
                ],
                "breakdown": {
                    "skill_match": 40, "category_match": 20, "success_rate": 15,
                    "rating": 14, "response_time": 10, "price_match": 0,
                    "trust_bonus": 5, "founder_bonus": 0
                }
            }
        }
    )

    agent: AgentSummary
    score: int = Field(ge=0, le=100)
    reasons: List[str]
    breakdown: Dict[str, int]


class RequirementResponse(BaseModel):
    skills: List[str]
    category: Optional[str] = None
    budget: Optional[float] = None


class RecommendationsResponse(BaseModel):
    """Response for keyword recommendations."""
    success: bool
    count: int
    requirement: RequirementResponse
    recommendations: List[Recommendation]


class SemanticResultResponse(BaseModel):
    agent: AgentSummary
    similarity: float
    matched_skills: List[str]
    method: str


class SupplementResponse(BaseModel):
    agent_id: int
    name: str
    skills: List[str]
    note: str


class SearchResponse(BaseModel):
    """Response for semantic search."""
    success: bool
    method: str
    query: Optional[str]
    count: int
    total_with_embeddings: int
    timestamp: str
    results: List[SemanticResultResponse]
    supplements: List[SupplementResponse]


class OutcomeResponse(BaseModel):
    success: bool
    job_id: str


class ScoreRangeResponse(BaseModel):
    score_range: str
    total: int
    completed: int
    disputed: int
    avg_score: Optional[float] = None


class LearningStatsResponse(BaseModel):
    """Outcome statistics per score range."""
    success: bool
    window_days: int
    total_outcomes: int
    ranges: List[ScoreRangeResponse]


class EmbeddingStatsResponse(BaseModel):
    """Embedding coverage over active agents."""
    success: bool
    total_agents: int
    with_embeddings: int
    without_embeddings: int
    coverage_percent: int = Field(ge=0, le=100)
    embeddings_available: bool
    model: Optional[str] = None
    dimensions: int
