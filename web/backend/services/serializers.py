#!/usr/bin/env python3
"""
Conversions from engine results to API response models.
"""

from typing import Any

from core.scorer.models import MatchResult
from core.matcher.models import SemanticResult, TextSupplement
from core.utils import active_skills, to_float
from ..models.responses import (
    AgentSummary,
    SkillSummary,
    Recommendation,
    SemanticResultResponse,
    SupplementResponse
)


def agent_summary(agent: Any) -> AgentSummary:
    return AgentSummary(
        id=agent.id,
        name=agent.name,
        tagline=agent.tagline,
        rating=to_float(agent.rating) or 0.0,
        trust_tier=agent.trust_tier or "new",
        is_founder=bool(agent.is_founder),
        total_jobs=agent.total_jobs or 0,
        skills=[
            SkillSummary(
                name=skill.name,
                category=skill.category,
                price=to_float(skill.price)
            )
            for skill in active_skills(agent)
        ]
    )


def recommendation(result: MatchResult) -> Recommendation:
    return Recommendation(
        agent=agent_summary(result.agent),
        score=result.score,
        reasons=result.reasons,
        breakdown=result.breakdown
    )


def semantic_result(result: SemanticResult) -> SemanticResultResponse:
    return SemanticResultResponse(
        agent=agent_summary(result.agent),
        similarity=result.similarity,
        matched_skills=result.matched_skills,
        method=result.method
    )


def supplement(item: TextSupplement) -> SupplementResponse:
    return SupplementResponse(
        agent_id=item.agent_id,
        name=item.name,
        skills=item.skills,
        note=item.note
    )
