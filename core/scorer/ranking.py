#!/usr/bin/env python3
"""
Recommendation Ranking - Keyword path of agent discovery.

Resolves a Requirement (parsed free text, overridden by explicit options),
scores every active candidate and returns the top results. Independent of the
semantic matcher; callers may re-score semantic hits here for explanations.
"""

from typing import Any, List, Optional, Sequence, Union
import logging

from core.config_loader import ScoringWeights
from core.scorer.models import Requirement, MatchResult
from core.scorer.query_parser import parse_query
from core.scorer.service import AgentScorer
from core.utils import is_agent_active, to_float

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10


def resolve_requirement(
    query: Optional[str] = None,
    category: Optional[str] = None,
    budget: Any = None,
    skills: Union[str, Sequence[str], None] = None
) -> Requirement:
    """Parse ``query``, then let explicit category/budget/skills win."""
    requirement = parse_query(query)

    if category:
        requirement.category = category

    parsed_budget = to_float(budget)
    if parsed_budget:
        requirement.budget = parsed_budget

    if skills:
        if isinstance(skills, str):
            skills = [s.strip() for s in skills.split(',')]
        requirement = Requirement(
            skills=list(skills),
            category=requirement.category,
            budget=requirement.budget
        )

    return requirement


def get_recommendations(
    agents: Sequence[Any],
    query: Optional[str] = None,
    category: Optional[str] = None,
    budget: Any = None,
    skills: Union[str, Sequence[str], None] = None,
    limit: int = DEFAULT_LIMIT,
    weights: Optional[ScoringWeights] = None
) -> List[MatchResult]:
    """
    Rank agents for a request.

    Args:
        agents: Candidate agents (inactive ones are skipped)
        query: Free-text request, parsed into skills and category
        category: Explicit category, overrides the parsed one
        budget: Explicit budget
        skills: Explicit skills (list or comma-separated), override parsed ones
        limit: Maximum results to return
        weights: Scoring weights; defaults when None

    Returns:
        MatchResults sorted by score descending; ties keep input order
    """
    requirement = resolve_requirement(query, category, budget, skills)
    scorer = AgentScorer(weights)

    scored = [scorer.score(agent, requirement) for agent in agents if is_agent_active(agent)]

    # list.sort is stable, so equal scores keep candidate order
    scored.sort(key=lambda r: r.score, reverse=True)

    logger.debug(
        f"Ranked {len(scored)} agents for skills={requirement.skills} "
        f"category={requirement.category} budget={requirement.budget}"
    )
    return scored[:max(0, limit)]
