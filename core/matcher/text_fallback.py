#!/usr/bin/env python3
"""
Text Fallback - Substring search used when no query vector is available.

Scores are heuristic: name hit 0.5, bio hit 0.3, up to two skills matched on
name or description at 0.2 each, plus trust_score / 200, capped below 1 so a
text hit never looks like a perfect semantic match. Skill categories select
candidates but earn no points.
"""
from typing import Any, List, Optional, Sequence
import logging

from core.matcher.models import SemanticResult, METHOD_TEXT_FALLBACK
from core.utils import active_skills, text_contains, to_float

logger = logging.getLogger(__name__)

NAME_MATCH_SCORE = 0.5
BIO_MATCH_SCORE = 0.3
SKILL_MATCH_SCORE = 0.2
MAX_SKILL_MATCH_SCORE = 0.4
MAX_TEXT_SCORE = 0.99


def matching_skill_names(agent: Any, query_lower: str, include_category: bool = True) -> List[str]:
    """Names of active skills whose name, description (or category) contain the query."""
    matched = []
    for skill in active_skills(agent):
        if (
            text_contains(skill.name, query_lower)
            or text_contains(getattr(skill, 'description', None), query_lower)
            or (include_category and text_contains(getattr(skill, 'category', None), query_lower))
        ):
            matched.append(skill.name)
    return matched


def text_match_score(agent: Any, query_lower: str) -> float:
    score = 0.0
    if text_contains(getattr(agent, 'name', None), query_lower):
        score += NAME_MATCH_SCORE
    if text_contains(getattr(agent, 'bio', None), query_lower):
        score += BIO_MATCH_SCORE

    matched_skills = matching_skill_names(agent, query_lower, include_category=False)
    score += min(SKILL_MATCH_SCORE * len(matched_skills), MAX_SKILL_MATCH_SCORE)
    score += (to_float(getattr(agent, 'trust_score', None)) or 0.0) / 200

    return min(round(score, 3), MAX_TEXT_SCORE)


def text_fallback_search(
    repo,
    query: Optional[str],
    limit: int,
    category: Optional[str] = None,
    trust_tiers: Optional[Sequence[str]] = None
) -> List[SemanticResult]:
    """
    Rank agents by substring match against the query.

    Args:
        repo: AgentRepository
        query: Search text; blank matches every active agent
        limit: Maximum candidates fetched and returned
        category: Skill category filter (case-insensitive equality)
        trust_tiers: Allowed trust tiers, None for no filter
    """
    query_text = (query or '').strip()
    query_lower = query_text.lower()

    agents = repo.search_agents_by_text(query_text, category=category, trust_tiers=trust_tiers, limit=limit)

    results = [
        SemanticResult(
            agent=agent,
            similarity=text_match_score(agent, query_lower),
            matched_skills=matching_skill_names(agent, query_lower, include_category=False),
            method=METHOD_TEXT_FALLBACK
        )
        for agent in agents
    ]
    results.sort(key=lambda r: r.similarity, reverse=True)

    logger.debug(f"Text fallback matched {len(results)} agents for '{query_text}'")
    return results
