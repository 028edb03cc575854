#!/usr/bin/env python3
"""
Scoring Module - Deterministic, explainable agent scoring.

Public API:
- parse_query: Free text to Requirement
- AgentScorer / score_agent_for_job: Weighted multi-factor score with reasons
- get_recommendations: Score, sort and truncate a candidate set

Modules:
- models.py: Data structures (Requirement, MatchResult)
- query_parser.py: Category detection and skill keyword extraction
- components.py: Skill overlap, category, success rate, response time, price
- service.py: AgentScorer orchestrator
- ranking.py: Recommendation ranking
"""

from core.scorer.models import Requirement, MatchResult
from core.scorer.query_parser import parse_query
from core.scorer.service import AgentScorer, score_agent_for_job
from core.scorer.ranking import get_recommendations, resolve_requirement

__all__ = [
    'Requirement',
    'MatchResult',
    'parse_query',
    'AgentScorer',
    'score_agent_for_job',
    'get_recommendations',
    'resolve_requirement',
]
