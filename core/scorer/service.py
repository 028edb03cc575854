#!/usr/bin/env python3
"""
Scoring Service - Deterministic multi-factor agent scoring.

Score = weighted components (skill, category, success rate, rating,
response time, price) + trust/founder bonuses, clamped to 100. The bonuses
can push the raw total past 100 and the clamp is the only normalization.

Reasons are collected in a fixed order and truncated to the first four, so
the same inputs always explain themselves the same way.
"""

from typing import Any, Optional
import logging

from core.config_loader import ScoringWeights
from core.scorer.models import Requirement, MatchResult, MAX_REASONS
from core.scorer.components import (
    RESPONSE_TIME_FAST,
    calculate_skill_overlap,
    check_category_match,
    calculate_success_rate,
    calculate_response_time_factor,
    calculate_price_match,
)
from core.utils import active_skills, round_half_up, to_float

logger = logging.getLogger(__name__)

TRUST_TIER_BONUS = {
    'verified': 5,
    'trusted': 3,
}
FOUNDER_BONUS = 2

FALLBACK_REASON = "Available for hire"


class AgentScorer:
    """
    Scores agents against a Requirement with a fixed set of weights.

    Stateless apart from the weights, so one instance can be shared across
    concurrent callers.
    """

    def __init__(self, weights: Optional[ScoringWeights] = None):
        self.weights = weights or ScoringWeights()

    def score(self, agent: Any, requirement: Optional[Requirement] = None) -> MatchResult:
        """
        Score a single agent.

        Args:
            agent: Object exposing skills, rating, completion_rate,
                response_time_avg, trust_tier and is_founder
            requirement: Search criteria; None means no constraints

        Returns:
            MatchResult with score in [0, 100], up to 4 reasons and the
            per-component point breakdown
        """
        requirement = requirement or Requirement()
        weights = self.weights
        skills = active_skills(agent)
        breakdown = {}
        reasons = []

        # 1. Skill match
        skill_overlap = calculate_skill_overlap(skills, requirement.skills)
        breakdown['skill_match'] = round_half_up(skill_overlap * weights.skill_match)

        if skill_overlap > 0.8:
            matched = ', '.join(requirement.skills[:2]) or 'requested services'
            reasons.append(f"Strong skill match: {matched}")
        elif skill_overlap > 0.5:
            reasons.append("Partial skill match")

        # 2. Category match
        category_match = check_category_match(skills, requirement.category)
        breakdown['category_match'] = round_half_up(weights.category_match) if category_match else 0

        if category_match and requirement.category:
            reasons.append(f"Specializes in {requirement.category}")

        # 3. Success rate
        success_rate = calculate_success_rate(getattr(agent, 'completion_rate', None))
        breakdown['success_rate'] = round_half_up(success_rate * weights.success_rate)

        if success_rate >= 0.95:
            reasons.append(f"{round_half_up(success_rate * 100)}% success rate")

        # 4. Rating
        rating = to_float(getattr(agent, 'rating', None)) or 0.0
        breakdown['rating'] = round_half_up((rating / 5) * weights.rating)

        if rating >= 4.5:
            reasons.append(f"{rating:.1f}★ rating")
        elif rating >= 4.0:
            reasons.append(f"{rating:.1f}★ rated")

        # 5. Response time
        response_factor = calculate_response_time_factor(getattr(agent, 'response_time_avg', None))
        breakdown['response_time'] = round_half_up(response_factor * weights.response_time)

        if response_factor == 1.0:
            reasons.append(f"Fast responder (<{RESPONSE_TIME_FAST // 3600}h)")

        # 6. Price match, only when a budget is given
        if requirement.budget and requirement.budget > 0:
            price_match = calculate_price_match(skills, requirement.budget)
            breakdown['price_match'] = round_half_up(price_match * weights.price_match)

            if price_match >= 0.9:
                reasons.append("Within budget")
        else:
            breakdown['price_match'] = 0

        # Bonuses sit outside the weighted budget
        trust_tier = (getattr(agent, 'trust_tier', None) or '').lower()
        breakdown['trust_bonus'] = TRUST_TIER_BONUS.get(trust_tier, 0)
        if trust_tier == 'verified':
            reasons.append("Verified agent")

        breakdown['founder_bonus'] = FOUNDER_BONUS if getattr(agent, 'is_founder', False) else 0
        if breakdown['founder_bonus']:
            reasons.append("Founding agent")

        if not reasons:
            reasons.append(FALLBACK_REASON)

        total = sum(breakdown.values())
        score = round_half_up(max(0, min(100, total)))

        return MatchResult(
            agent=agent,
            score=score,
            reasons=reasons[:MAX_REASONS],
            breakdown=breakdown
        )


def score_agent_for_job(
    agent: Any,
    requirement: Optional[Requirement] = None,
    weights: Optional[ScoringWeights] = None
) -> MatchResult:
    """Score one agent with the given (or default) weights."""
    return AgentScorer(weights).score(agent, requirement)
