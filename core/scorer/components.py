#!/usr/bin/env python3
"""
Scoring Components - Individual factors of the deterministic agent score.

Each function returns a normalized value (0.0-1.0 or bool); the service
multiplies it by the configured weight.
"""

from typing import Any, List, Optional, Sequence

from core.utils import to_float

# Response time thresholds in seconds
RESPONSE_TIME_FAST = 3600
RESPONSE_TIME_MEDIUM = 86400

DEFAULT_SUCCESS_RATE = 0.5
NEUTRAL_PRICE_MATCH = 0.5


def calculate_skill_overlap(agent_skills: Sequence[Any], required_skills: Sequence[str]) -> float:
    """
    Fraction of required skills the agent's skills cover.

    A required skill found verbatim in any skill name or description counts
    1; otherwise any of its words longer than two characters counts 0.5.
    No required skills is a vacuous match (1.0).

    Returns:
        Overlap between 0.0 and 1.0
    """
    if not required_skills:
        return 1.0
    if not agent_skills:
        return 0.0

    haystack = ' '.join(
        f"{(s.name or '').lower()} {(getattr(s, 'description', None) or '').lower()}"
        for s in agent_skills
    )

    match_count = 0.0
    for required in required_skills:
        required_lower = required.lower()
        if required_lower in haystack:
            match_count += 1
        elif any(len(word) > 2 and word in haystack for word in required_lower.split()):
            match_count += 0.5

    return min(1.0, match_count / len(required_skills))


def check_category_match(agent_skills: Sequence[Any], required_category: Optional[str]) -> bool:
    """True if no category is requested or any skill category contains it."""
    if not required_category:
        return True
    if not agent_skills:
        return False

    required_lower = required_category.lower()
    return any(
        s.category and required_lower in s.category.lower()
        for s in agent_skills
    )


def calculate_success_rate(completion_rate: Any) -> float:
    """completion_rate (0-100) as a fraction; new agents get 0.5."""
    rate = to_float(completion_rate)
    if rate is None:
        return DEFAULT_SUCCESS_RATE
    return max(0.0, min(1.0, rate / 100))


def calculate_response_time_factor(response_time_avg: Any) -> float:
    """1.0 within an hour, 0.5 within a day, else 0. Unknown counts as a day."""
    response_time = to_float(response_time_avg)
    if response_time is None:
        response_time = RESPONSE_TIME_MEDIUM

    if response_time <= RESPONSE_TIME_FAST:
        return 1.0
    if response_time <= RESPONSE_TIME_MEDIUM:
        return 0.5
    return 0.0


def calculate_price_match(agent_skills: Sequence[Any], budget: Optional[float]) -> float:
    """
    How well the agent's cheapest skill fits the budget.

    - Neutral 0.5 without a budget or without any priced skill
    - Within budget: 1.0 for a fair price (at least half the budget),
      0.7 for a suspiciously cheap one
    - Over budget: budget / min_price
    """
    if not budget or budget <= 0:
        return NEUTRAL_PRICE_MATCH

    prices: List[float] = []
    for skill in agent_skills or []:
        price = to_float(getattr(skill, 'price', None))
        if price is not None:
            prices.append(price)

    if not prices:
        return NEUTRAL_PRICE_MATCH

    min_price = min(prices)
    if min_price <= budget:
        return 1.0 if min_price / budget >= 0.5 else 0.7

    return max(0.0, budget / min_price)
