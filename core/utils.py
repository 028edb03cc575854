import math
import logging
from typing import Any, Iterable, List, Optional

logger = logging.getLogger(__name__)

# Ordered lowest to highest
TRUST_TIERS = ('new', 'rising', 'established', 'trusted', 'verified')


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


def to_float(value: Any) -> Optional[float]:
    """Parse a numeric-ish value (int, Decimal, numeric string) into a float.

    Returns None for missing, unparseable or NaN values.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def trust_tiers_at_or_above(tier: Optional[str]) -> Optional[List[str]]:
    """Return the tiers at or above ``tier``, or None when no filter applies.

    Unknown tier names impose no filter.
    """
    if not tier:
        return None
    tier = tier.lower()
    if tier not in TRUST_TIERS:
        logger.debug(f"Unknown trust tier '{tier}', ignoring filter")
        return None
    return list(TRUST_TIERS[TRUST_TIERS.index(tier):])


def is_agent_active(agent: Any) -> bool:
    """Only an explicit False marks an agent inactive; None or absent means active."""
    return getattr(agent, 'is_active', None) is not False


def active_skills(agent: Any) -> List[Any]:
    """Skills of an agent, skipping any explicitly deactivated skill."""
    skills: Iterable[Any] = getattr(agent, 'skills', None) or []
    return [s for s in skills if getattr(s, 'is_active', None) is not False]


def text_contains(haystack: Optional[str], needle: str) -> bool:
    """Case-insensitive substring test; ``needle`` must already be lowercase."""
    return bool(haystack) and needle in haystack.lower()
