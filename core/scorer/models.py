#!/usr/bin/env python3
"""
Scoring Models - Data structures for deterministic scoring.
"""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field

MAX_REQUIREMENT_SKILLS = 5
MAX_REASONS = 4


@dataclass
class Requirement:
    """Structured search criteria, built per request and never persisted."""
    skills: List[str] = field(default_factory=list)
    category: Optional[str] = None
    budget: Optional[float] = None

    def __post_init__(self):
        seen = set()
        unique = []
        for skill in self.skills or []:
            skill = str(skill).strip()
            if skill and skill not in seen:
                seen.add(skill)
                unique.append(skill)
        self.skills = unique[:MAX_REQUIREMENT_SKILLS]
        self.category = self.category or None


@dataclass
class MatchResult:
    """Explainable deterministic score for one agent."""
    agent: Any
    score: int
    reasons: List[str] = field(default_factory=list)
    breakdown: Dict[str, int] = field(default_factory=dict)
