#!/usr/bin/env python3
"""
Learning Models - Calibration statistics over recorded match outcomes.
"""
from dataclasses import dataclass, field
from typing import List, Optional

SCORE_RANGES = ('low', 'medium', 'high')


@dataclass
class ScoreRangeStats:
    """Outcomes for one score bucket: low (<50), medium (50-79), high (>=80)."""
    score_range: str
    total: int = 0
    completed: int = 0
    disputed: int = 0
    avg_score: Optional[float] = None


@dataclass
class LearningStats:
    ranges: List[ScoreRangeStats] = field(default_factory=list)
    total_outcomes: int = 0
    window_days: int = 90
