"""Learning Module - Match outcome recording and calibration statistics."""
from core.learning.models import LearningStats, ScoreRangeStats, SCORE_RANGES
from core.learning.recorder import OutcomeRecorder

__all__ = ['OutcomeRecorder', 'LearningStats', 'ScoreRangeStats', 'SCORE_RANGES']
