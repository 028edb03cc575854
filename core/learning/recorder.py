#!/usr/bin/env python3
"""
Outcome Recorder - Persists how matched jobs concluded.

Recording is best-effort: a store failure is logged and reported as False so
the job lifecycle that calls it is never interrupted. The statistics are
read-only diagnostics; nothing feeds them back into scoring weights.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import logging

from core.config_loader import LearningConfig
from core.exceptions import PersistenceError
from core.learning.models import LearningStats, ScoreRangeStats, SCORE_RANGES
from database.models import OUTCOME_VALUES

logger = logging.getLogger(__name__)


class OutcomeRecorder:
    """Writes outcomes and aggregates them through an OutcomeRepository."""

    def __init__(self, repo, config: Optional[LearningConfig] = None):
        self.repo = repo
        self.config = config or LearningConfig()

    async def record_outcome(self, job_id: Any, agent_id: Any, match_score: Any, outcome: str) -> bool:
        """
        Record (or update) the outcome of a matched job.

        The first call for a job fixes agent_id and match_score; later calls
        only change the outcome.

        Returns:
            True when stored, False when the store failed

        Raises:
            ValueError: If outcome is not completed, disputed or cancelled
        """
        if outcome not in OUTCOME_VALUES:
            raise ValueError(f"Invalid outcome '{outcome}', expected one of {', '.join(OUTCOME_VALUES)}")

        try:
            self.repo.upsert_outcome(str(job_id), agent_id, int(match_score), outcome)
            self.repo.commit()
        except PersistenceError as e:
            logger.error(f"Failed to record outcome for job {job_id}: {e}")
            self.repo.rollback()
            return False

        logger.info(f"Recorded outcome '{outcome}' for job {job_id} (agent {agent_id}, score {match_score})")
        return True

    def get_learning_stats(self, window_days: Optional[int] = None, now: Optional[datetime] = None) -> LearningStats:
        """
        Outcome statistics per score range over the trailing window.

        Always reports the three ranges in order low, medium, high; empty
        ranges have zero counts and no average.

        Raises:
            PersistenceError: If the outcome store cannot be read
        """
        if window_days is None:
            window_days = self.config.window_days
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=window_days)

        rows = {row['score_range']: row for row in self.repo.get_score_range_stats(since)}

        ranges = []
        for score_range in SCORE_RANGES:
            row = rows.get(score_range)
            if row is None:
                ranges.append(ScoreRangeStats(score_range=score_range))
                continue
            avg = row['avg_score']
            ranges.append(ScoreRangeStats(
                score_range=score_range,
                total=row['total'],
                completed=row['completed'],
                disputed=row['disputed'],
                avg_score=round(avg, 1) if avg is not None else None
            ))

        return LearningStats(
            ranges=ranges,
            total_outcomes=sum(r.total for r in ranges),
            window_days=window_days
        )
