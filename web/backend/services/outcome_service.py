#!/usr/bin/env python3
"""
Outcome service - records match outcomes and reports calibration stats.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from core.config_loader import LearningConfig
from core.exceptions import PersistenceError
from core.learning import OutcomeRecorder
from database.repositories import OutcomeRepository
from ..exceptions import InvalidOutcomeException
from ..models.requests import OutcomeRequest
from ..models.responses import OutcomeResponse, LearningStatsResponse, ScoreRangeResponse

logger = logging.getLogger(__name__)


class OutcomeService:
    """Service for match outcome operations."""

    def __init__(self, db: Session, config: Optional[LearningConfig] = None):
        self.recorder = OutcomeRecorder(OutcomeRepository(db), config)

    async def record(self, request: OutcomeRequest) -> OutcomeResponse:
        """
        Record a match outcome.

        Raises:
            InvalidOutcomeException: If the outcome value is not recognised.
            PersistenceError: If the outcome could not be stored.
        """
        try:
            stored = await self.recorder.record_outcome(
                request.job_id,
                request.agent_id,
                request.match_score,
                request.outcome
            )
        except ValueError as e:
            raise InvalidOutcomeException(str(e)) from e

        if not stored:
            raise PersistenceError(f"Failed to record outcome for job {request.job_id}")

        return OutcomeResponse(success=True, job_id=request.job_id)

    def get_stats(self, window_days: Optional[int] = None) -> LearningStatsResponse:
        stats = self.recorder.get_learning_stats(window_days=window_days)
        return LearningStatsResponse(
            success=True,
            window_days=stats.window_days,
            total_outcomes=stats.total_outcomes,
            ranges=[
                ScoreRangeResponse(
                    score_range=r.score_range,
                    total=r.total,
                    completed=r.completed,
                    disputed=r.disputed,
                    avg_score=r.avg_score
                )
                for r in stats.ranges
            ]
        )
