import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func, case
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.exceptions import PersistenceError
from database.models import MatchOutcome
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def score_range_expression():
    """SQL CASE bucketing match_score into low (<50), medium (50-79), high (>=80)."""
    return case(
        (MatchOutcome.match_score >= 80, 'high'),
        (MatchOutcome.match_score >= 50, 'medium'),
        else_='low'
    )


class OutcomeRepository(BaseRepository):
    def get_by_job_id(self, job_id: str) -> Optional[MatchOutcome]:
        stmt = select(MatchOutcome).where(MatchOutcome.job_id == job_id)
        try:
            return self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Outcome store read failed: {e}") from e

    def upsert_outcome(
        self,
        job_id: str,
        agent_id: Any,
        match_score: int,
        outcome: str
    ) -> MatchOutcome:
        """Insert the outcome for a job, or update only ``outcome`` if one exists.

        match_score and agent_id are write-once.
        """
        try:
            existing = self.get_by_job_id(job_id)
            if existing is not None:
                existing.outcome = outcome
                self.db.flush()
                return existing

            record = MatchOutcome(
                job_id=job_id,
                agent_id=agent_id,
                match_score=match_score,
                outcome=outcome
            )
            self.db.add(record)
            try:
                self.db.flush()
            except IntegrityError:
                # Lost an insert race for the same job; fall back to the update path
                logger.info(f"Outcome for job {job_id} inserted concurrently, updating instead")
                self.db.rollback()
                existing = self.get_by_job_id(job_id)
                if existing is None:
                    raise PersistenceError(f"Outcome for job {job_id} conflicted but could not be reloaded")
                existing.outcome = outcome
                self.db.flush()
                return existing
            return record
        except PersistenceError:
            raise
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to record outcome for job {job_id}: {e}") from e

    def get_score_range_stats(self, since: datetime) -> List[Dict[str, Any]]:
        """Aggregate outcomes created after ``since`` by score range."""
        # Bucket in a subquery so GROUP BY references a plain column
        bucketed = (
            select(
                score_range_expression().label('score_range'),
                MatchOutcome.match_score,
                MatchOutcome.outcome,
            )
            .where(MatchOutcome.created_at > since)
            .subquery()
        )
        stmt = (
            select(
                bucketed.c.score_range,
                func.count().label('total'),
                func.count(case((bucketed.c.outcome == 'completed', 1))).label('completed'),
                func.count(case((bucketed.c.outcome == 'disputed', 1))).label('disputed'),
                func.avg(bucketed.c.match_score).label('avg_score'),
            )
            .group_by(bucketed.c.score_range)
        )
        try:
            rows = self.db.execute(stmt).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read learning stats: {e}")
            raise PersistenceError(f"Failed to read learning stats: {e}") from e

        return [
            {
                'score_range': row.score_range,
                'total': int(row.total or 0),
                'completed': int(row.completed or 0),
                'disputed': int(row.disputed or 0),
                'avg_score': float(row.avg_score) if row.avg_score is not None else None,
            }
            for row in rows
        ]
