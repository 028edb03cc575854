import datetime

from sqlalchemy import Column, Integer, Text, TIMESTAMP, UniqueConstraint, Index, func

from .base import Base

OUTCOME_VALUES = ('completed', 'disputed', 'cancelled')


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class MatchOutcome(Base):
    """
    Real-world result of a job that was matched to an agent.

    One row per job. match_score is captured when the row is first written
    and never changes; outcome is overwritten by later recordings.
    """
    __tablename__ = 'match_outcome'

    id = Column(Integer, primary_key=True, autoincrement=True)
    job_id = Column(Text, nullable=False)
    agent_id = Column(Integer, nullable=False)

    match_score = Column(Integer, nullable=False)
    outcome = Column(Text, nullable=False)  # completed|disputed|cancelled

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, server_default=func.now(), onupdate=_utcnow)

    __table_args__ = (
        UniqueConstraint('job_id', name='uq_match_outcome_job'),
        Index('idx_match_outcome_agent', 'agent_id'),
        Index('idx_match_outcome_created', 'created_at'),
    )
