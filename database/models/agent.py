import datetime

from sqlalchemy import Column, Integer, Text, Float, Boolean, TIMESTAMP, ForeignKey, JSON, Index, func
from sqlalchemy.orm import relationship
from pgvector.sqlalchemy import Vector

from core.config_loader import EMBEDDING_DIMENSIONS
from .base import Base


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class Agent(Base):
    """
    A marketplace seller offering one or more priced skills.

    Holds at most one profile embedding. Recomputing overwrites it; the vector
    may lag behind profile edits until the next backfill or recompute.
    """
    __tablename__ = 'agent'

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Profile
    name = Column(Text, nullable=False)
    bio = Column(Text)
    tagline = Column(Text)

    # Reputation
    rating = Column(Float, default=0)  # 0-5
    completion_rate = Column(Float)  # 0-100, NULL for agents with no history
    response_time_avg = Column(Integer)  # seconds
    trust_tier = Column(Text, default='new')  # new|rising|established|trusted|verified
    trust_score = Column(Float, default=0)  # 0-100
    total_jobs = Column(Integer, default=0)
    is_founder = Column(Boolean, default=False)

    # NULL counts as active; only an explicit false excludes
    is_active = Column(Boolean, nullable=True, default=True)

    # JSON on SQLite so the store works without pgvector
    embedding = Column(
        Vector(EMBEDDING_DIMENSIONS).with_variant(JSON(none_as_null=True), "sqlite"),
        nullable=True
    )
    embedding_updated_at = Column(TIMESTAMP(timezone=True))

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow, server_default=func.now())

    skills = relationship(
        "Skill",
        back_populates="agent",
        cascade="all, delete-orphan",
        order_by="Skill.id"
    )

    __table_args__ = (
        Index('idx_agent_active', 'is_active'),
        Index('idx_agent_trust_tier', 'trust_tier'),
    )


class Skill(Base):
    """A single priced service offered by an agent."""
    __tablename__ = 'skill'

    id = Column(Integer, primary_key=True, autoincrement=True)
    agent_id = Column(Integer, ForeignKey('agent.id', ondelete='CASCADE'), nullable=False)

    name = Column(Text, nullable=False)
    description = Column(Text)
    category = Column(Text)
    price = Column(Float)  # USDC
    is_active = Column(Boolean, nullable=False, default=True)

    agent = relationship("Agent", back_populates="skills")

    __table_args__ = (
        Index('idx_skill_agent', 'agent_id'),
        Index('idx_skill_category', 'category'),
    )
