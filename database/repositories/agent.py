import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple, Any

from sqlalchemy import select, func, and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from core.exceptions import PersistenceError
from database.models import Agent, Skill
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


def _active_agent_clause():
    return Agent.is_active.is_not(False)


def _category_clause(category: str):
    return Agent.skills.any(and_(
        Skill.is_active.is_(True),
        func.lower(Skill.category) == category.lower()
    ))


def _trust_tier_clause(trust_tiers: Sequence[str]):
    return func.coalesce(Agent.trust_tier, 'new').in_(list(trust_tiers))


def _text_match_clause(query: str, include_skill_category: bool):
    skill_conditions = [
        Skill.name.icontains(query, autoescape=True),
        Skill.description.icontains(query, autoescape=True),
    ]
    if include_skill_category:
        skill_conditions.append(Skill.category.icontains(query, autoescape=True))

    return or_(
        Agent.name.icontains(query, autoescape=True),
        Agent.bio.icontains(query, autoescape=True),
        Agent.skills.any(and_(Skill.is_active.is_(True), or_(*skill_conditions)))
    )


class AgentRepository(BaseRepository):
    """Read/write access to the agent store.

    Read failures surface as PersistenceError; callers on the search path let
    them propagate since no results can be served without candidate agents.
    """

    def _scalars(self, stmt) -> List[Agent]:
        try:
            return list(self.db.execute(stmt).scalars().unique().all())
        except SQLAlchemyError as e:
            logger.error(f"Agent store read failed: {e}")
            raise PersistenceError(f"Agent store read failed: {e}") from e

    def get_by_id(self, agent_id: Any) -> Optional[Agent]:
        stmt = select(Agent).options(selectinload(Agent.skills)).where(Agent.id == agent_id)
        agents = self._scalars(stmt)
        return agents[0] if agents else None

    def get_active_agents(self) -> List[Agent]:
        stmt = (
            select(Agent)
            .options(selectinload(Agent.skills))
            .where(_active_agent_clause())
            .order_by(Agent.id)
        )
        return self._scalars(stmt)

    def get_agents_with_embeddings(
        self,
        category: Optional[str] = None,
        trust_tiers: Optional[Sequence[str]] = None
    ) -> List[Agent]:
        stmt = (
            select(Agent)
            .options(selectinload(Agent.skills))
            .where(_active_agent_clause(), Agent.embedding.is_not(None))
            .order_by(Agent.id)
        )
        if category:
            stmt = stmt.where(_category_clause(category))
        if trust_tiers:
            stmt = stmt.where(_trust_tier_clause(trust_tiers))
        return self._scalars(stmt)

    def get_agents_without_embeddings(self, limit: Optional[int] = None) -> List[Agent]:
        stmt = (
            select(Agent)
            .options(selectinload(Agent.skills))
            .where(_active_agent_clause(), Agent.embedding.is_(None))
            .order_by(Agent.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return self._scalars(stmt)

    def search_agents_by_text(
        self,
        query: str,
        category: Optional[str] = None,
        trust_tiers: Optional[Sequence[str]] = None,
        limit: int = 10
    ) -> List[Agent]:
        """Substring search over name, bio and skill name/description/category.

        Ordered founders first, then by rating and job count.
        """
        stmt = (
            select(Agent)
            .options(selectinload(Agent.skills))
            .where(_active_agent_clause(), _text_match_clause(query, include_skill_category=True))
            .order_by(
                Agent.is_founder.desc().nulls_last(),
                Agent.rating.desc().nulls_last(),
                Agent.total_jobs.desc().nulls_last(),
                Agent.id
            )
            .limit(limit)
        )
        if category:
            stmt = stmt.where(_category_clause(category))
        if trust_tiers:
            stmt = stmt.where(_trust_tier_clause(trust_tiers))
        return self._scalars(stmt)

    def search_unembedded_agents_by_text(
        self,
        query: str,
        exclude_ids: Sequence[Any] = (),
        limit: int = 10
    ) -> List[Agent]:
        """Substring search restricted to agents that have no embedding yet."""
        if limit <= 0:
            return []

        stmt = (
            select(Agent)
            .options(selectinload(Agent.skills))
            .where(
                _active_agent_clause(),
                Agent.embedding.is_(None),
                _text_match_clause(query, include_skill_category=False)
            )
            .order_by(Agent.id)
            .limit(limit)
        )
        if exclude_ids:
            stmt = stmt.where(Agent.id.not_in(list(exclude_ids)))
        return self._scalars(stmt)

    def store_embedding(self, agent_id: Any, embedding: List[float]) -> bool:
        """Overwrite the agent's embedding. Returns False if the agent does not exist."""
        try:
            agent = self.db.get(Agent, agent_id)
            if agent is None:
                logger.warning(f"Agent {agent_id} not found, embedding not stored")
                return False

            agent.embedding = [float(x) for x in embedding]
            agent.embedding_updated_at = datetime.now(timezone.utc)
            self.db.flush()
            return True
        except SQLAlchemyError as e:
            logger.error(f"Failed to store embedding for agent {agent_id}: {e}")
            raise PersistenceError(f"Failed to store embedding for agent {agent_id}: {e}") from e

    def count_embedding_coverage(self) -> Tuple[int, int]:
        """Return (active_agents, active_agents_with_embedding)."""
        stmt = select(
            func.count(Agent.id),
            func.count(Agent.id).filter(Agent.embedding.is_not(None))
        ).where(_active_agent_clause())
        try:
            total, with_embeddings = self.db.execute(stmt).one()
        except SQLAlchemyError as e:
            logger.error(f"Agent store read failed: {e}")
            raise PersistenceError(f"Agent store read failed: {e}") from e
        return int(total or 0), int(with_embeddings or 0)
