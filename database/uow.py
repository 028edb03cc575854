import contextlib
import logging

from database.database import get_session_factory
from database.repositories import AgentRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def agent_uow(database_url: str = None):
    """Per-unit-of-work transaction scope.

    Yields an AgentRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with agent_uow() as repo:
            agents = repo.get_active_agents()
        # commit happens automatically on successful exit
    """
    session = get_session_factory(database_url)()
    try:
        repo = AgentRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()



