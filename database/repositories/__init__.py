from database.repositories.base import BaseRepository
from database.repositories.agent import AgentRepository
from database.repositories.outcome import OutcomeRepository

__all__ = [
    'BaseRepository',
    'AgentRepository',
    'OutcomeRepository',
]
