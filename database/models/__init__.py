from .base import Base
from .agent import Agent, Skill
from .outcome import MatchOutcome, OUTCOME_VALUES

__all__ = [
    'Base',
    'Agent',
    'Skill',
    'MatchOutcome',
    'OUTCOME_VALUES',
]
