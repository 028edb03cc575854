"""
Engine Exceptions - Error taxonomy for discovery and ranking.

Provider errors are absorbed by the search fallback and never reach callers
of semantic search. Persistence errors propagate on read paths and are
counted on best-effort writes.
"""


class EngineError(Exception):
    """Base exception for the discovery engine."""
    pass


class ProviderUnavailableError(EngineError):
    """Raised when no embedding provider credential is configured."""
    pass


class ProviderFailureError(EngineError):
    """Raised when a call to the embedding provider fails or times out."""
    pass


class PersistenceError(EngineError):
    """Raised when the agent or outcome store cannot be read or written."""
    pass
