"""
Embedding Provider Interface - Abstract base for embedding services.

Implementations must never raise from embed_text: any provider problem comes
back as None so search can degrade to text matching.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from core.embeddings.profile_text import build_agent_profile_text


class EmbeddingProvider(ABC):
    """
    Abstract Interface for embedding providers (OpenAI, OpenAI-compatible gateways, ...).
    """

    model: str = ''
    dimensions: int = 0

    @abstractmethod
    async def embed_text(self, text: str) -> Optional[List[float]]:
        """
        Generate a vector embedding for the given text.

        Returns:
            A vector of ``dimensions`` floats, or None on blank input or failure
        """
        pass

    async def embed_agent(self, agent: Any) -> Optional[List[float]]:
        """Embed the agent's profile text; None when the profile is empty."""
        text = build_agent_profile_text(agent)
        if not text.strip():
            return None
        return await self.embed_text(text)
