import logging
from dataclasses import dataclass
from typing import Optional

from core.config_loader import AppConfig, EmbeddingConfig
from core.embeddings.interfaces import EmbeddingProvider
from core.embeddings.openai_service import OpenAIEmbeddingService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    The embedding client is built once per process and injected into the
    matcher and backfill job. It is None when no API key is configured, which
    puts semantic search in text-fallback mode. DB access should be obtained
    via agent_uow() or a request-scoped session.
    """
    config: AppConfig
    embedding_client: Optional[EmbeddingProvider] = None

    @property
    def embeddings_available(self) -> bool:
        return self.embedding_client is not None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance (no DB session attached)
        """
        return cls(
            config=config,
            embedding_client=cls._build_embedding_client(config.embeddings)
        )

    @staticmethod
    def _build_embedding_client(embedding_config: EmbeddingConfig) -> Optional[EmbeddingProvider]:
        """Build the OpenAI embedding client, or None without an API key."""
        if not embedding_config.api_key:
            logger.warning("No embedding API key configured; semantic search will use text fallback")
            return None

        logger.info(f"Embedding client ready (model={embedding_config.model}, dimensions={embedding_config.dimensions})")
        return OpenAIEmbeddingService(embedding_config)
