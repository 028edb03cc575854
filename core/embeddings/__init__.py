"""Embeddings Module - Embedding provider interface and OpenAI implementation."""
from core.embeddings.interfaces import EmbeddingProvider
from core.embeddings.openai_service import OpenAIEmbeddingService
from core.embeddings.profile_text import build_agent_profile_text

__all__ = ['EmbeddingProvider', 'OpenAIEmbeddingService', 'build_agent_profile_text']
