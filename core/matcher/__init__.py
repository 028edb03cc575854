"""Matcher Module - Semantic agent search, text fallback and embedding backfill."""
from core.matcher.models import (
    SemanticResult, TextSupplement, SemanticSearchResponse,
    BackfillResult, EmbeddingStats, METHOD_SEMANTIC, METHOD_TEXT_FALLBACK
)
from core.matcher.service import SemanticMatcher
from core.matcher.backfill import EmbeddingBackfillJob
from core.matcher.similarity import cosine_similarity, coerce_embedding

__all__ = [
    'SemanticMatcher', 'EmbeddingBackfillJob',
    'cosine_similarity', 'coerce_embedding',
    'SemanticResult', 'TextSupplement', 'SemanticSearchResponse',
    'BackfillResult', 'EmbeddingStats', 'METHOD_SEMANTIC', 'METHOD_TEXT_FALLBACK'
]
