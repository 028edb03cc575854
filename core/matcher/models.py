#!/usr/bin/env python3
"""
Matcher Models - Data structures for semantic search.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional

METHOD_SEMANTIC = 'semantic'
METHOD_TEXT_FALLBACK = 'text-fallback'

SUPPLEMENT_NOTE = "Text match (no embedding yet)"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SemanticResult:
    """One ranked agent with its similarity to the query."""
    agent: Any
    similarity: float
    matched_skills: List[str] = field(default_factory=list)
    method: str = METHOD_SEMANTIC


@dataclass
class TextSupplement:
    """Text-matched agent without an embedding, listed apart from ranked results."""
    agent_id: Any
    name: str
    skills: List[str] = field(default_factory=list)
    note: str = SUPPLEMENT_NOTE


@dataclass
class SemanticSearchResponse:
    results: List[SemanticResult] = field(default_factory=list)
    supplements: List[TextSupplement] = field(default_factory=list)
    method: str = METHOD_SEMANTIC
    query: Optional[str] = None
    total_with_embeddings: int = 0
    timestamp: str = field(default_factory=_utc_timestamp)


@dataclass
class BackfillResult:
    """Outcome of one backfill run. processed + failed <= total; equal unless cancelled."""
    total: int = 0
    processed: int = 0
    failed: int = 0
    batches: int = 0
    cancelled: bool = False


@dataclass
class EmbeddingStats:
    total_agents: int
    with_embeddings: int
    without_embeddings: int
    coverage_percent: int
    embeddings_available: bool
    model: Optional[str]
    dimensions: int
