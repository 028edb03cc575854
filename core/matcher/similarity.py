#!/usr/bin/env python3
"""
Similarity Calculator - Cosine similarity between agent and query vectors.
"""
import json
import math
import logging
from typing import Any, List, Optional, Sequence

logger = logging.getLogger(__name__)


def coerce_embedding(value: Any, dimensions: int) -> Optional[List[float]]:
    """
    Decode a stored embedding into a list of floats.

    Accepts lists, numpy arrays (pgvector) and JSON strings. Anything that
    does not decode to ``dimensions`` finite floats is treated as no embedding.
    """
    if value is None:
        return None

    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError:
            return None

    try:
        vector = [float(x) for x in value]
    except (TypeError, ValueError):
        return None

    if len(vector) != dimensions or not all(math.isfinite(x) for x in vector):
        return None
    return vector


def cosine_similarity(vec1: Optional[Sequence[float]], vec2: Optional[Sequence[float]]) -> float:
    """
    Cosine similarity of two vectors.

    Returns:
        dot / (|vec1| * |vec2|), or 0.0 if either vector is missing, their
        dimensions differ, or either has zero norm
    """
    if vec1 is None or vec2 is None or len(vec1) == 0 or len(vec1) != len(vec2):
        return 0.0

    dot_product = sum(a * b for a, b in zip(vec1, vec2))
    norm1 = math.sqrt(sum(a * a for a in vec1))
    norm2 = math.sqrt(sum(b * b for b in vec2))

    if norm1 == 0 or norm2 == 0:
        return 0.0

    return dot_product / (norm1 * norm2)
