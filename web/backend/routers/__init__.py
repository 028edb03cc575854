"""API route handlers."""

from .agents import router as agents_router
from .outcomes import router as outcomes_router
from .embeddings import router as embeddings_router
