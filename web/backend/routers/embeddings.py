#!/usr/bin/env python3
"""
Embedding endpoints - coverage monitoring.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.app_context import AppContext
from ..dependencies import get_db, get_app_context
from ..services.agent_service import AgentService
from ..models.responses import EmbeddingStatsResponse

router = APIRouter(prefix="/api/embeddings", tags=["embeddings"])


@router.get("/stats", response_model=EmbeddingStatsResponse)
def get_embedding_stats(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_app_context)
):
    """How many active agents have a profile embedding."""
    return AgentService(db, context).get_embedding_stats()
