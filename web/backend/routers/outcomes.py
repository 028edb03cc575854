#!/usr/bin/env python3
"""
Outcome endpoints - record how matched jobs concluded.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.app_context import AppContext
from ..dependencies import get_db, get_app_context
from ..services.outcome_service import OutcomeService
from ..models.requests import OutcomeRequest
from ..models.responses import OutcomeResponse, LearningStatsResponse

router = APIRouter(prefix="/api/outcomes", tags=["outcomes"])


@router.post("", response_model=OutcomeResponse)
async def record_outcome(
    request: OutcomeRequest,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_app_context)
):
    """
    Record the outcome of a matched job.

    Repeated calls for the same job update the outcome only; the match score
    from the first call is kept.
    """
    service = OutcomeService(db, context.config.learning)
    return await service.record(request)


@router.get("/stats", response_model=LearningStatsResponse)
def get_outcome_stats(
    window_days: Optional[int] = Query(default=None, ge=1, le=3650, description="Trailing window in days"),
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_app_context)
):
    """Outcome counts and average match score per score range (low, medium, high)."""
    service = OutcomeService(db, context.config.learning)
    return service.get_stats(window_days=window_days)
