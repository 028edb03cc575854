#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field


class OutcomeRequest(BaseModel):
    """Outcome of a job that was matched to an agent."""
    job_id: str = Field(..., min_length=1, description="Job identifier (one outcome row per job)")
    agent_id: int = Field(..., description="Agent that was matched")
    match_score: int = Field(..., ge=0, le=100, description="Score at match time (kept from the first recording)")
    outcome: str = Field(..., description="How the job concluded: completed, disputed or cancelled")
