"""Pydantic schemas for the diagnostics API."""

from typing import Any

from pydantic import BaseModel, Field

from app.core.diagnostics.types import DiagnosticsInput


class RunDiagnosisRequest(BaseModel):
    """Request body for running and persisting a diagnosis."""
    user_id: str = Field(..., min_length=1, description="Owner of the diagnosis")
    input: DiagnosticsInput
    force_refresh: bool = Field(False, description="Recompute even if a run with the same input hash exists")


class RunDiagnosisResponse(BaseModel):
    """Persisted run plus whether it was served from an earlier computation."""
    run: dict[str, Any]
    cached: bool = False


class DiagnosticsHistoryResponse(BaseModel):
    """One page of a user's diagnostics runs, newest first."""
    runs: list[dict[str, Any]] = []
    total: int = 0
    limit: int
    offset: int
