"""API endpoints for business-health diagnostics."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query

from app.core.config import get_settings
from app.core.diagnostics import (
    DiagnosticsInput,
    DiagnosticsOutput,
    compute_input_hash,
    create_diagnostics_run,
    run_diagnosis,
)
from app.core.logging import get_logger, log_with_context
from app.core.schemas_diagnostics import (
    DiagnosticsHistoryResponse,
    RunDiagnosisRequest,
    RunDiagnosisResponse,
)
from app.db.diagnostics_runs import (
    find_run_by_input_hash,
    get_diagnostics_run,
    get_latest_diagnostics_run,
    insert_diagnostics_run,
    list_diagnostics_runs,
)

logger = get_logger(__name__)

router = APIRouter()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _with_reference_time(data: DiagnosticsInput) -> DiagnosticsInput:
    """Pin the reference time to the request time when the caller omits it."""
    if data.as_of is not None:
        return data
    return data.model_copy(update={"as_of": _utcnow()})


@router.post("/run", response_model=RunDiagnosisResponse)
async def run_diagnostics(request: RunDiagnosisRequest) -> RunDiagnosisResponse:
    """
    Run a diagnosis and persist it as a new run.

    Unless force_refresh is set, a completed run computed from the same
    input hash is returned instead of recomputing.

    Args:
        request: User id, diagnostics input and refresh flag

    Returns:
        RunDiagnosisResponse with the stored run and cache flag

    Raises:
        HTTPException 500: If storage fails
    """
    data = _with_reference_time(request.input)
    input_hash = compute_input_hash(data)

    try:
        if not request.force_refresh:
            existing = find_run_by_input_hash(request.user_id, input_hash)
            if existing:
                log_with_context(
                    logger,
                    logging.INFO,
                    "Returning cached diagnostics run",
                    run_id=existing.get("id"),
                    user_id=request.user_id,
                    input_hash=input_hash,
                )
                return RunDiagnosisResponse(run=existing, cached=True)

        settings = get_settings()
        output = run_diagnosis(
            data,
            model_version=settings.DIAGNOSTICS_MODEL_VERSION,
            prompt_version=settings.DIAGNOSTICS_PROMPT_VERSION,
        )
        run = create_diagnostics_run(request.user_id, data, output)
        stored = insert_diagnostics_run(run)

        log_with_context(
            logger,
            logging.INFO,
            "Stored diagnostics run",
            run_id=run.id,
            user_id=request.user_id,
            input_hash=input_hash,
            health_band=run.overall_health_band.value,
        )
        return RunDiagnosisResponse(run=stored, cached=False)

    except Exception as e:
        logger.exception(f"Failed to run diagnostics for user {request.user_id}")
        raise HTTPException(status_code=500, detail="Failed to run diagnostics") from e


@router.post("/preview", response_model=DiagnosticsOutput)
async def preview_diagnostics(data: DiagnosticsInput) -> DiagnosticsOutput:
    """Run a diagnosis without persisting it."""
    settings = get_settings()
    return run_diagnosis(
        _with_reference_time(data),
        model_version=settings.DIAGNOSTICS_MODEL_VERSION,
        prompt_version=settings.DIAGNOSTICS_PROMPT_VERSION,
    )


@router.get("/latest/{user_id}")
async def get_latest_run(user_id: str) -> dict:
    """
    Get a user's most recent completed run.

    Raises:
        HTTPException 404: If the user has no runs
        HTTPException 500: If storage fails
    """
    try:
        run = get_latest_diagnostics_run(user_id)
    except Exception as e:
        logger.exception(f"Failed to fetch latest diagnostics run for user {user_id}")
        raise HTTPException(status_code=500, detail="Failed to fetch diagnostics run") from e

    if run is None:
        raise HTTPException(status_code=404, detail="No diagnostics run found")
    return run


@router.get("/history/{user_id}", response_model=DiagnosticsHistoryResponse)
async def get_run_history(
    user_id: str,
    limit: int | None = Query(None, ge=1, description="Page size (capped by configuration)"),
    offset: int = Query(0, ge=0),
) -> DiagnosticsHistoryResponse:
    """List a user's runs, newest first."""
    settings = get_settings()
    page_size = min(limit or settings.DIAGNOSTICS_HISTORY_LIMIT, settings.DIAGNOSTICS_HISTORY_MAX_LIMIT)

    try:
        runs, total = list_diagnostics_runs(user_id, limit=page_size, offset=offset)
    except Exception as e:
        logger.exception(f"Failed to list diagnostics runs for user {user_id}")
        raise HTTPException(status_code=500, detail="Failed to list diagnostics runs") from e

    return DiagnosticsHistoryResponse(runs=runs, total=total, limit=page_size, offset=offset)


@router.get("/runs/{run_id}")
async def get_run(run_id: UUID) -> dict:
    """
    Get a single run by id.

    Raises:
        HTTPException 404: If the run does not exist
        HTTPException 500: If storage fails
    """
    try:
        run = get_diagnostics_run(run_id)
    except Exception as e:
        logger.exception(f"Failed to fetch diagnostics run {run_id}")
        raise HTTPException(status_code=500, detail="Failed to fetch diagnostics run") from e

    if run is None:
        raise HTTPException(status_code=404, detail="Diagnostics run not found")
    return run
