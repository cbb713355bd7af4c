"""Diagnostics run database operations.

Runs are immutable snapshots: rows are inserted once and never updated.
A newer run for the same user supersedes older ones.
"""

from typing import Any
from uuid import UUID

from app.core.diagnostics.types import DiagnosticsRun
from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)

TABLE = "diagnostics_runs"


def insert_diagnostics_run(run: DiagnosticsRun) -> dict[str, Any]:
    """
    Persist a completed diagnosis.

    Args:
        run: Run record built by create_diagnostics_run

    Returns:
        Inserted row (with storage-assigned created_at / updated_at)

    Raises:
        ValueError: If the insert returned no row
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        response = supabase.table(TABLE).insert(run.model_dump(mode="json")).execute()

        if not response.data:
            raise ValueError("No data returned from insert_diagnostics_run")

        logger.info(
            f"Inserted diagnostics run {run.id} for user {run.user_id}",
            extra={"run_id": run.id, "user_id": run.user_id, "input_hash": run.input_hash},
        )
        return response.data[0]

    except Exception as e:
        logger.error(
            f"Failed to insert diagnostics run: {e}",
            extra={"run_id": run.id, "user_id": run.user_id},
        )
        raise


def get_diagnostics_run(run_id: UUID | str) -> dict[str, Any] | None:
    """
    Fetch a run by id.

    Returns:
        Run row, or None if not found

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        response = supabase.table(TABLE).select("*").eq("id", str(run_id)).execute()

        if not response.data:
            return None

        return response.data[0]

    except Exception as e:
        logger.error(f"Failed to fetch diagnostics run {run_id}: {e}")
        raise


def get_latest_diagnostics_run(user_id: str) -> dict[str, Any] | None:
    """
    Fetch the most recent completed run for a user.

    Returns:
        Run row, or None if the user has no completed runs

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("status", "completed")
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )

        if not response.data:
            return None

        return response.data[0]

    except Exception as e:
        logger.error(f"Failed to fetch latest diagnostics run for user {user_id}: {e}")
        raise


def list_diagnostics_runs(
    user_id: str,
    limit: int = 10,
    offset: int = 0,
) -> tuple[list[dict[str, Any]], int]:
    """
    List a user's runs, newest first.

    Args:
        user_id: Owner of the runs
        limit: Page size
        offset: Rows to skip

    Returns:
        Tuple of (rows for this page, total run count)

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table(TABLE)
            .select("*", count="exact")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1)
            .execute()
        )

        rows = response.data or []
        total = response.count or 0
        logger.info(f"Listed {len(rows)} of {total} diagnostics runs for user {user_id}")
        return rows, total

    except Exception as e:
        logger.error(f"Failed to list diagnostics runs for user {user_id}: {e}")
        raise


def find_run_by_input_hash(user_id: str, input_hash: str) -> dict[str, Any] | None:
    """
    Find the latest completed run computed from the same input.

    Returns:
        Run row, or None if no run matches the hash

    Raises:
        Exception: If database operation fails
    """
    supabase = get_supabase()

    try:
        response = (
            supabase.table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("input_hash", input_hash)
            .eq("status", "completed")
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )

        if not response.data:
            return None

        return response.data[0]

    except Exception as e:
        logger.error(
            f"Failed to look up diagnostics run by hash: {e}",
            extra={"user_id": user_id, "input_hash": input_hash},
        )
        raise
