"""API router for v1 endpoints."""

from fastapi import APIRouter

from app.api import diagnostics

router = APIRouter()

# Business-health diagnostics: run, preview and run history
router.include_router(diagnostics.router, prefix="/diagnostics", tags=["diagnostics"])
