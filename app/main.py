"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.api import router as api_router
from app.core.diagnostics import MODEL_VERSION, TABLES_VERSION

app = FastAPI(
    title="SME Diagnostics Engine",
    description="Rules-based business-health diagnostics for small and medium enterprises",
    version="0.1.0",
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(
        content={"status": "ok", "model_version": MODEL_VERSION, "tables_version": TABLES_VERSION},
        status_code=200,
    )


# Include v1 API router
app.include_router(api_router, prefix="/v1", tags=["v1"])
