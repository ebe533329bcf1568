"""FastAPI application setup for skycast."""

from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="Skycast")


@app.get("/healthz")
def healthz():
    """Liveness probe; does not call the providers."""
    return {"ok": True}


# API routes
app.include_router(api_router, prefix="/v1")
