"""Main FastAPI application for the rate board."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from rateboard.core.db import init_db, bootstrap_db
from rateboard.core.logging import setup_logging, log_event
from rateboard.domain.errors import StoreError


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging()
    init_db()
    bootstrap_db()
    logging.getLogger(__name__).info("Rate board API ready")
    yield


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


app = FastAPI(
    title="Rate Board API",
    description="Gold/silver rates, display settings and playlists for the shop display",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    log_event(
        "request_rejected",
        level=logging.WARNING,
        path=request.url.path,
        status=exc.status_code,
        error=exc.__class__.__name__,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "errors": exc.errors},
    )


from rateboard.api import health, rates, settings, media, promo, banner, system  # noqa: E402

# Mount health endpoints unversioned for infra probes (/health, /ready)
app.include_router(health.router)

app.include_router(rates.router, prefix="/api/v1")
app.include_router(settings.router, prefix="/api/v1")
app.include_router(media.router, prefix="/api/v1")
app.include_router(promo.router, prefix="/api/v1")
app.include_router(banner.router, prefix="/api/v1")
app.include_router(system.router, prefix="/api/v1")


@app.get("/")
async def root() -> RedirectResponse:
    """Redirect root to Swagger UI."""
    return RedirectResponse(url="/api/docs")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8080)
