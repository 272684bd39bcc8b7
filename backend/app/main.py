"""FastAPI Application Entry Point.

Configures the app, lifespan, CORS, and includes all route modules.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from designbridge import settings
from designbridge.config import CORS_ORIGINS
from designbridge.logging_config import get_api_logger, get_engine_logger

logger = logging.getLogger("api.app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and report the active inference settings."""
    get_api_logger()
    get_engine_logger()

    if settings.LAYOUT_GROUPING != "none":
        logger.warning(
            "LAYOUT_GROUPING=%s: generated pages will wrap aligned components in "
            "layout containers. Set LAYOUT_GROUPING=none for a flat component list.",
            settings.LAYOUT_GROUPING,
        )
    logger.info(
        "Design-to-code API ready (canvas width %.0f, batch size %d)",
        settings.DEFAULT_CANVAS_WIDTH, settings.ANALYSIS_BATCH_SIZE,
    )

    yield


app = FastAPI(title="Design-to-Code API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
from .routes.design_to_code import router as design_to_code_router  # noqa: E402

app.include_router(design_to_code_router)


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "ok"}
