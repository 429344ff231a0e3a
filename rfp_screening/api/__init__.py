"""
FastAPI application factory and API package.

Run with:
    uvicorn rfp_screening.api:app --reload --port 8000

Or via main.py:
    python -m rfp_screening --serve
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rfp_screening.config import get_settings
from rfp_screening.api.routes import (
    health_router,
    profile_router,
    proposal_router,
    screening_router,
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Application factory — create and configure the FastAPI instance."""
    settings = get_settings()

    application = FastAPI(
        title="RFP Bid Screening API",
        description="GO / NO-GO screening of RFPs against a company capability profile",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS: the profile editor UI is served from another origin
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(health_router, tags=["Health"])
    application.include_router(screening_router, prefix="/api/screening", tags=["Screening"])
    application.include_router(profile_router, prefix="/api/profile", tags=["Profile"])
    application.include_router(proposal_router, prefix="/api/proposal", tags=["Proposal"])

    logger.info(
        f"Created {settings.app_name} API "
        f"(llm={'on' if settings.llm_configured else 'off'}, "
        f"profile store={settings.profile_store_backend})"
    )
    return application


# Module-level instance for `uvicorn rfp_screening.api:app`
app = create_app()
