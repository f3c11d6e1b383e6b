"""Health check endpoint — public, no auth required."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from src.dependencies import AppSettings, Store

router = APIRouter(tags=["system"])
logger = logging.getLogger("pcos_tracker.health")


@router.get("/health")
async def health_check(settings: AppSettings, store: Store) -> dict:
    """Liveness probe. Returns 200 if the API process is up.

    Entries live in process memory only, so the entry count doubles as a
    check that the session store is attached.
    """
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
        "entries": len(store),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
