"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import get_session_store
from app.store.session_store import SessionStore

APP_VERSION = "1.0.0"

router = APIRouter()


@router.get("/health")
async def health(store: SessionStore = Depends(get_session_store)):
    """Health check endpoint."""
    stats = store.stats()
    return {
        "status": "ok",
        "version": APP_VERSION,
        "activeSessions": stats["in_progress"],
        "sessions": stats,
    }
