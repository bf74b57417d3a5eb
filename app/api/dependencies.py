"""
FastAPI Dependencies — Shared singletons injected via Depends().

The session store is process-scoped: created on first use, never torn down.
"""

from __future__ import annotations

from functools import lru_cache

from app.audit.logger import AuditLogger
from app.config import settings
from app.core.catalog import QuestionCatalog
from app.store.session_store import SessionStore
from app.workers.decision_worker import DecisionWorker


@lru_cache
def get_session_store() -> SessionStore:
    """Shared session store singleton."""
    return SessionStore(
        ttl_seconds=settings.session_ttl_seconds,
        retention_seconds=settings.session_retention_seconds,
    )


@lru_cache
def get_question_catalog() -> QuestionCatalog:
    """Shared question catalog singleton."""
    return QuestionCatalog()


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Shared audit logger singleton."""
    return AuditLogger()


@lru_cache
def get_decision_worker() -> DecisionWorker:
    """Shared decision worker singleton."""
    return DecisionWorker(
        store=get_session_store(),
        catalog=get_question_catalog(),
        audit=get_audit_logger(),
    )
