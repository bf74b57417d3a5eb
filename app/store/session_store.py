"""
Session Store — in-memory keyed state machine for decisions in progress.

States: IN_PROGRESS → COMPLETE, IN_PROGRESS → EXPIRED.

Expiry is lazy: every access checks the session's deadline, so no timer is
held per session and nothing can fire against an evicted record. A COMPLETE
session never expires. `sweep()` drops EXPIRED and COMPLETE records once a
retention window past `expires_at` has elapsed; until then a stale id still
answers `session_expired`. Mutations on one session id are serialized by a
per-key lock; the key map itself sits behind a registry lock.

Lives for the process lifetime. Upgradeable to Redis by swapping the storage
backend.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Any

from app.config import settings
from app.core.exceptions import (
    SessionCompleteError,
    SessionExpiredError,
    SessionFullError,
    SessionNotFoundError,
)
from app.models.result_models import ScoredResult
from app.models.session_models import Answer, Progress, Session, SessionStatus

logger = logging.getLogger("compass.store")

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStore:
    """
    Keyed session storage with lifecycle enforcement.

    Usage:
        store = SessionStore()
        store.create("abc123", "Move to Berlin?", total_question_count=10)
        store.add_answer("abc123", Answer(question_id="feas_1", value=7, ...))
        store.progress("abc123")  # Progress(answered=1, total=10)

    Sessions handed out are copies; the stored record changes only through
    the store's own methods.
    """

    def __init__(
        self,
        ttl_seconds: int | None = None,
        clock: Clock | None = None,
        retention_seconds: int | None = None,
    ) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else settings.session_ttl_seconds
        retention = (
            retention_seconds
            if retention_seconds is not None
            else settings.session_retention_seconds
        )
        self.ttl = timedelta(seconds=ttl)
        self.retention = timedelta(seconds=retention)
        self._clock = clock or utcnow
        self._sessions: dict[str, Session] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    # ── Lifecycle ──

    def create(self, session_id: str, title: str, total_question_count: int) -> Session:
        """Allocate a new IN_PROGRESS session expiring one TTL from now."""
        now = self._clock()
        session = Session(
            id=session_id,
            title=title,
            total_question_count=total_question_count,
            started_at=now,
            updated_at=now,
            expires_at=now + self.ttl,
        )
        with self._registry_lock:
            if session_id in self._sessions:
                raise ValueError(f"Session '{session_id}' already exists")
            self._sessions[session_id] = session
            self._locks[session_id] = threading.Lock()

        logger.info(
            f"[{session_id}] Session created ({total_question_count} questions, "
            f"expires {session.expires_at.isoformat()})"
        )
        return session.model_copy(deep=True)

    def get(self, session_id: str) -> Session:
        """Look up a session. Raises SessionNotFoundError / SessionExpiredError."""
        with self._locked(session_id) as session:
            return session.model_copy(deep=True)

    def add_answer(self, session_id: str, answer: Answer) -> Session:
        """
        Upsert an answer by question id.

        A repeated question id replaces the earlier answer in place, so retries
        never inflate progress. The session turns COMPLETE once it holds
        ``total_question_count`` answers.
        """
        with self._locked(session_id) as session:
            index = _index_of(session.answers, answer.question_id)

            if session.status == SessionStatus.COMPLETE:
                if index is not None and session.answers[index].value == answer.value:
                    logger.debug(f"[{session_id}] Duplicate answer on complete session ignored")
                    return session.model_copy(deep=True)
                raise SessionCompleteError(
                    f"Session '{session_id}' is complete and no longer accepts answers"
                )

            if index is not None:
                session.answers[index] = answer.model_copy()
                logger.debug(f"[{session_id}] Replaced answer for {answer.question_id}")
            else:
                if len(session.answers) >= session.total_question_count:
                    raise SessionFullError(
                        f"Session '{session_id}' already has "
                        f"{session.total_question_count} answers"
                    )
                session.answers.append(answer.model_copy())

            session.updated_at = self._clock()

            if len(session.answers) >= session.total_question_count:
                session.status = SessionStatus.COMPLETE
                logger.info(f"[{session_id}] All {session.total_question_count} questions answered")

            return session.model_copy(deep=True)

    def attach_result(self, session_id: str, result: ScoredResult) -> Session:
        """Store the scored result and force COMPLETE. The first result wins."""
        with self._locked(session_id) as session:
            if session.result is not None:
                logger.warning(f"[{session_id}] Result already attached, keeping the original")
                return session.model_copy(deep=True)

            session.result = result.model_copy(deep=True)
            session.status = SessionStatus.COMPLETE
            session.updated_at = self._clock()
            logger.info(f"[{session_id}] Result attached")
            return session.model_copy(deep=True)

    def progress(self, session_id: str) -> Progress:
        with self._locked(session_id) as session:
            return Progress(answered=len(session.answers), total=session.total_question_count)

    def evict(self, session_id: str) -> bool:
        """Remove a session outright. Returns False if it was not stored."""
        with self._registry_lock:
            removed = self._sessions.pop(session_id, None)
            self._locks.pop(session_id, None)
        if removed is not None:
            logger.info(f"[{session_id}] Session evicted")
        return removed is not None

    def sweep(self) -> int:
        """
        Expire every overdue IN_PROGRESS session, then evict finished
        sessions whose retention window has passed.

        Returns how many sessions flipped to EXPIRED.
        """
        with self._registry_lock:
            entries = [(sid, self._locks[sid]) for sid in self._sessions]

        expired = 0
        stale: list[str] = []
        now = self._clock()
        for session_id, lock in entries:
            with lock:
                session = self._sessions.get(session_id)
                if session is None:
                    continue
                if self._expire_if_due(session):
                    expired += 1
                if (
                    session.status != SessionStatus.IN_PROGRESS
                    and now >= session.expires_at + self.retention
                ):
                    stale.append(session_id)

        for session_id in stale:
            self.evict(session_id)
        if stale:
            logger.info(f"Sweep evicted {len(stale)} stale session(s)")
        return expired

    # ── Introspection ──

    @property
    def size(self) -> int:
        """Number of stored sessions, whatever their status."""
        return len(self._sessions)

    def stats(self) -> dict[str, Any]:
        """Session counts by status."""
        self.sweep()
        with self._registry_lock:
            statuses = [s.status for s in self._sessions.values()]
        return {
            "total_sessions": len(statuses),
            "in_progress": statuses.count(SessionStatus.IN_PROGRESS),
            "complete": statuses.count(SessionStatus.COMPLETE),
            "expired": statuses.count(SessionStatus.EXPIRED),
        }

    # ── Internals ──

    @contextmanager
    def _locked(self, session_id: str) -> Iterator[Session]:
        """Hold the session's lock and yield the live, unexpired record."""
        with self._registry_lock:
            lock = self._locks.get(session_id)
        if lock is None:
            raise SessionNotFoundError(session_id)

        with lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            self._expire_if_due(session)
            if session.status == SessionStatus.EXPIRED:
                raise SessionExpiredError(session_id)
            yield session

    def _expire_if_due(self, session: Session) -> bool:
        if session.status != SessionStatus.IN_PROGRESS:
            return False
        if self._clock() < session.expires_at:
            return False
        session.status = SessionStatus.EXPIRED
        logger.info(f"[{session.id}] Session expired before completion")
        return True


def _index_of(answers: list[Answer], question_id: str) -> int | None:
    for i, answer in enumerate(answers):
        if answer.question_id == question_id:
            return i
    return None
