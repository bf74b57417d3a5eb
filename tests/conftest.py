"""
Test fixtures shared across all Decision Compass tests.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from app.audit.logger import AuditLogger
from app.core.catalog import QuestionCatalog
from app.models.session_models import Answer
from app.store.session_store import SessionStore
from app.workers.decision_worker import DecisionWorker

TTL_SECONDS = 7200


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(ttl_seconds=TTL_SECONDS, clock=clock)


@pytest.fixture
def catalog():
    return QuestionCatalog()


@pytest.fixture
def audit_logger(tmp_path):
    return AuditLogger(log_path=str(tmp_path / "audit.jsonl"), enabled=True)


@pytest.fixture
def audit_entries(audit_logger):
    """Reads back every JSON entry written by the audit_logger fixture."""
    def _read():
        if not audit_logger.log_path.exists():
            return []
        with open(audit_logger.log_path) as f:
            return [json.loads(line) for line in f if line.strip()]
    return _read


@pytest.fixture
def worker(store, catalog, audit_logger):
    return DecisionWorker(store=store, catalog=catalog, audit=audit_logger)


@pytest.fixture
def make_answer():
    """Factory for answers with sensible defaults."""
    def _make(question_id="q1", value=5, category="feasibility", weight=1.0):
        return Answer(question_id=question_id, value=value, category=category, weight=weight)
    return _make


@pytest.fixture
def valid_answers(catalog):
    """A value inside each catalog question's domain, keyed by question id."""
    values = {}
    for question in catalog.list_questions():
        if question.options:
            values[question.id] = question.options[-1].value
        else:
            values[question.id] = question.max or 10
    return values
