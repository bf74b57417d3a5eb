"""
Session Data Models — Answers, session lifecycle state, and progress.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from app.models.base import CamelModel
from app.models.result_models import ScoredResult


class SessionStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"
    EXPIRED = "EXPIRED"


class Answer(CamelModel):
    """One answer to one question, carrying the question's category and weight."""

    question_id: str
    value: int | float | None = None
    category: str | None = None
    weight: float | None = None


class Session(CamelModel):
    """A single decision-in-progress. Mutated only through SessionStore."""

    id: str
    title: str
    total_question_count: int = Field(..., ge=0)
    answers: list[Answer] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.IN_PROGRESS
    started_at: datetime
    updated_at: datetime
    expires_at: datetime
    result: ScoredResult | None = None


class Progress(CamelModel):
    """Read-only projection of how far a session has come."""

    answered: int
    total: int

    @property
    def percent_complete(self) -> int:
        if self.total <= 0:
            return 100
        return min(100, int(self.answered * 100 / self.total + 0.5))

    @property
    def is_complete(self) -> bool:
        return self.answered >= self.total
