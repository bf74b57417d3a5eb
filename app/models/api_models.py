"""
Decision API Request/Response Models — public contract for the HTTP routes.

Field names serialize as camelCase to match the browser client.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field, StringConstraints

from app.models.base import CamelModel
from app.models.question_models import Question
from app.models.result_models import ScoredResult


class StartDecisionRequest(CamelModel):
    """Request body for POST /decision/start."""

    title: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=2, max_length=120)
    ] = Field(..., description="Decision being evaluated, trimmed before the length check")


class StartDecisionResponse(CamelModel):
    session_id: str
    decision_title: str
    questions: list[Question]
    total_questions: int
    started_at: datetime


class SubmitAnswerRequest(CamelModel):
    """Request body for POST /decision/answer."""

    session_id: str = Field(..., min_length=1)
    question_id: str = Field(..., min_length=1)
    value: int = Field(..., ge=1, le=10)


class ProgressView(CamelModel):
    answered: int
    total: int
    percent_complete: int = Field(..., ge=0, le=100)


class SubmitAnswerResponse(CamelModel):
    session_id: str
    progress: ProgressView
    next_question: Question | None = None
    is_complete: bool


class ResultResponse(CamelModel):
    result: ScoredResult
    cached: bool


class QuestionsResponse(CamelModel):
    questions: list[Question]


class ErrorResponse(CamelModel):
    error: str
    detail: str
