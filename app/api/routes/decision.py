"""
Decision Routes — start a decision, submit answers, fetch the result.

  POST /decision/start               → new session + full question list
  POST /decision/answer              → upsert one answer, report progress
  GET  /decision/{session_id}/result → scored result (cached once complete,
                                        provisional before that)

Domain errors propagate to the handlers registered in app.main.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_decision_worker
from app.models.api_models import (
    ErrorResponse,
    ResultResponse,
    StartDecisionRequest,
    StartDecisionResponse,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
)
from app.workers.decision_worker import DecisionWorker

logger = logging.getLogger("compass.api.decision")

router = APIRouter(prefix="/decision", tags=["decision"])

_ERRORS = {
    404: {"model": ErrorResponse, "description": "Session not found or expired"},
}


@router.post("/start", response_model=StartDecisionResponse)
async def start_decision(
    request: StartDecisionRequest,
    worker: DecisionWorker = Depends(get_decision_worker),
):
    """Open a new decision session and return the questionnaire."""
    return worker.start(request.title)


@router.post(
    "/answer",
    response_model=SubmitAnswerResponse,
    responses={
        **_ERRORS,
        409: {"model": ErrorResponse, "description": "Session already complete"},
        422: {"model": ErrorResponse, "description": "Unknown question or invalid value"},
    },
)
async def submit_answer(
    request: SubmitAnswerRequest,
    worker: DecisionWorker = Depends(get_decision_worker),
):
    """
    Record an answer.

    Resubmitting the same question replaces the earlier answer, so retries
    never inflate progress.
    """
    return worker.submit_answer(request.session_id, request.question_id, request.value)


@router.get(
    "/{session_id}/result",
    response_model=ResultResponse,
    responses={
        **_ERRORS,
        400: {"model": ErrorResponse, "description": "No answers submitted yet"},
    },
)
async def get_result(
    session_id: str,
    worker: DecisionWorker = Depends(get_decision_worker),
):
    """
    Score the session.

    Completed sessions return the same cached result every time. A session
    that is still missing answers gets a provisional result: scored fresh on
    each call, never cached and never audited.
    """
    return worker.get_result(session_id)
