"""
Decision Worker — orchestrates catalog, session store, scoring, and audit.

Flow:
1. start          → sweep stale sessions, open a new one sized to the catalog
2. submit_answer  → validate against the catalog, upsert into the session
3. get_result     → cached result if present, else score the answers;
                    a COMPLETE session keeps the result, a partial one gets a
                    provisional, uncached result

Dependencies are passed in explicitly; nothing here reaches for globals.
"""

from __future__ import annotations

import logging
import uuid

from app.audit.logger import AuditLogger
from app.config import settings
from app.core.catalog import QuestionCatalog
from app.core.exceptions import (
    AnswerValidationError,
    InternalError,
    NoAnswersError,
)
from app.core.scorer import ScoringContext, score
from app.models.api_models import (
    ProgressView,
    ResultResponse,
    StartDecisionResponse,
    SubmitAnswerResponse,
)
from app.models.question_models import Question
from app.models.session_models import Answer, Progress, SessionStatus
from app.store.session_store import SessionStore

logger = logging.getLogger("compass.worker")


class DecisionWorker:
    """Runs the start → answer × N → result lifecycle of one decision."""

    def __init__(
        self,
        store: SessionStore,
        catalog: QuestionCatalog | None = None,
        audit: AuditLogger | None = None,
        full_coverage_answers: int | None = None,
    ) -> None:
        self.store = store
        self.catalog = catalog or QuestionCatalog()
        self.audit = audit
        self.full_coverage_answers = (
            full_coverage_answers
            if full_coverage_answers is not None
            else settings.full_coverage_answers
        )

    def list_questions(self) -> list[Question]:
        return self.catalog.list_questions()

    def start(self, title: str) -> StartDecisionResponse:
        self.store.sweep()
        session_id = str(uuid.uuid4())
        session = self.store.create(session_id, title, self.catalog.total)
        logger.info(f"[{session_id}] Decision started: {session.title!r}")

        return StartDecisionResponse(
            session_id=session.id,
            decision_title=session.title,
            questions=self.catalog.list_questions(),
            total_questions=session.total_question_count,
            started_at=session.started_at,
        )

    def submit_answer(self, session_id: str, question_id: str, value: int) -> SubmitAnswerResponse:
        """
        Record one answer.

        Raises:
            SessionNotFoundError / SessionExpiredError: unknown or stale session
            AnswerValidationError: unknown question or value outside its domain
            SessionCompleteError: session already holds a full answer set
        """
        # Session lookup errors take precedence over answer validation
        self.store.get(session_id)

        question = self.catalog.get(question_id)
        if question is None:
            raise AnswerValidationError(f"Unknown question '{question_id}'")
        if not question.accepts(value):
            raise AnswerValidationError(
                f"Value {value} is not allowed for question '{question_id}'",
                details=_describe_domain(question),
            )

        answer = Answer(
            question_id=question.id,
            value=value,
            category=question.category.value,
            weight=question.weight,
        )
        session = self.store.add_answer(session_id, answer)

        progress = Progress(answered=len(session.answers), total=session.total_question_count)
        is_complete = progress.is_complete
        next_question = None
        if not is_complete:
            next_question = self.catalog.next_unanswered(
                {a.question_id for a in session.answers}
            )

        logger.info(
            f"[{session_id}] Answer {question_id}={value} "
            f"({progress.answered}/{progress.total})"
        )

        return SubmitAnswerResponse(
            session_id=session_id,
            progress=ProgressView(
                answered=progress.answered,
                total=progress.total,
                percent_complete=progress.percent_complete,
            ),
            next_question=next_question,
            is_complete=is_complete,
        )

    def get_result(self, session_id: str) -> ResultResponse:
        """
        Score a session, or return its cached result.

        Raises:
            SessionNotFoundError / SessionExpiredError: unknown or stale session
            NoAnswersError: nothing has been answered yet
            InternalError: scoring failed unexpectedly
        """
        session = self.store.get(session_id)

        if session.result is not None:
            logger.info(f"[{session_id}] Returning cached result")
            return ResultResponse(result=session.result, cached=True)

        if not session.answers:
            raise NoAnswersError(f"Session '{session_id}' has no answers yet")

        context = ScoringContext(
            session_id=session.id,
            decision_title=session.title,
            full_coverage_answers=self.full_coverage_answers,
        )

        try:
            result = score(session.answers, context)
        except Exception as e:
            logger.exception(f"[{session_id}] Scoring failed")
            raise InternalError("Scoring failed", details=str(e)) from e

        logger.info(
            f"[{session_id}] Scored: {result.recommendation.decision.value} "
            f"(adjusted={result.recommendation.adjusted_score}, "
            f"severity={result.risk.severity.value}, "
            f"confidence={result.confidence.score})"
        )

        if session.status != SessionStatus.COMPLETE:
            logger.info(
                f"[{session_id}] Provisional result "
                f"({len(session.answers)}/{session.total_question_count} answered), not cached"
            )
            return ResultResponse(result=result, cached=False)

        stored = self.store.attach_result(session_id, result)
        if stored.result == result and self.audit is not None:
            self.audit.log(result)

        return ResultResponse(result=stored.result or result, cached=False)


def _describe_domain(question: Question) -> str:
    if question.options:
        return "allowed values: " + ", ".join(str(o.value) for o in question.options)
    return f"allowed range: {question.min or 1}-{question.max or 10}"
