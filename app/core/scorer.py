"""
Decision Scorer — the five-stage scoring pipeline.

Pipeline:
1. Accumulate a weighted mean per category (0-10)
2. Normalize each category to 0-100
3. Analyze risk → severity, flags, warnings
4. Recommend a verdict from the opportunity score less a risk penalty
5. Rate confidence from coverage, spread, and flag count

Pure and deterministic: no I/O, and malformed answers are skipped rather
than raised on.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.core.confidence import FULL_COVERAGE_ANSWERS, compute_confidence
from app.core.normalizer import accumulate_raw, normalize_scores
from app.core.recommender import recommend
from app.core.risk_analyzer import analyze_risk
from app.models.result_models import ScoredResult
from app.models.session_models import Answer

logger = logging.getLogger("compass.scorer")


@dataclass(frozen=True)
class ScoringContext:
    """Session metadata stamped onto a scored result."""

    session_id: str
    decision_title: str
    scored_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    full_coverage_answers: int = FULL_COVERAGE_ANSWERS


def score(answers: Sequence[Answer], context: ScoringContext) -> ScoredResult:
    """Run all five stages over ``answers`` and assemble the result."""
    raw = accumulate_raw(answers)
    scores = normalize_scores(raw)
    risk = analyze_risk(scores)
    recommendation = recommend(scores, risk)
    confidence = compute_confidence(
        scores, risk, len(answers), context.full_coverage_answers
    )

    logger.debug(
        f"[{context.session_id}] scores={scores} severity={risk.severity.value} "
        f"decision={recommendation.decision.value} confidence={confidence.score}"
    )

    return ScoredResult(
        session_id=context.session_id,
        decision_title=context.decision_title,
        total_answers=len(answers),
        scored_at=context.scored_at,
        scores=scores,
        risk=risk,
        recommendation=recommendation,
        confidence=confidence,
    )
