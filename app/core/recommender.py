"""
Recommender — stage 4 of the scoring pipeline.

    opportunity = round(impact×0.4 + feasibility×0.3 + resources×0.2 + urgency×0.1)
    adjusted    = max(0, opportunity - severity_penalty)

A CRITICAL severity blocks the decision outright; otherwise the adjusted
score picks the verdict.
"""

from __future__ import annotations

from app.core.normalizer import round_half_up
from app.models.result_models import (
    SEVERITY_PENALTIES,
    Decision,
    Recommendation,
    RiskReport,
    Severity,
)

OPPORTUNITY_WEIGHTS: dict[str, float] = {
    "impact": 0.4,
    "feasibility": 0.3,
    "resources": 0.2,
    "urgency": 0.1,
}

MISSING_CATEGORY_SCORE = 50

# (minimum adjusted score, decision, rationale, action), highest first
VERDICT_THRESHOLDS: list[tuple[int, Decision, str, str]] = [
    (
        75,
        Decision.PROCEED,
        "Strong opportunity with manageable risk.",
        "Commit to the decision and set a date for the first milestone.",
    ),
    (
        55,
        Decision.PROCEED_WITH_CAUTION,
        "The opportunity is real but some factors are weak.",
        "Proceed in a limited first step and review the flagged areas before scaling up.",
    ),
    (
        35,
        Decision.DEFER,
        "The case is not yet strong enough to commit.",
        "Gather more information on the weakest categories and revisit the decision.",
    ),
]

LOW_OPPORTUNITY_RATIONALE = "The opportunity score is too low to justify the effort."
LOW_OPPORTUNITY_ACTION = "Drop this option or rework it substantially before reconsidering."

CRITICAL_RISK_RATIONALE = (
    "Critical risk factors block this decision regardless of its opportunity score."
)
CRITICAL_RISK_ACTION = (
    "Do not proceed until the flagged risk combinations have been resolved."
)


def opportunity_score(scores: dict[str, int]) -> int:
    total = sum(
        scores.get(category, MISSING_CATEGORY_SCORE) * weight
        for category, weight in OPPORTUNITY_WEIGHTS.items()
    )
    return round_half_up(total)


def recommend(scores: dict[str, int], risk: RiskReport) -> Recommendation:
    """Turn normalized scores and the risk report into a verdict."""
    opportunity = opportunity_score(scores)
    adjusted = max(0, opportunity - SEVERITY_PENALTIES[risk.severity])

    if risk.severity == Severity.CRITICAL:
        return Recommendation(
            decision=Decision.DO_NOT_PROCEED,
            rationale=CRITICAL_RISK_RATIONALE,
            action=CRITICAL_RISK_ACTION,
            opportunity_score=opportunity,
            adjusted_score=adjusted,
        )

    for minimum, decision, rationale, action in VERDICT_THRESHOLDS:
        if adjusted >= minimum:
            return Recommendation(
                decision=decision,
                rationale=rationale,
                action=action,
                opportunity_score=opportunity,
                adjusted_score=adjusted,
            )

    return Recommendation(
        decision=Decision.DO_NOT_PROCEED,
        rationale=LOW_OPPORTUNITY_RATIONALE,
        action=LOW_OPPORTUNITY_ACTION,
        opportunity_score=opportunity,
        adjusted_score=adjusted,
    )
