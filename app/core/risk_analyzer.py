"""
Risk Analyzer — stage 3 of the scoring pipeline.

Answers in the risk category measure *safety*, so the normalized risk score is
inverted into an exposure score before any threshold is applied:

    effective_risk = 100 - normalized_risk

Rules run in a fixed order and each may append a flag or warning. Severity
only ever escalates within one pass.
"""

from __future__ import annotations

from app.models.question_models import Category
from app.models.result_models import SEVERITY_RANK, RiskFlag, RiskReport, Severity

HIGH_RISK_THRESHOLD = 35
LOW_SCORE_THRESHOLD = 40
COMBO_EXPOSURE_THRESHOLD = 50

RISK = Category.RISK.value
FEASIBILITY = Category.FEASIBILITY.value
RESOURCES = Category.RESOURCES.value

# Category pairs that block a decision when the first is high and the second low
CRITICAL_PAIRS: tuple[tuple[str, str], ...] = (
    (RISK, RESOURCES),
    (RISK, FEASIBILITY),
)

SAFE_SEVERITIES = frozenset({Severity.LOW, Severity.MEDIUM})


def _escalate(current: Severity, target: Severity) -> Severity:
    return target if SEVERITY_RANK[target] > SEVERITY_RANK[current] else current


def _resolve(category: str, scores: dict[str, int], effective_risk: int) -> int:
    if category == RISK:
        return effective_risk
    return scores.get(category, 100)


def analyze_risk(scores: dict[str, int]) -> RiskReport:
    """
    Classify risk from normalized category scores.

    Unanswered categories take neutral defaults: risk 0 (so full exposure),
    feasibility and resources 100.
    """
    normalized_risk = scores.get(RISK, 0)
    feasibility = scores.get(FEASIBILITY, 100)
    resources = scores.get(RESOURCES, 100)
    effective_risk = 100 - normalized_risk

    severity = Severity.LOW
    flags: list[RiskFlag] = []
    warnings: list[RiskFlag] = []

    if effective_risk >= HIGH_RISK_THRESHOLD:
        flags.append(
            RiskFlag(
                code="HIGH_RISK",
                message=f"Risk exposure is {effective_risk}/100",
                categories=[RISK],
            )
        )
        severity = _escalate(severity, Severity.HIGH)

    if feasibility < LOW_SCORE_THRESHOLD:
        warnings.append(
            RiskFlag(
                code="LOW_FEASIBILITY",
                message=f"Feasibility is only {feasibility}/100",
                categories=[FEASIBILITY],
            )
        )
        severity = _escalate(severity, Severity.MEDIUM)

    if resources < LOW_SCORE_THRESHOLD:
        warnings.append(
            RiskFlag(
                code="RESOURCE_CONSTRAINT",
                message=f"Available resources score only {resources}/100",
                categories=[RESOURCES],
            )
        )
        severity = _escalate(severity, Severity.MEDIUM)

    for first, second in CRITICAL_PAIRS:
        score_a = _resolve(first, scores, effective_risk)
        score_b = _resolve(second, scores, effective_risk)
        if score_a >= COMBO_EXPOSURE_THRESHOLD and score_b < LOW_SCORE_THRESHOLD:
            flags.append(
                RiskFlag(
                    code="CRITICAL_COMBO",
                    message=f"High {first} ({score_a}) combined with low {second} ({score_b})",
                    categories=[first, second],
                )
            )
            severity = Severity.CRITICAL

    return RiskReport(
        severity=severity,
        effective_risk_score=effective_risk,
        flags=flags,
        warnings=warnings,
        safe=severity in SAFE_SEVERITIES,
    )
