"""
Confidence Scorer — stage 5 of the scoring pipeline.

    coverage      = min(answer_count / full_coverage, 1)
    flag_penalty  = flags × 0.1 + warnings × 0.05
    spread        = mean absolute deviation of the category scores
    spread_factor = 1 - min(spread / 60, 0.3)
    confidence    = round(clamp(coverage×70 + spread_factor×30 - flag_penalty×30, 0, 100))
"""

from __future__ import annotations

from app.core.normalizer import clamp, round_half_up
from app.models.result_models import ConfidenceLabel, ConfidenceScore, RiskReport

FULL_COVERAGE_ANSWERS = 10


def mean_absolute_deviation(values: list[int]) -> float:
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    return sum(abs(v - mean) for v in values) / len(values)


def confidence_label(score: int) -> ConfidenceLabel:
    if score >= 75:
        return ConfidenceLabel.HIGH
    if score >= 50:
        return ConfidenceLabel.MODERATE
    return ConfidenceLabel.LOW


def compute_confidence(
    scores: dict[str, int],
    risk: RiskReport,
    answer_count: int,
    full_coverage: int = FULL_COVERAGE_ANSWERS,
) -> ConfidenceScore:
    coverage = min(answer_count / full_coverage, 1.0) if full_coverage > 0 else 1.0
    flag_penalty = len(risk.flags) * 0.1 + len(risk.warnings) * 0.05
    spread = mean_absolute_deviation(list(scores.values()))
    spread_factor = 1 - min(spread / 60, 0.3)

    raw = coverage * 70 + spread_factor * 30 - flag_penalty * 30
    score = round_half_up(clamp(raw, 0, 100))
    return ConfidenceScore(score=score, label=confidence_label(score))
