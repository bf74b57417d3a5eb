"""
Score Normalizer — stages 1 and 2 of the scoring pipeline.

Stage 1 folds answers into a weighted mean per category on the 0-10 answer
scale. Stage 2 rescales each mean to 0-100 with a per-category ceiling
multiplier, so heavily weighted categories swing the score further:

    scaled = (raw / 10) × 100 × min(category_weight / 2 + 0.5, 1.5)

The result is clamped to [0, 100] and rounded half-up.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from app.models.question_models import CATEGORY_WEIGHTS, DEFAULT_CATEGORY_WEIGHT
from app.models.session_models import Answer

MAX_CATEGORY_MULTIPLIER = 1.5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def accumulate_raw(answers: Iterable[Answer]) -> dict[str, float]:
    """
    Weighted mean of answer values per lowercased category.

    Answers with no category or a non-numeric value are skipped; a missing
    weight counts as 1. A category whose weights sum to zero scores 0.
    """
    sums: dict[str, float] = {}
    weight_totals: dict[str, float] = {}

    for answer in answers:
        if not answer.category:
            continue
        value = answer.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue

        category = answer.category.lower()
        weight = answer.weight if answer.weight is not None else 1.0
        sums[category] = sums.get(category, 0.0) + value * weight
        weight_totals[category] = weight_totals.get(category, 0.0) + weight

    return {
        category: (sums[category] / weight_totals[category]) if weight_totals[category] else 0.0
        for category in sums
    }


def category_multiplier(category: str) -> float:
    weight = CATEGORY_WEIGHTS.get(category, DEFAULT_CATEGORY_WEIGHT)
    return min(weight / 2 + 0.5, MAX_CATEGORY_MULTIPLIER)


def normalize_scores(raw: dict[str, float]) -> dict[str, int]:
    """Rescale raw 0-10 category means to integer 0-100 scores."""
    scores: dict[str, int] = {}
    for category, raw_value in raw.items():
        scaled = (raw_value / 10) * 100 * category_multiplier(category)
        scores[category] = round_half_up(clamp(scaled, 0, 100))
    return scores
