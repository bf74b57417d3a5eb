"""
Tests for stages 1 and 2 — raw accumulation and normalization.
"""

import pytest

from app.core.normalizer import (
    accumulate_raw,
    category_multiplier,
    normalize_scores,
    round_half_up,
)
from app.models.question_models import CATEGORY_WEIGHTS
from app.models.session_models import Answer


# --- Stage 1: raw accumulation ---

def test_weighted_mean_per_category(make_answer):
    raw = accumulate_raw([
        make_answer("f1", 8, "feasibility", 2.0),
        make_answer("f2", 4, "feasibility", 1.0),
    ])
    assert raw["feasibility"] == pytest.approx(20 / 3)


def test_category_is_lowercased(make_answer):
    raw = accumulate_raw([
        make_answer("f1", 6, "Feasibility", 1.0),
        make_answer("f2", 8, "FEASIBILITY", 1.0),
    ])
    assert list(raw) == ["feasibility"]
    assert raw["feasibility"] == pytest.approx(7.0)


def test_missing_weight_counts_as_one(make_answer):
    raw = accumulate_raw([
        make_answer("r1", 6, "risk", None),
        make_answer("r2", 2, "risk", 3.0),
    ])
    assert raw["risk"] == pytest.approx(3.0)


def test_answers_without_category_are_skipped(make_answer):
    raw = accumulate_raw([
        make_answer("x", 9, None, 1.0),
        make_answer("y", 9, "", 1.0),
        make_answer("i1", 5, "impact", 1.0),
    ])
    assert raw == {"impact": pytest.approx(5.0)}


def test_non_numeric_value_is_skipped():
    raw = accumulate_raw([
        Answer(question_id="u1", value=None, category="urgency", weight=1.0),
        Answer(question_id="u2", value=4, category="urgency", weight=1.0),
    ])
    assert raw["urgency"] == pytest.approx(4.0)


def test_zero_weight_total_scores_zero(make_answer):
    raw = accumulate_raw([make_answer("u1", 5, "urgency", 0.0)])
    assert raw["urgency"] == 0.0


def test_no_answers_gives_empty_raw():
    assert accumulate_raw([]) == {}


# --- Stage 2: normalization ---

@pytest.mark.parametrize(
    "category, raw, expected",
    [
        ("feasibility", 6.0, 75),   # ×1.25
        ("risk", 5.0, 75),          # ×1.5
        ("impact", 5.0, 70),        # ×1.4
        ("resources", 4.0, 46),     # ×1.15
        ("urgency", 7.0, 70),       # ×1.0
        ("budget", 7.0, 70),        # unregistered → ×1.0
    ],
)
def test_normalize_applies_category_multiplier(category, raw, expected):
    assert normalize_scores({category: raw}) == {category: expected}


def test_normalize_clamps_to_hundred():
    scores = normalize_scores({"feasibility": 10.0, "risk": 10.0, "impact": 10.0})
    assert scores == {"feasibility": 100, "risk": 100, "impact": 100}


def test_normalize_clamps_negative_to_zero():
    assert normalize_scores({"risk": -4.0}) == {"risk": 0}


def test_multiplier_is_capped_and_positive():
    for category in CATEGORY_WEIGHTS:
        multiplier = category_multiplier(category)
        assert 0 < multiplier <= 1.5
    assert category_multiplier("risk") == 1.5
    assert category_multiplier("unknown") == 1.0


def test_normalized_scores_are_bounded_integers():
    raw = {c: v / 2 for c, v in zip(CATEGORY_WEIGHTS, range(0, 21, 4))}
    for value in normalize_scores(raw).values():
        assert isinstance(value, int)
        assert 0 <= value <= 100


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(3.49) == 3
    assert round_half_up(99.5) == 100
