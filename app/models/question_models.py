"""
Question Catalog Data Models — Categories, question definitions, and weights.
"""

from __future__ import annotations

from enum import Enum

from pydantic import ConfigDict, Field

from app.models.base import CamelModel


class Category(str, Enum):
    FEASIBILITY = "feasibility"
    RISK = "risk"
    IMPACT = "impact"
    RESOURCES = "resources"
    URGENCY = "urgency"


# Per-category weight registry used during normalization
CATEGORY_WEIGHTS: dict[str, float] = {
    Category.FEASIBILITY.value: 1.5,
    Category.RISK.value: 2.0,
    Category.IMPACT.value: 1.8,
    Category.RESOURCES.value: 1.3,
    Category.URGENCY.value: 1.0,
}

DEFAULT_CATEGORY_WEIGHT = 1.0


class QuestionType(str, Enum):
    SCALE = "scale"
    CHOICE = "choice"


class QuestionOption(CamelModel):
    """A labelled value for a choice question."""

    label: str
    value: int = Field(..., ge=1, le=10)


class Question(CamelModel):
    """A single immutable questionnaire entry."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique question identifier, e.g. 'feas_1'")
    text: str
    category: Category
    weight: float = Field(..., gt=0, description="Relative weight within its category")
    type: QuestionType = QuestionType.SCALE
    options: list[QuestionOption] | None = None
    min: int | None = Field(default=None, ge=1, le=10)
    max: int | None = Field(default=None, ge=1, le=10)
    hint: str | None = None

    def accepts(self, value: int) -> bool:
        """Whether ``value`` lies inside this question's value domain."""
        if self.type == QuestionType.CHOICE:
            return any(opt.value == value for opt in self.options or [])
        low = self.min if self.min is not None else 1
        high = self.max if self.max is not None else 10
        return low <= value <= high
