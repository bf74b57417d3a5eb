"""
Question Catalog — the fixed, ordered questionnaire.

Read-only: the scoring core only needs ``id``, ``category`` and ``weight``
from each entry; the rest is presentation for the client. Risk questions are
phrased so that a high answer means *safer*.
"""

from __future__ import annotations

from app.models.question_models import Category, Question, QuestionOption, QuestionType

QUESTIONS: tuple[Question, ...] = (
    Question(
        id="feas_1",
        text="How technically achievable is this with what you know today?",
        category=Category.FEASIBILITY,
        weight=2.0,
        type=QuestionType.SCALE,
        min=1,
        max=10,
        hint="1 = needs breakthroughs, 10 = done it before",
    ),
    Question(
        id="feas_2",
        text="How realistic is the timeline you have in mind?",
        category=Category.FEASIBILITY,
        weight=1.5,
        type=QuestionType.CHOICE,
        options=[
            QuestionOption(label="Unrealistic", value=2),
            QuestionOption(label="Tight", value=5),
            QuestionOption(label="Comfortable", value=8),
            QuestionOption(label="Generous", value=10),
        ],
    ),
    Question(
        id="risk_1",
        text="If this goes wrong, how recoverable is the situation?",
        category=Category.RISK,
        weight=3.0,
        type=QuestionType.SCALE,
        min=1,
        max=10,
        hint="1 = irreversible damage, 10 = trivially undone",
    ),
    Question(
        id="risk_2",
        text="How well understood are the downsides?",
        category=Category.RISK,
        weight=2.0,
        type=QuestionType.CHOICE,
        options=[
            QuestionOption(label="Mostly unknown", value=1),
            QuestionOption(label="Partially mapped", value=4),
            QuestionOption(label="Well mapped", value=7),
            QuestionOption(label="Fully mitigated", value=10),
        ],
    ),
    Question(
        id="impact_1",
        text="How much will this move your most important goal?",
        category=Category.IMPACT,
        weight=2.5,
        type=QuestionType.SCALE,
        min=1,
        max=10,
    ),
    Question(
        id="impact_2",
        text="How many people benefit from the outcome?",
        category=Category.IMPACT,
        weight=1.0,
        type=QuestionType.CHOICE,
        options=[
            QuestionOption(label="Just me", value=2),
            QuestionOption(label="My team", value=5),
            QuestionOption(label="The organisation", value=8),
            QuestionOption(label="Customers or the public", value=10),
        ],
    ),
    Question(
        id="res_1",
        text="Do you have the budget this needs?",
        category=Category.RESOURCES,
        weight=2.0,
        type=QuestionType.SCALE,
        min=1,
        max=10,
        hint="1 = no funding, 10 = fully funded",
    ),
    Question(
        id="res_2",
        text="Do you have the people and time available?",
        category=Category.RESOURCES,
        weight=1.5,
        type=QuestionType.CHOICE,
        options=[
            QuestionOption(label="No capacity", value=1),
            QuestionOption(label="Would need to borrow", value=4),
            QuestionOption(label="Mostly available", value=7),
            QuestionOption(label="Fully available", value=10),
        ],
    ),
    Question(
        id="urg_1",
        text="How costly is waiting another three months?",
        category=Category.URGENCY,
        weight=1.5,
        type=QuestionType.SCALE,
        min=1,
        max=10,
    ),
    Question(
        id="urg_2",
        text="Is there an external deadline?",
        category=Category.URGENCY,
        weight=0.5,
        type=QuestionType.CHOICE,
        options=[
            QuestionOption(label="None", value=1),
            QuestionOption(label="Soft", value=5),
            QuestionOption(label="Hard", value=10),
        ],
    ),
)


class QuestionCatalog:
    """Ordered, read-only question source with id lookup."""

    def __init__(self, questions: tuple[Question, ...] | list[Question] = QUESTIONS) -> None:
        self._questions = tuple(questions)
        self._by_id = {q.id: q for q in self._questions}
        if len(self._by_id) != len(self._questions):
            raise ValueError("Question ids must be unique")

    def list_questions(self) -> list[Question]:
        return list(self._questions)

    def get(self, question_id: str) -> Question | None:
        return self._by_id.get(question_id)

    def next_unanswered(self, answered_ids: set[str]) -> Question | None:
        """First question in catalog order whose id is not in ``answered_ids``."""
        for question in self._questions:
            if question.id not in answered_ids:
                return question
        return None

    @property
    def total(self) -> int:
        return len(self._questions)
