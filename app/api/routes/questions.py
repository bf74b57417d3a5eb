"""
Questions Route — GET /questions

Read-only dump of the question catalog.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.dependencies import get_question_catalog
from app.core.catalog import QuestionCatalog
from app.models.api_models import QuestionsResponse

router = APIRouter(tags=["questions"])


@router.get("/questions", response_model=QuestionsResponse)
async def list_questions(catalog: QuestionCatalog = Depends(get_question_catalog)):
    return QuestionsResponse(questions=catalog.list_questions())
